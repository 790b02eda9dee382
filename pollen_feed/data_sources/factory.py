"""Factory helpers for choosing a metrics data source at startup."""

from __future__ import annotations

from functools import partial

from pollen_feed import config
from pollen_feed.data_sources.base import CallableMetricsDataSource, MetricsDataSource
from pollen_feed.data_sources.pollensense_client import fetch_metrics
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "pollensense"


def build_data_source(settings: config.Settings | None = None) -> MetricsDataSource:
    """Instantiate the configured metrics data source."""
    settings = settings or config.settings
    source = (settings.data_source or DEFAULT_SOURCE_NAME).lower()

    if source == "pollensense":
        logger.info("Using PollenSense data source", extra={"api_url": mask_url(settings.api_url)})
        return CallableMetricsDataSource(
            metrics=partial(
                fetch_metrics,
                settings.api_url,
                settings.api_key,
                timeout=settings.request_timeout_seconds,
            ),
        )

    if source == "json_file":
        from .json_file_source import JsonFileMetricsDataSource

        path = settings.data_file
        if not path:
            raise ValueError("data_file must be set for the json_file data source")
        logger.info("Using recorded JSON data source", extra={"path": path})
        return JsonFileMetricsDataSource.from_path(path)

    raise ValueError(f"Unknown data source '{source}'")
