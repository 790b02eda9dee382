"""Metrics data source that replays a saved PollenSense response from disk."""
from __future__ import annotations

import json
from pathlib import Path

from pollen_feed.domain import MetricsResponse
from pollen_feed.errors import SensorApiError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/json_file")


class JsonFileMetricsDataSource:
    """Serve one recorded metrics body regardless of the requested window.

    Handy for working on the page offline; the file is the raw JSON body of a
    `GET .../metrics` call.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @classmethod
    def from_path(cls, path: str | Path) -> "JsonFileMetricsDataSource":
        return cls(path)

    def fetch_metrics(self, *, interval: str, starting: str, ending: str) -> MetricsResponse:
        """Load and parse the recorded body."""
        logger.info("Loading recorded metrics",
                    extra={"path": str(self.path), "interval": interval, "starting": starting, "ending": ending})
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise SensorApiError(f"Could not read recorded metrics from {self.path}: {exc}") from exc
        try:
            return MetricsResponse.from_api(data)
        except (KeyError, TypeError, AttributeError) as exc:
            raise SensorApiError(f"Recorded metrics are missing expected fields: {exc}") from exc
