"""Helpers for fetching category metrics from the PollenSense sensor API."""
from __future__ import annotations

from typing import Optional

import requests

from pollen_feed.domain import MetricsResponse
from pollen_feed.errors import SensorApiError
from utils.logging_utils import get_tagged_logger, mask_url
logger = get_tagged_logger(__name__, tag='pollensense_client')

API_KEY_HEADER = "X-Ps-Key"

session = requests.Session()


def fetch_metrics(
    api_url: str,
    api_key: Optional[str],
    *,
    interval: str,
    starting: str,
    ending: str,
    timeout: float = 10,
) -> MetricsResponse:
    """Fetch every category's PPM3/Misery series between `starting` and `ending` (UTC)."""
    params = {
        "interval": interval,
        "starting": starting,
        "ending": ending,
    }
    headers = {API_KEY_HEADER: api_key} if api_key else {}
    if not api_key:
        logger.warning("No PollenSense API key configured; request will likely be rejected")

    logger.info("Requesting PollenSense metrics",
                extra={"url": mask_url(api_url), "interval": interval, "starting": starting, "ending": ending})
    try:
        resp = session.get(api_url, params=params, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        raise SensorApiError(f"Sensor API returned HTTP {status}", status_code=status) from exc
    except requests.RequestException as exc:
        raise SensorApiError(f"Sensor API request failed: {exc}") from exc

    try:
        data = resp.json()
    except ValueError as exc:
        raise SensorApiError("Sensor API returned a non-JSON body") from exc

    try:
        metrics = MetricsResponse.from_api(data)
    except (KeyError, TypeError, AttributeError) as exc:
        raise SensorApiError(f"Sensor API response is missing expected fields: {exc}") from exc

    logger.debug(f"Received {len(metrics.moments)} moments for {len(metrics.categories)} categories")
    return metrics
