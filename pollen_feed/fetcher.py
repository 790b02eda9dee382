"""Build the metrics request for a day and decide between cached and live data."""
from __future__ import annotations

import datetime as dt
from typing import List, Optional, Sequence

from pollen_feed import cache_manager
from pollen_feed.app_types import CachedResponse, make_request_key
from pollen_feed.cache_store import CacheStore
from pollen_feed.config import Settings, settings as default_settings
from pollen_feed.data_sources import MetricsDataSource, build_data_source
from pollen_feed.dates import resolve_requested_date, to_utc_window
from pollen_feed.domain import CategoryData, resolve_interval
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="fetcher")


def fetch_category_data(
    category_codes: Sequence[str],
    date_param: Optional[str] = None,
    interval_param: Optional[str] = None,
    no_cache: bool = False,
    *,
    settings: Settings | None = None,
    store: CacheStore | None = None,
    data_source: MetricsDataSource | None = None,
    today: Optional[dt.date] = None,
) -> CategoryData:
    """Return moments and one series slot per requested code for the requested day.

    A fresh cached response is returned as-is, even when it was fetched for a
    different category set, unless `settings.cache_match_request` is on.
    Otherwise one metrics request is made and its projection replaces the
    cached entry. SensorApiError propagates and leaves the cache untouched.
    """
    settings = settings or default_settings
    store = store or cache_manager.get_store()
    codes: List[str] = list(category_codes)

    date = resolve_requested_date(date_param, today=today, tz_name=settings.timezone)
    window = to_utc_window(date)
    interval = resolve_interval(interval_param, settings.default_interval)
    request_key = make_request_key(date.isoformat(), interval.value, codes)

    if no_cache:
        logger.info("Cache bypass requested")
    else:
        entry = store.read()
        if store.is_fresh(entry):
            if settings.cache_match_request and entry.request_key != request_key:
                logger.info("Cached response was fetched for a different request; refetching",
                            extra={"cached": entry.request_key, "requested": request_key})
            else:
                logger.info("Serving cached response", extra={"fetched_at": entry.fetched_at.isoformat()})
                return entry.to_category_data()
        elif entry is not None:
            logger.debug("Cached response is stale")

    data_source = data_source or build_data_source(settings)
    metrics = data_source.fetch_metrics(
        interval=interval.value,
        starting=window.starting,
        ending=window.ending,
    )

    categories = [metrics.find(code) for code in codes]
    missing = [code for code, series in zip(codes, categories) if series is None]
    if missing:
        logger.warning(f"No series in response for categories: {', '.join(missing)}")

    entry = CachedResponse(
        fetched_at=store.now(),
        moments=metrics.moments,
        categories=categories,
        request_key=request_key,
    )
    store.write(entry)

    return CategoryData(
        moments=entry.moments,
        categories=entry.categories,
        fetched_at=entry.fetched_at,
        from_cache=False,
        requested_codes=codes,
    )
