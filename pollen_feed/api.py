"""HTTP API feeding the gauge page."""

from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from .config import settings
from .data_sources import build_data_source
from .dates import resolve_requested_date, to_human_label
from .domain import CategoryData, category_vocabulary, parse_category_codes, resolve_interval
from .errors import InvalidDateError, InvalidIntervalError, SensorApiError
from .fetcher import fetch_category_data
from .gauge import GaugeReading, build_gauge_readings, gauge_options
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="pollen_feed/api")

router = APIRouter()
DATA_SOURCE = build_data_source(settings)


class GaugeReadingModel(BaseModel):
    """One gauge tile as serialized for the page."""
    index: int
    category_code: str
    category_label: str
    moment: Optional[str] = None
    time_label: str
    ppm: float
    ppm_label: str
    misery_percent: Optional[float] = None
    misery_label: str
    gauge_value: float
    zone: Optional[str] = None


class GaugesResponse(BaseModel):
    """Gauges for one day plus the context the page displays around them."""
    date: str
    date_label: str
    interval: str
    from_cache: bool
    fetched_at: Optional[datetime] = None
    requested_codes: list[str]
    gauges: list[GaugeReadingModel]
    skipped_codes: list[str]
    gauge_options: dict[str, Any]


class CategoryModel(BaseModel):
    code: str
    name: str


class CategoriesResponse(BaseModel):
    categories: list[CategoryModel]


def _to_model(reading: GaugeReading) -> GaugeReadingModel:
    return GaugeReadingModel(
        index=reading.index,
        category_code=reading.category_code,
        category_label=reading.category_label,
        moment=reading.moment,
        time_label=reading.time_label,
        ppm=reading.ppm,
        ppm_label=reading.ppm_label,
        misery_percent=reading.misery_percent,
        misery_label=reading.misery_label,
        gauge_value=reading.gauge_value,
        zone=reading.zone,
    )


def _skipped_codes(data: CategoryData, readings: list[GaugeReading]) -> list[str]:
    """Requested codes that ended up without a gauge."""
    drawn = {r.index for r in readings}
    return [code for i, code in enumerate(data.requested_codes) if i not in drawn]


@router.get("/gauges", response_model=GaugesResponse)
def get_gauges(
    date: Optional[str] = Query(default=None),
    category_codes: Optional[str] = Query(default=None, alias="categoryCodes"),
    interval: Optional[str] = Query(default=None),
    no_cache: bool = Query(default=False, alias="noCache"),
):
    """Fetch (or reuse) the day's metrics and build one gauge per requested category."""
    codes = parse_category_codes(category_codes, settings.default_category_codes)
    try:
        requested_date = resolve_requested_date(date, tz_name=settings.timezone)
        resolved_interval = resolve_interval(interval, settings.default_interval)
    except (InvalidDateError, InvalidIntervalError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    logger.info(f"Gauges requested for {requested_date.isoformat()} ({resolved_interval.value}): {','.join(codes)}")
    try:
        data = fetch_category_data(
            codes,
            requested_date.isoformat(),
            resolved_interval.value,
            no_cache,
            settings=settings,
            data_source=DATA_SOURCE,
        )
    except SensorApiError as exc:
        logger.error(f"Sensor API failure: {exc}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Could not load sensor data: {exc}. Try reloading with noCache=true.",
        )

    readings = build_gauge_readings(data)
    return GaugesResponse(
        date=requested_date.isoformat(),
        date_label=to_human_label(requested_date),
        interval=resolved_interval.value,
        from_cache=data.from_cache,
        fetched_at=data.fetched_at,
        requested_codes=data.requested_codes or codes,
        gauges=[_to_model(r) for r in readings],
        skipped_codes=_skipped_codes(data, readings),
        gauge_options=gauge_options(),
    )


@router.get("/categories", response_model=CategoriesResponse)
def list_categories():
    """Return the known category code vocabulary."""
    return CategoriesResponse(
        categories=[CategoryModel(code=code, name=name) for code, name in category_vocabulary()]
    )


@router.get("/gauge/config")
def get_gauge_config() -> dict[str, Any]:
    """Return the gauge.js options used for every gauge."""
    return gauge_options()
