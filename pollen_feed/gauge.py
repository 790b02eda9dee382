"""Gauge configuration and the readings handed to the browser gauge widget."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pollen_feed.dates import format_time_label
from pollen_feed.domain import CategoryData
from pollen_feed.series import latest_valid
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="gauge")

GAUGE_MIN = 0
GAUGE_MAX = 100
UNKNOWN_CATEGORY_LABEL = "Unknown Category"


@dataclass(frozen=True)
class GaugeZone:
    """A coloured band of the misery gauge."""
    label: str
    color: str
    min: int
    max: int


GAUGE_ZONES: List[GaugeZone] = [
    GaugeZone(label="low", color="#30B32D", min=0, max=24),
    GaugeZone(label="moderate", color="#FFDD00", min=25, max=49),
    GaugeZone(label="high", color="#F39C12", min=50, max=74),
    GaugeZone(label="very high", color="#E74C3C", min=75, max=100),
]


@dataclass(frozen=True)
class GaugeReading:
    """Everything one gauge tile needs: the misery value plus display-only labels."""
    index: int
    category_code: str
    category_label: str
    moment: Optional[str]
    time_label: str
    ppm: float
    misery_percent: Optional[float]
    gauge_value: float
    zone: Optional[str]

    @property
    def misery_label(self) -> str:
        if self.misery_percent is None:
            return "Not Available"
        return f"{self.misery_percent:.2f}%"

    @property
    def ppm_label(self) -> str:
        return f"PPM: {self.ppm:.2f} | Misery: {self.misery_label}"


def zone_for(value: Optional[float]) -> Optional[str]:
    """Classify a 0-100 value; a value between bands belongs to the lower band."""
    if value is None:
        return None
    clamped = min(max(value, GAUGE_MIN), GAUGE_MAX)
    for zone, upper in zip(GAUGE_ZONES, GAUGE_ZONES[1:]):
        if clamped < upper.min:
            return zone.label
    return GAUGE_ZONES[-1].label


def gauge_options() -> Dict[str, Any]:
    """gauge.js option object for the misery gauges."""
    return {
        "angle": 0.15,
        "lineWidth": 0.44,
        "radiusScale": 1,
        "pointer": {"length": 0.8, "strokeWidth": 0.035, "color": "#000000"},
        "limitMax": True,
        "limitMin": True,
        "highDpiSupport": True,
        "staticZones": [
            {"strokeStyle": zone.color, "min": zone.min, "max": zone.max} for zone in GAUGE_ZONES
        ],
        "staticLabels": {
            "font": "12px sans-serif",
            "labels": [0, 25, 50, 75, 100],
            "color": "#000000",
            "fractionDigits": 0,
        },
        "renderTicks": {
            "divisions": 4,
            "divWidth": 1.1,
            "divLength": 0.7,
            "divColor": "#333333",
            "subDivisions": 3,
            "subLength": 0.5,
            "subWidth": 0.6,
            "subColor": "#666666",
        },
        "minValue": GAUGE_MIN,
        "maxValue": GAUGE_MAX,
    }


def build_gauge_readings(data: CategoryData) -> List[GaugeReading]:
    """One reading per present category that has a non-null PPM, in request order.

    Categories missing from the response, or with no valid point, produce no
    reading at all.
    """
    readings: List[GaugeReading] = []
    for index, series in enumerate(data.categories):
        if series is None:
            continue
        latest = latest_valid(series, data.moments)
        if latest is None:
            logger.debug(f"No valid PPM value for {series.code}; skipping gauge")
            continue
        gauge_value = latest.misery_percent if latest.misery_percent is not None else float(GAUGE_MIN)
        readings.append(
            GaugeReading(
                index=index,
                category_code=series.code,
                category_label=series.description or UNKNOWN_CATEGORY_LABEL,
                moment=latest.moment,
                time_label=format_time_label(latest.moment) if latest.moment else "",
                ppm=latest.ppm,
                misery_percent=latest.misery_percent,
                gauge_value=gauge_value,
                zone=zone_for(latest.misery_percent),
            )
        )
    return readings
