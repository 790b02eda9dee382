"""Core domain types for PollenSense category readings."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from pollen_feed.errors import InvalidIntervalError


class Interval(str, Enum):
    """Aggregation intervals accepted by the metrics endpoint."""
    HOUR = "hour"
    DAY = "day"


class CategoryCode(str, Enum):
    """Particulate categories reported by PollenSense sensors."""
    POL = "POL"
    MOL = "MOL"
    WEE = "WEE"
    GRA = "GRA"
    TRE = "TRE"
    OTHPAR = "OTHPAR"
    AMB_IVA = "AMB-IVA"
    ART = "ART"
    CHE_AMA = "CHE-AMA"
    PLA = "PLA"
    ACE = "ACE"
    ALN = "ALN"
    BET = "BET"
    CAR = "CAR"
    CUP = "CUP"
    FRA = "FRA"
    MOR = "MOR"
    OLE = "OLE"
    PIN = "PIN"
    POP = "POP"
    QUE = "QUE"
    SAL = "SAL"
    ULM = "ULM"
    LOL = "LOL"
    POA = "POA"


CATEGORY_NAMES: dict[CategoryCode, str] = {
    CategoryCode.POL: "Pollen",
    CategoryCode.MOL: "Mold",
    CategoryCode.WEE: "Weed",
    CategoryCode.GRA: "Grass",
    CategoryCode.TRE: "Tree",
    CategoryCode.OTHPAR: "Other particles",
    CategoryCode.AMB_IVA: "Ragweed / marsh elder",
    CategoryCode.ART: "Mugwort / sagebrush",
    CategoryCode.CHE_AMA: "Goosefoot / amaranth",
    CategoryCode.PLA: "Plantain",
    CategoryCode.ACE: "Maple",
    CategoryCode.ALN: "Alder",
    CategoryCode.BET: "Birch",
    CategoryCode.CAR: "Hornbeam",
    CategoryCode.CUP: "Cypress / juniper",
    CategoryCode.FRA: "Ash",
    CategoryCode.MOR: "Mulberry",
    CategoryCode.OLE: "Olive",
    CategoryCode.PIN: "Pine",
    CategoryCode.POP: "Poplar / cottonwood",
    CategoryCode.QUE: "Oak",
    CategoryCode.SAL: "Willow",
    CategoryCode.ULM: "Elm",
    CategoryCode.LOL: "Ryegrass",
    CategoryCode.POA: "Bluegrass",
}


@dataclass
class CategorySeries:
    """One category's PPM3/Misery series, index-aligned with the response moments."""
    code: str
    description: str
    ppm_values: List[Optional[float]]
    misery_values: Optional[List[Optional[float]]] = None

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> "CategorySeries":
        """Build from a `Categories[]` entry of the metrics response."""
        if not isinstance(raw, Mapping):
            raise TypeError(f"Category entry must be an object, got {type(raw).__name__}")
        misery = raw.get("Misery")
        return cls(
            code=raw["CategoryCode"],
            description=raw.get("CategoryDescription") or "",
            ppm_values=list(raw.get("PPM3") or []),
            misery_values=list(misery) if misery is not None else None,
        )

    def to_api(self) -> dict[str, Any]:
        """Serialize back to the metrics response shape."""
        out: dict[str, Any] = {
            "CategoryCode": self.code,
            "CategoryDescription": self.description,
            "PPM3": list(self.ppm_values),
        }
        if self.misery_values is not None:
            out["Misery"] = list(self.misery_values)
        return out


@dataclass
class MetricsResponse:
    """Parsed body of the metrics endpoint."""
    moments: List[str]
    categories: List[CategorySeries]

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "MetricsResponse":
        if not isinstance(data, Mapping):
            raise TypeError(f"Metrics body must be an object, got {type(data).__name__}")
        return cls(
            moments=list(data["Moments"]),
            categories=[CategorySeries.from_api(c) for c in data["Categories"]],
        )

    def find(self, code: str) -> Optional[CategorySeries]:
        """Return the first series with a matching category code."""
        for category in self.categories:
            if category.code == code:
                return category
        return None


@dataclass
class CategoryData:
    """Moments plus one slot per requested code (None when the response had no match)."""
    moments: List[str]
    categories: List[Optional[CategorySeries]]
    fetched_at: Optional[dt.datetime] = None
    from_cache: bool = False
    requested_codes: List[str] = field(default_factory=list)


def parse_category_codes(raw: Optional[str], default: Sequence[str] = ("POL",)) -> List[str]:
    """Split a comma-separated `categoryCodes` parameter, falling back to `default`."""
    if not raw:
        return list(default)
    codes = [c.strip() for c in raw.split(",") if c.strip()]
    return codes or list(default)


def resolve_interval(raw: Optional[str], default: str = Interval.HOUR.value) -> Interval:
    """Map an `interval` parameter onto Interval, defaulting when absent."""
    value = (raw or default or "").strip().lower()
    try:
        return Interval(value)
    except ValueError as exc:
        allowed = ", ".join(i.value for i in Interval)
        raise InvalidIntervalError(f"Invalid interval '{raw}'; expected one of: {allowed}") from exc


def category_vocabulary() -> Iterable[tuple[str, str]]:
    """(code, name) pairs for every known category."""
    return [(code.value, CATEGORY_NAMES[code]) for code in CategoryCode]
