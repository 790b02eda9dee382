"""Pick the latest usable reading from a null-padded category series."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from pollen_feed.domain import CategorySeries


@dataclass(frozen=True)
class LatestReading:
    """Most recent index with a PPM value, plus the matching misery and moment."""
    index: int
    ppm: float
    misery_percent: Optional[float]  # None when unavailable
    moment: Optional[str]


def latest_valid(series: Optional[CategorySeries], moments: Sequence[str]) -> Optional[LatestReading]:
    """Scan PPM3 backward for the last non-null value.

    The index is chosen by PPM alone: a misery value at some other index is
    never used, and a null misery at the chosen index means "unavailable".
    """
    if series is None:
        return None

    index = len(series.ppm_values) - 1
    while index >= 0 and series.ppm_values[index] is None:
        index -= 1
    if index < 0:
        return None

    misery_percent = None
    misery = series.misery_values
    if misery is not None and index < len(misery) and misery[index] is not None:
        misery_percent = round(misery[index] * 100, 2)

    moment = moments[index] if index < len(moments) else None
    return LatestReading(
        index=index,
        ppm=series.ppm_values[index],
        misery_percent=misery_percent,
        moment=moment,
    )
