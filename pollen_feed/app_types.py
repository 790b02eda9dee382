"""Shared dataclasses for cached sensor responses."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from pollen_feed.domain import CategoryData, CategorySeries

RequestKey = Tuple[str, str, Tuple[str, ...]]  # (date, interval, category codes)


def make_request_key(date_iso: str, interval: str, codes: List[str]) -> RequestKey:
    return (date_iso, interval, tuple(codes))


@dataclass
class CachedResponse:
    """Projected metrics payload with the timestamp it was fetched."""
    fetched_at: datetime
    moments: List[str]
    categories: List[Optional[CategorySeries]]
    request_key: Optional[RequestKey] = field(default=None)

    def to_category_data(self) -> CategoryData:
        """Unwrap for callers, marking the data as served from cache."""
        codes = list(self.request_key[2]) if self.request_key else []
        return CategoryData(
            moments=self.moments,
            categories=self.categories,
            fetched_at=self.fetched_at,
            from_cache=True,
            requested_codes=codes,
        )
