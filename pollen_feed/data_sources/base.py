"""Interfaces and helpers for metrics data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from pollen_feed.domain import MetricsResponse


class MetricsDataSource(Protocol):
    """Interface for anything that can provide category metrics for a window."""

    def fetch_metrics(self, *, interval: str, starting: str, ending: str) -> MetricsResponse:
        """Return moments and per-category series between two UTC timestamps."""
        ...


@dataclass
class CallableMetricsDataSource(MetricsDataSource):
    """Wrap a callable so it can be swapped for different backends."""

    metrics: Callable[..., MetricsResponse]

    def fetch_metrics(self, *, interval: str, starting: str, ending: str) -> MetricsResponse:
        """Delegate to the configured metrics callable."""
        return self.metrics(interval=interval, starting=starting, ending=ending)
