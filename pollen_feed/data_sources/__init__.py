"""Data source factories for plugging different metrics backends."""

from .base import CallableMetricsDataSource, MetricsDataSource
from .factory import build_data_source
from .json_file_source import JsonFileMetricsDataSource
from .pollensense_client import fetch_metrics

__all__ = [
    "build_data_source",
    "CallableMetricsDataSource",
    "JsonFileMetricsDataSource",
    "MetricsDataSource",
    "fetch_metrics",
]
