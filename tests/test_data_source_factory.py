import json
import os
import tempfile
import unittest

from pollen_feed.data_sources import pollensense_client
from pollen_feed.data_sources.base import CallableMetricsDataSource
from pollen_feed.data_sources.factory import DEFAULT_SOURCE_NAME, build_data_source
from pollen_feed.data_sources.json_file_source import JsonFileMetricsDataSource
from pollen_feed.errors import SensorApiError


class DummySettings:
    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)
        self.data_source = getattr(self, "data_source", DEFAULT_SOURCE_NAME)
        self.data_file = getattr(self, "data_file", None)
        self.api_url = getattr(self, "api_url", "https://example.test/metrics")
        self.api_key = getattr(self, "api_key", "k3y")
        self.request_timeout_seconds = getattr(self, "request_timeout_seconds", 3)


class TestDataSourceFactory(unittest.TestCase):
    def test_build_pollensense_default(self):
        ds = build_data_source(DummySettings())
        self.assertIsInstance(ds, CallableMetricsDataSource)

    def test_pollensense_source_binds_url_key_and_timeout(self):
        captured = {}

        class Session:
            def get(self, url, **kwargs):
                captured["url"] = url
                captured.update(kwargs)
                raise pollensense_client.requests.ConnectionError("offline")

        orig = pollensense_client.session
        pollensense_client.session = Session()
        try:
            ds = build_data_source(DummySettings())
            with self.assertRaises(SensorApiError):
                ds.fetch_metrics(interval="day", starting="a", ending="b")
        finally:
            pollensense_client.session = orig

        self.assertEqual(captured["url"], "https://example.test/metrics")
        self.assertEqual(captured["headers"], {"X-Ps-Key": "k3y"})
        self.assertEqual(captured["timeout"], 3)
        self.assertEqual(captured["params"]["interval"], "day")

    def test_unknown_source_raises(self):
        with self.assertRaises(ValueError):
            build_data_source(DummySettings(data_source="unknown-source"))

    def test_json_file_missing_path_raises(self):
        with self.assertRaises(ValueError):
            build_data_source(DummySettings(data_source="json_file", data_file=None))

    def test_json_file_source_replays_recording(self):
        body = {
            "Moments": ["2024-09-12T13:00:00Z"],
            "Categories": [{"CategoryCode": "POL", "CategoryDescription": "Pollen", "PPM3": [1.0]}],
        }
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "metrics.json")
            with open(path, "w", encoding="utf-8") as fh:
                json.dump(body, fh)

            ds = build_data_source(DummySettings(data_source="json_file", data_file=path))
            self.assertIsInstance(ds, JsonFileMetricsDataSource)
            metrics = ds.fetch_metrics(interval="hour", starting="a", ending="b")
        self.assertEqual(metrics.find("POL").ppm_values, [1.0])

    def test_json_file_source_unreadable_raises_sensor_api_error(self):
        ds = JsonFileMetricsDataSource("/nonexistent/metrics.json")
        with self.assertRaises(SensorApiError):
            ds.fetch_metrics(interval="hour", starting="a", ending="b")

    def test_json_file_source_non_object_categories_raise_sensor_api_error(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "metrics.json")
            with open(path, "w", encoding="utf-8") as fh:
                json.dump({"Moments": [], "Categories": [42]}, fh)

            ds = JsonFileMetricsDataSource(path)
            with self.assertRaises(SensorApiError):
                ds.fetch_metrics(interval="hour", starting="a", ending="b")


if __name__ == "__main__":
    unittest.main()
