import unittest

from pollen_feed.domain import CategoryData, CategorySeries
from pollen_feed.gauge import GAUGE_ZONES, build_gauge_readings, gauge_options, zone_for

MOMENTS = ["2024-09-12T13:00:00Z", "2024-09-12T14:00:00Z", "2024-09-12T15:00:00Z"]


class TestGaugeConfig(unittest.TestCase):
    def test_zones_match_thresholds(self):
        bounds = [(z.label, z.min, z.max) for z in GAUGE_ZONES]
        self.assertEqual(bounds, [("low", 0, 24), ("moderate", 25, 49), ("high", 50, 74), ("very high", 75, 100)])

    def test_options_carry_zones_and_range(self):
        opts = gauge_options()
        self.assertEqual(opts["minValue"], 0)
        self.assertEqual(opts["maxValue"], 100)
        self.assertEqual(opts["staticZones"][0], {"strokeStyle": "#30B32D", "min": 0, "max": 24})
        self.assertEqual(opts["staticLabels"]["labels"], [0, 25, 50, 75, 100])

    def test_zone_for(self):
        self.assertEqual(zone_for(0), "low")
        self.assertEqual(zone_for(24.5), "low")
        self.assertEqual(zone_for(25), "moderate")
        self.assertEqual(zone_for(74.99), "high")
        self.assertEqual(zone_for(75), "very high")
        self.assertEqual(zone_for(120), "very high")
        self.assertIsNone(zone_for(None))


class TestBuildGaugeReadings(unittest.TestCase):
    def test_skips_missing_and_empty_categories(self):
        pol = CategorySeries("POL", "Pollen", [1.0, 2.5, None], [0.1, 0.3, None])
        empty = CategorySeries("GRA", "Grass", [None, None, None], None)
        data = CategoryData(moments=MOMENTS, categories=[pol, None, empty], requested_codes=["POL", "XYZ", "GRA"])

        readings = build_gauge_readings(data)

        self.assertEqual(len(readings), 1)
        reading = readings[0]
        self.assertEqual(reading.index, 0)
        self.assertEqual(reading.category_label, "Pollen")
        self.assertEqual(reading.time_label, "As of 2:00 PM")
        self.assertEqual(reading.gauge_value, 30.0)
        self.assertEqual(reading.zone, "moderate")
        self.assertEqual(reading.ppm_label, "PPM: 2.50 | Misery: 30.00%")

    def test_unavailable_misery_draws_zero_with_label(self):
        mol = CategorySeries("MOL", "", [4.0], None)
        readings = build_gauge_readings(CategoryData(moments=MOMENTS[:1], categories=[mol]))
        self.assertEqual(readings[0].gauge_value, 0.0)
        self.assertIsNone(readings[0].zone)
        self.assertEqual(readings[0].category_label, "Unknown Category")
        self.assertEqual(readings[0].ppm_label, "PPM: 4.00 | Misery: Not Available")

    def test_date_only_moment_still_draws_gauge(self):
        pol = CategorySeries("POL", "Pollen", [1.0], [0.1])
        readings = build_gauge_readings(CategoryData(moments=["2024-09-12"], categories=[pol]))
        self.assertEqual(len(readings), 1)
        self.assertEqual(readings[0].time_label, "")
        self.assertEqual(readings[0].gauge_value, 10.0)

    def test_keeps_request_order(self):
        a = CategorySeries("GRA", "Grass", [1.0], [0.5])
        b = CategorySeries("POL", "Pollen", [2.0], [0.8])
        readings = build_gauge_readings(CategoryData(moments=MOMENTS[:1], categories=[a, b]))
        self.assertEqual([r.category_code for r in readings], ["GRA", "POL"])
        self.assertEqual([r.index for r in readings], [0, 1])


if __name__ == "__main__":
    unittest.main()
