import unittest
from datetime import datetime, timezone

from gastracker.models.prices import Category, Sample


class TestCategory(unittest.TestCase):
    def test_labels(self):
        self.assertEqual(str(Category.HIGH), "High")
        self.assertEqual(str(Category.AVERAGE), "Average")
        self.assertEqual(str(Category.LOW), "Low")

    def test_from_label(self):
        for category in Category:
            self.assertIs(Category.from_label(category.value), category)

    def test_unknown_label_is_rejected(self):
        for bad in ("high", "Medium", "", None, 1):
            with self.subTest(label=bad):
                with self.assertRaises(ValueError):
                    Category.from_label(bad)


class TestSample(unittest.TestCase):
    def test_record_round_trip(self):
        sample = Sample(
            price=31,
            ts=datetime(2021, 5, 1, 13, 0, tzinfo=timezone.utc),
            category=Category.HIGH,
        )
        record = sample.to_record()
        self.assertEqual(
            record,
            {"price": 31, "timestamp": "2021-05-01T13:00:00+00:00", "category": "High"},
        )
        self.assertEqual(Sample.from_record(record), sample)

    def test_from_record_accepts_zulu_and_offsets(self):
        a = Sample.from_record({"price": 5, "timestamp": "2021-05-01T13:00:00Z", "category": "Low"})
        b = Sample.from_record(
            {"price": 5, "timestamp": "2021-05-01T15:00:00+02:00", "category": "Low"}
        )
        self.assertEqual(a.ts, b.ts)

    def test_naive_timestamp_is_utc(self):
        sample = Sample(price=1, ts=datetime(2021, 1, 1), category=Category.AVERAGE)
        self.assertEqual(sample.ts.tzinfo, timezone.utc)

    def test_from_record_rejects_bad_records(self):
        bad_records = [
            {"price": 5, "timestamp": "2021-05-01T13:00:00Z"},
            {"price": 5, "timestamp": "2021-05-01T13:00:00Z", "category": "Medium"},
            {"price": 5, "timestamp": "yesterday", "category": "Low"},
            {"price": "5", "timestamp": "2021-05-01T13:00:00Z", "category": "Low"},
            {"price": 0, "timestamp": "2021-05-01T13:00:00Z", "category": "Low"},
            {"price": 5.5, "timestamp": "2021-05-01T13:00:00Z", "category": "Low"},
            ["not", "a", "record"],
        ]
        for record in bad_records:
            with self.subTest(record=record):
                with self.assertRaises(ValueError):
                    Sample.from_record(record)

    def test_sample_is_immutable(self):
        sample = Sample(price=1, ts=datetime(2021, 1, 1), category=Category.AVERAGE)
        with self.assertRaises(AttributeError):
            sample.price = 2


if __name__ == "__main__":
    unittest.main()
