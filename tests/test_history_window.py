import random
import unittest
from datetime import datetime, timedelta, timezone

from gastracker.history.window import HistoryWindow
from gastracker.models.prices import Category, Sample

T0 = datetime(2021, 5, 1, tzinfo=timezone.utc)


def sample(hour, price=20, category=Category.AVERAGE):
    return Sample(price=price, ts=T0 + timedelta(hours=hour), category=category)


class TestHistoryWindow(unittest.TestCase):
    def test_empty_window(self):
        window = HistoryWindow.empty(capacity=3)
        self.assertEqual(len(window), 0)
        self.assertTrue(window.is_empty())
        self.assertIsNone(window.most_recent())
        self.assertIsNone(window.oldest())

    def test_most_recent_scans_by_timestamp_not_position(self):
        window = HistoryWindow((sample(5, price=1), sample(9, price=2), sample(2, price=3)), 10)
        self.assertEqual(window.most_recent().price, 2)
        self.assertEqual(window.oldest().price, 3)

    def test_ties_pick_first_in_stored_order(self):
        window = HistoryWindow((sample(1, price=1), sample(4, price=2), sample(4, price=3)), 10)
        self.assertEqual(window.most_recent().price, 2)

        window = HistoryWindow((sample(0, price=7), sample(0, price=8), sample(4, price=9)), 10)
        self.assertEqual(window.oldest().price, 7)

    def test_append_under_capacity_keeps_everything(self):
        window = HistoryWindow.empty(capacity=3)
        window, evicted = window.append(sample(0))
        window, evicted2 = window.append(sample(1))
        self.assertEqual(len(window), 2)
        self.assertIsNone(evicted)
        self.assertIsNone(evicted2)

    def test_append_returns_new_window(self):
        window = HistoryWindow.empty(capacity=3)
        grown, _ = window.append(sample(0))
        self.assertEqual(len(window), 0)
        self.assertEqual(len(grown), 1)

    def test_append_at_capacity_evicts_exactly_the_oldest(self):
        # Stored out of time order on purpose.
        window = HistoryWindow((sample(3), sample(1, price=11), sample(2)), capacity=3)
        window, evicted = window.append(sample(4))

        self.assertEqual(len(window), 3)
        self.assertEqual(evicted.ts, T0 + timedelta(hours=1))
        self.assertEqual(evicted.price, 11)
        self.assertNotIn(evicted, list(window))

    def test_eviction_tie_removes_first_in_stored_order(self):
        window = HistoryWindow((sample(0, price=1), sample(0, price=2)), capacity=2)
        window, evicted = window.append(sample(1, price=3))
        self.assertEqual(evicted.price, 1)
        self.assertEqual(sorted(window.prices()), [2, 3])

    def test_never_exceeds_capacity(self):
        rng = random.Random(7)
        capacity = 5
        window = HistoryWindow.empty(capacity)
        for i in range(50):
            new = sample(rng.randint(0, 1000), price=i + 1)
            pre_eviction = list(window) + [new]
            window, evicted = window.append(new)
            self.assertLessEqual(len(window), capacity)
            if evicted is not None:
                self.assertEqual(len(window), capacity)
                self.assertEqual(evicted.ts, min(s.ts for s in pre_eviction))

    def test_constructor_rejects_oversized_window(self):
        with self.assertRaises(ValueError):
            HistoryWindow((sample(0), sample(1)), capacity=1)

    def test_from_samples_trims_to_most_recent(self):
        loaded = [sample(h, price=h + 1) for h in (5, 0, 3, 1, 4)]
        window = HistoryWindow.from_samples(loaded, capacity=3)
        self.assertEqual(sorted(window.prices()), [4, 5, 6])

    def test_chronological(self):
        window = HistoryWindow((sample(2, price=3), sample(0, price=1), sample(1, price=2)), 5)
        self.assertEqual([s.price for s in window.chronological()], [1, 2, 3])

    def test_capacity_must_be_positive(self):
        with self.assertRaises(ValueError):
            HistoryWindow.empty(capacity=0)


if __name__ == "__main__":
    unittest.main()
