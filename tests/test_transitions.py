import unittest

from gastracker.classify.transitions import Transition, detect_transition, should_notify
from gastracker.models.prices import Category

HIGH, AVERAGE, LOW = Category.HIGH, Category.AVERAGE, Category.LOW


class TestShouldNotify(unittest.TestCase):
    def test_no_previous_category_never_notifies(self):
        for category in Category:
            with self.subTest(category=category):
                self.assertFalse(should_notify(category, None))

    def test_same_category_never_notifies(self):
        for category in Category:
            with self.subTest(category=category):
                self.assertFalse(should_notify(category, category))

    def test_returning_to_average_never_notifies(self):
        self.assertFalse(should_notify(AVERAGE, HIGH))
        self.assertFalse(should_notify(AVERAGE, LOW))

    def test_leaving_average_notifies(self):
        self.assertTrue(should_notify(LOW, AVERAGE))
        self.assertTrue(should_notify(HIGH, AVERAGE))

    def test_jump_between_extremes_notifies(self):
        self.assertTrue(should_notify(LOW, HIGH))
        self.assertTrue(should_notify(HIGH, LOW))


class TestDetectTransition(unittest.TestCase):
    def test_returns_transition_when_firing(self):
        self.assertEqual(
            detect_transition(LOW, HIGH, 7),
            Transition(new=LOW, previous=HIGH, price=7),
        )

    def test_returns_none_when_suppressed(self):
        self.assertIsNone(detect_transition(HIGH, HIGH, 90))
        self.assertIsNone(detect_transition(AVERAGE, LOW, 30))
        self.assertIsNone(detect_transition(HIGH, None, 90))


if __name__ == "__main__":
    unittest.main()
