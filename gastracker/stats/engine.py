from __future__ import annotations

import math
from fractions import Fraction
from typing import Iterable

from gastracker.errors import InsufficientDataError
from gastracker.models.prices import PriceStatistics, Sample


def compute_statistics(samples: Iterable[Sample]) -> PriceStatistics:
    """
    Mean and Bessel-corrected standard deviation of the sample prices.

    Two passes: the mean first, then the squared deviations from it. Both
    are exact rationals over the integer prices, so nothing cancels or
    rounds away however large the prices are; the only rounding is the
    final conversion to float. A single sample has stddev 0.0. An empty
    input raises InsufficientDataError.
    """
    prices = [s.price for s in samples]
    if not prices:
        raise InsufficientDataError("no gas prices")

    count = len(prices)
    mean = Fraction(sum(prices), count)

    if count == 1:
        return PriceStatistics(mean=float(mean), stddev=0.0, count=count)

    sum_squares = sum((p - mean) ** 2 for p in prices)
    stddev = math.sqrt(sum_squares / (count - 1))
    return PriceStatistics(mean=float(mean), stddev=stddev, count=count)
