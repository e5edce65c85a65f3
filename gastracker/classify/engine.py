from __future__ import annotations

from gastracker.models.prices import Category, PriceStatistics


def categorize(price: int, stats: PriceStatistics) -> Category:
    """
    One-standard-deviation band around the rolling mean.

    price < mean - stddev  -> LOW
    price > mean + stddev  -> HIGH
    otherwise              -> AVERAGE (both edges included)
    """
    fprice = float(price)

    if fprice < stats.mean - stats.stddev:
        return Category.LOW

    if fprice > stats.mean + stats.stddev:
        return Category.HIGH

    return Category.AVERAGE
