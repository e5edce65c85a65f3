from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gastracker.models.prices import Category


@dataclass(frozen=True)
class Transition:
    """A category change worth telling someone about."""
    new: Category
    previous: Category
    price: int


def should_notify(category: Category, previous: Optional[Category]) -> bool:
    """
    Notify only when there is a previous category, the new one is not
    AVERAGE, and it differs from the previous one. HIGH <-> LOW counts.
    """
    if previous is None:
        return False
    if category is Category.AVERAGE:
        return False
    return category is not previous


def detect_transition(
    category: Category, previous: Optional[Category], price: int
) -> Optional[Transition]:
    if not should_notify(category, previous):
        return None
    return Transition(new=category, previous=previous, price=price)
