from __future__ import annotations

from abc import ABC, abstractmethod

from gastracker.models.prices import Category


def format_subject(new_category: Category) -> str:
    return f"Gas Prices are {new_category}"


def format_body(new_category: Category, previous_category: Category, price: int) -> str:
    return (
        f"Ethereum gas prices are no longer {previous_category}, they are now {new_category}\n\n"
        f"Specifically, medium gas is now {price}\n"
    )


class Notifier(ABC):
    """
    Notifier contract (interface).

    send() delivers one category-change message and raises NotifyError when
    delivery fails.
    """

    @abstractmethod
    def send(self, new_category: Category, previous_category: Category, price: int) -> None:
        raise NotImplementedError
