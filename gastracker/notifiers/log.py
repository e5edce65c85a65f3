from __future__ import annotations

import logging

from gastracker.models.prices import Category
from gastracker.notifiers.base import Notifier, format_body, format_subject

log = logging.getLogger("gastracker.notify")


class LogNotifier(Notifier):
    """Writes the notification to the log instead of sending it (dev / dry runs)."""

    def send(self, new_category: Category, previous_category: Category, price: int) -> None:
        log.warning(
            "%s | %s",
            format_subject(new_category),
            format_body(new_category, previous_category, price).replace("\n\n", " ").strip(),
        )
