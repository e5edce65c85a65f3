from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from gastracker.errors import NotifyError
from gastracker.models.prices import Category
from gastracker.notifiers.base import Notifier, format_body, format_subject

log = logging.getLogger("gastracker.notify")


class EmailNotifier(Notifier):
    """
    Sends the category-change message through an SMTP relay
    (STARTTLS + login, Gmail by default).
    """

    def __init__(
        self,
        from_addr: str,
        to_addr: str,
        password: str,
        smtp_host: str = "smtp.gmail.com",
        smtp_port: int = 587,
        timeout_s: float = 30.0,
    ) -> None:
        self.from_addr = from_addr
        self.to_addr = to_addr
        self.password = password
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.timeout_s = timeout_s

    def build_message(
        self, new_category: Category, previous_category: Category, price: int
    ) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.from_addr
        msg["To"] = self.to_addr
        msg["Subject"] = format_subject(new_category)
        msg.set_content(format_body(new_category, previous_category, price))
        return msg

    def send(self, new_category: Category, previous_category: Category, price: int) -> None:
        msg = self.build_message(new_category, previous_category, price)
        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout_s) as smtp:
                smtp.starttls()
                smtp.login(self.from_addr, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotifyError(
                f"while sending email via {self.smtp_host}:{self.smtp_port}: {e!r}"
            ) from e

        log.info("sent email to %s: %s", self.to_addr, msg["Subject"])
