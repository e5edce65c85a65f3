from gastracker.config import Settings
from gastracker.errors import ConfigurationError
from gastracker.notifiers.base import Notifier
from gastracker.notifiers.mail import EmailNotifier
from gastracker.notifiers.log import LogNotifier


def get_notifier(settings: Settings, override: str = "") -> Notifier:
    """
    Notifier factory.

    Reads NOTIFIER from config (or `override`) and returns the selected
    notifier.
    """
    name = (override or settings.notifier).strip().upper()

    if name == "EMAIL":
        if not (settings.notifier_from and settings.notifier_to and settings.notifier_password):
            raise ConfigurationError(
                "GAS_NOTIFIER_FROM, GAS_NOTIFIER_TO and GAS_NOTIFIER_PASSWORD must be set"
            )
        return EmailNotifier(
            from_addr=settings.notifier_from,
            to_addr=settings.notifier_to,
            password=settings.notifier_password,
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
        )

    if name == "LOG":
        return LogNotifier()

    raise ConfigurationError(f"Unknown NOTIFIER='{name}'. Expected: EMAIL or LOG")
