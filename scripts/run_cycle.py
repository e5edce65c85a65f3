import argparse
import logging
import sys

from gastracker.config import get_settings
from gastracker.errors import GasTrackerError, NotifyError
from gastracker.jobs.cycle import run_cycle_from_settings
from gastracker.logs import configure_logging


def main() -> int:
    parser = argparse.ArgumentParser(description="Run one gas price tracker cycle")
    parser.add_argument(
        "--notifier",
        default="",
        choices=["", "EMAIL", "LOG"],
        help="Override NOTIFIER (LOG = dry run, nothing is emailed)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    log = logging.getLogger("gastracker.cli")

    try:
        settings = get_settings()
        configure_logging("DEBUG" if args.debug else settings.log_level)
        report = run_cycle_from_settings(settings, notifier_override=args.notifier)
    except NotifyError as e:
        configure_logging()
        log.error("sample recorded but notification failed: %s", e)
        return 1
    except GasTrackerError as e:
        configure_logging()
        log.error("cycle failed: %s", e)
        return 1

    for line in report.audit:
        log.info("audit: %s", line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
