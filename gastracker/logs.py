import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls are no-ops."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
