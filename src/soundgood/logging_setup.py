import logging

from soundgood.config import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure root logging from config.log_level unless a level is given."""
    logging.basicConfig(
        level=getattr(logging, (level or config.log_level).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # psycopg is chatty at DEBUG
    logging.getLogger("psycopg").setLevel(logging.WARNING)
