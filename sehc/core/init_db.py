"""Create the database schema for a fresh deployment."""

import logging

from sehc.core.config import settings
from sehc.core.database import init_db
from sehc.core.logging_config import setup_logging

logger = logging.getLogger("sehc.init_db")


def main() -> None:
    setup_logging(settings.log_level, settings.log_dir or None)
    init_db()
    logger.info("Database schema initialised")


if __name__ == "__main__":
    main()
