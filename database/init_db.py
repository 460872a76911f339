import logging

from config.logging_config import setup_logging
from models.index import init_db

logger = logging.getLogger("init_db")

if __name__ == "__main__":
    setup_logging()
    init_db()
    logger.info("✅ Database initialized!")
