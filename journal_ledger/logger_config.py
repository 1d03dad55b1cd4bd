import logging
import os

from journal_ledger.config import get_settings

settings = get_settings()

# Logger name
LOG_NAME = os.getenv("APP_LOGGER_NAME", "journal_ledger")

# Create logger
logger = logging.getLogger(LOG_NAME)
logger.setLevel(settings.LOG_LEVEL)

# Log format with ISO-like timestamp including milliseconds
LOG_FORMAT = "%(asctime)s.%(msecs)03d - %(filename)s - %(funcName)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Formatter
formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

# Console handler, attached once even if this module is reloaded
if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(settings.LOG_LEVEL)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

# Avoid duplicate logs through the root logger
logger.propagate = False
