# callmetrics/utils/logger.py

import logging
import traceback

# Library logger; handlers are installed by observability.logger.configure_logging
logger = logging.getLogger("callmetrics")
logger.addHandler(logging.NullHandler())


# === Logging functions ===

def log_info(message):
    logger.info(message)


def log_debug(message):
    logger.debug(message)


def log_warning(message):
    logger.warning(message)


def log_exception(e: Exception, context: str = ""):
    logger.error(f"❌ Exception in {context}: {e}\n{traceback.format_exc()}")
