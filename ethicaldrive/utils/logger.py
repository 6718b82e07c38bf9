import sys
import logging

from ethicaldrive.config import get_settings

# --------------------------------------------------------
# Create a unified logger for all EthicalDrive modules
# --------------------------------------------------------
LOGGER_NAME = "ethicaldrive"
logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(get_settings().log_level)

# If no handlers exist, add one (avoid duplicate logs)
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)

    formatter = logging.Formatter(
        '[%(asctime)s] [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

logger.propagate = False  # Prevent duplicate uvicorn logs


# Explicit level helpers
def debug(msg):
    logger.debug(msg)

def info(msg):
    logger.info(msg)

def warn(msg):
    logger.warning(msg)

def error(msg):
    logger.error(msg)
