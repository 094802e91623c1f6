"""
Logging Configuration
Sets up the application logger and tames chatty third-party loggers.
"""
import logging
import sys
from typing import Optional

# Pillow logs every PNG chunk at DEBUG level while decoding
NOISY_LOGGERS: tuple[str, ...] = ("PIL", "pyvista")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger of the 'hologen' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to also write the session log to.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("hologen")
    logger.setLevel(level)

    # Re-running setup (e.g. from tests) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.info(f"Logging initialized (level={logging.getLevelName(level)}).")
    return logger
