"""
Logging Configuration
Sets up the loggers of the pixel grid modules.
"""
import logging
import sys
from typing import Optional

LOGGER_NAMES = (
    "pixel_grid",
    "interaction",
    "grid_canvas",
    "pixel_grid_app",
)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the module loggers of the application.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Avoid duplicate output when called again
        if logger.hasHandlers():
            logger.handlers.clear()

        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("pixel_grid_app").info("Logging initialized.")
