import logging
import sys


def setup_logging(log_file: str | None = None, level: int | str = logging.INFO):
    """
    Sets up logging to the console and, optionally, a file.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    # Create logger
    logger = logging.getLogger("cognitive_grid")
    logger.setLevel(level)

    # Prevent adding handlers multiple times
    if logger.hasHandlers():
        return logger

    # Formatters
    file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    console_formatter = logging.Formatter('%(levelname)s: %(message)s')

    # Console Handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # File Handler
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str):
    """
    Returns a child logger for specific modules.
    e.g. get_logger("agents.fsm") -> "cognitive_grid.agents.fsm"
    """
    return logging.getLogger(f"cognitive_grid.{name}")
