# mathml2omml/logger.py
import logging

logger = logging.getLogger("mathml2omml")


def init_logging(level: str = "WARNING") -> None:
    """Attach a console handler to the package logger (only once)."""
    logger.setLevel(level.upper())
    if not logger.handlers:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)
