import logging

from letter_system.config import LOG_LEVEL


def setup_logger():
    """Configure the shared application logger once."""
    logger = logging.getLogger("letter_system")
    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logger.setLevel(level)

    # already configured by an earlier import
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )
    logger.addHandler(console_handler)

    return logger


logger = setup_logger()
