import logging
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(module)s - %(message)s"


def setup_logger(
    name: str = "grammar_corrector",
    level: int = logging.INFO,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Logger:
    """Attach a stream handler to the package logger, once.

    Library modules never configure handlers themselves; applications call this if they
    want the package's log output on stderr.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter or logging.Formatter(DEFAULT_FORMAT))
        logger.addHandler(handler)
    return logger
