import logging
import sys


logger = logging.getLogger("joke_shell")


def setup_logger(level: str = "WARNING"):
    log_level = logging.getLevelName(level.upper())
    logger.setLevel(log_level if isinstance(log_level, int) else logging.WARNING)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s]: %(message)s", "%Y-%m-%d %H:%M:%S %Z")
    # stderr so log lines never mix with command output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logger.handlers.clear()
    logger.addHandler(handler)
