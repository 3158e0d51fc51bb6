import logging


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# httpx logs every upstream request at INFO; the proxy logs its own summary line
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Set up the root logger for the proxy, or just update its level if handlers exist."""
    desired_level = getattr(logging, str(level).upper(), logging.INFO)
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(desired_level)
        for handler in root.handlers:
            handler.setLevel(desired_level)
    else:
        logging.basicConfig(level=desired_level, format=LOG_FORMAT)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(desired_level, logging.WARNING))
    logging.getLogger("proxy").debug("Logging configured: level=%s", logging.getLevelName(desired_level))
