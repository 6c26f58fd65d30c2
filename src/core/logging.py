import logging
import sys


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Route all log records to STDOUT through a single handler on the root logger.
    The token debug banner and per-request lines are emitted at WARNING/INFO, so
    the default level keeps them visible when debug mode is switched on.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove default handlers to avoid duplication
    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    ))

    logger.addHandler(handler)


def set_http_logging_level() -> None:
    """Lowers logging level for aiohttp and azure.identity to avoid noise around token requests"""
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    logging.getLogger("azure.identity").setLevel(logging.WARNING)
