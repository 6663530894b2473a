from __future__ import annotations

import logging

LOGGER_NAME = "leadlovers_client"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(verbose: bool, *, fmt: str = LOG_FORMAT) -> logging.Logger:
    """Opt-in console logging for scripts using the client.

    Verbose mode shows every request the executor sends (token masked) and
    the httpx/httpcore wire logs; otherwise only transport failures surface.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=fmt)

    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    return logger
