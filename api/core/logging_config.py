from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s]: %(message)s"

NOISY_LOGGERS = ("asyncpg", "uvicorn.access")


def configure_logging(level_name: str) -> int:
    """Set the root log level and return it as a number.

    A stream handler is only installed when the root logger has none, so
    handlers set up by uvicorn or pytest are left alone. Unknown level names
    fall back to INFO.
    """
    level = getattr(logging, (level_name or "").upper(), None)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(level)

    # Keep known noisy libraries quiet unless we are debugging
    noisy_level = logging.NOTSET if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    return level
