"""
Logging for tfizz.

`LOG` writes debug records through a loguru logger bound to the tfizz app,
one stderr sink with a time/level/location prefix. Records are dropped while
`appsettings.beQuiet` is set, e.g. with `TFIZZ_BEQUIET=true`.
"""

from loguru import logger
from typing import Any
import sys

# Create a distinct logger instance for the app
app_logger = logger.bind(app="TFIZZ")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >24}</yellow>::"
    "<cyan>{function: <24}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()  # Remove any default handlers
app_logger.add(sys.stderr, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Log a debug record attributed to the caller, unless quiet mode is on.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    try:
        from tfizz.config.settings import appsettings  # Ensure up-to-date settings

        if not appsettings.beQuiet:
            app_logger.opt(depth=1).debug(*args, **kwargs)
    except Exception as e:
        print(f"Logging error: {e}")  # Fallback to standard output on failure
