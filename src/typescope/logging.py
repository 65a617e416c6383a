# ===== MODULE DOCSTRING ===== #
"""
TypeScope logging.

One package logger, ``typescope``, writing to stderr at WARNING by default.
Catalog builds, resolver walks and model interning emit ``TRACE`` debug
lines; every one of them is guarded by ``_log.isEnabledFor(logging.DEBUG)``
so a quiet logger costs nothing on the query path.

Usage:
    import logging
    from typescope.logging import set_verbosity

    set_verbosity(logging.DEBUG)  # show the TRACE lines
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import Final, List
import logging
import sys

## ===== LOCAL ===== ##
from .config import LOG_FORMAT, LOGGER_NAME, VALID_LEVELS

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'logger',
    'set_verbosity',
]

## ===== LOGGER SETUP ===== ##
_log: Final[logging.Logger] = logging.getLogger(LOGGER_NAME)

def _install_handler(log: logging.Logger) -> None:
    """Attach the stderr handler once; a reloaded module must not stack a second one."""
    if log.handlers:
        return
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(logging.Formatter(LOG_FORMAT))
    log.addHandler(stream)
    log.setLevel(logging.WARNING)

_install_handler(_log)

# Public name for callers outside the package
logger = _log

# ===== FUNCTIONS ===== #

def set_verbosity(level: int) -> None:
    """Change how much the TypeScope logger reports.

    Args:
        level: One of the standard ``logging`` level constants.

    Raises:
        ValueError: If ``level`` is not a standard level.
    """
    if level not in VALID_LEVELS:
        raise ValueError(
            f"Invalid logging level: {level!r}. "
            f"Expected one of {[logging.getLevelName(l) for l in VALID_LEVELS]}"
        )
    _log.setLevel(level)
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(f"TRACE logging.set_verbosity: Level is now {logging.getLevelName(level)}")
