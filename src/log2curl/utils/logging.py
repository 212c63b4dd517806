"""Logging setup shared by the library and the ``log2curl`` CLI.

Library modules only call :func:`get_logger`; the CLI calls
:func:`configure_logging` once per run. Records go to stderr because stdout
carries the generated command.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

ENV_LEVEL = "LOG2CURL_LOG_LEVEL"
_DEFAULT_FORMAT = "%(levelname)s | %(name)s | %(message)s"
_DEBUG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Set the ``log2curl`` verbosity.

    ``level`` wins over the LOG2CURL_LOG_LEVEL env var; both fall back to
    WARNING so a plain ``log2curl convert`` prints only the command. DEBUG
    switches to a format with timestamps and line numbers, which is where the
    block scores and the winning normalization strategy show up.
    """
    name = (level or os.environ.get(ENV_LEVEL) or "WARNING").upper()
    lvl = getattr(logging, name, None)
    if not isinstance(lvl, int):
        raise ValueError(f"Unknown log level: {name}")
    fmt = _DEBUG_FORMAT if lvl <= logging.DEBUG else _DEFAULT_FORMAT
    logging.basicConfig(level=lvl, format=fmt, stream=sys.stderr)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
