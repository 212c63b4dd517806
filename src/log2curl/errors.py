"""Typed failures raised by :func:`log2curl.pipeline.convert`."""

from __future__ import annotations

from typing import Optional, Sequence


class Log2CurlError(Exception):
    """Base class for conversion failures."""


class NoUrlFound(Log2CurlError):
    def __init__(self, message: str = "No HTTP/HTTPS URL found in input.") -> None:
        super().__init__(message)


class NoMethodFound(Log2CurlError):
    """No HTTP method could be inferred; the caller should ask for one of ``choices``."""

    def __init__(self, choices: Sequence[str], message: str = "Could not detect HTTP method.") -> None:
        super().__init__(message)
        self.choices = tuple(choices)


class BodyNormalizationFailed(Log2CurlError):
    def __init__(self, cause: Exception, raw_body: Optional[str] = None) -> None:
        super().__init__(f"Could not parse the request body: {cause}")
        self.cause = cause
        self.raw_body = raw_body


class ConversionAborted(Log2CurlError):
    """The caller declined to continue (e.g. no body for a POST)."""
