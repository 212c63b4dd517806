"""log2curl: turn heterogeneous HTTP request logs into replayable cURL commands.

Structure
- log2curl.interface: prefix stripping, field extractors, components, curl assembly
- log2curl.body: block scanning, body scoring, tolerant normalization, unwrapping
- log2curl.pipeline: end-to-end conversion
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("log2curl")
except PackageNotFoundError:  # pragma: no cover - runtime fallback
    __version__ = "0.0.0"

from .body.normalizer import BodyParseError, normalize_body
from .config import ConverterConfig, load_config
from .errors import BodyNormalizationFailed, ConversionAborted, Log2CurlError, NoMethodFound, NoUrlFound
from .interface.components import CurlComponents, CustomHeader
from .interface.curl_builder import build_curl
from .pipeline import convert, explain, to_curl

__all__ = [
    "__version__",
    "BodyNormalizationFailed",
    "BodyParseError",
    "ConversionAborted",
    "ConverterConfig",
    "CurlComponents",
    "CustomHeader",
    "Log2CurlError",
    "NoMethodFound",
    "NoUrlFound",
    "build_curl",
    "convert",
    "explain",
    "load_config",
    "normalize_body",
    "to_curl",
]
