from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml


@dataclass(frozen=True)
class ConverterConfig:
    """Knobs for the log -> cURL conversion.

    None of these change the extraction heuristics themselves; they cover the
    command defaults, the context window used by block scoring and the
    interaction policy of the host (which verbs to offer, when a missing body
    deserves a confirmation).
    """

    # Command assembly
    default_accept: str = "application/json"
    default_content_type: str = "application/json"
    json_indent: int = 2

    # Block scanning
    lookback_chars: int = 300
    max_input_chars: Optional[int] = None  # external size cap; None = unlimited

    # Host interaction
    method_choices: list[str] = field(default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE"])
    body_expected_methods: list[str] = field(default_factory=lambda: ["POST", "PUT", "PATCH"])

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ConverterConfig":
        known = {f.name for f in fields(ConverterConfig)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")
        return ConverterConfig(**d)

    @staticmethod
    def from_json(s: str) -> "ConverterConfig":
        return ConverterConfig.from_dict(json.loads(s))


def load_config(path: str | Path | None) -> ConverterConfig:
    """Load a :class:`ConverterConfig` from a YAML file (defaults when ``path`` is None)."""
    if path is None:
        return ConverterConfig()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Missing config file: {p}")
    payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    if payload is None:
        return ConverterConfig()
    if not isinstance(payload, dict):
        raise ValueError("Converter config must be a mapping.")
    return ConverterConfig.from_dict(payload)
