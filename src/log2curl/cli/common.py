from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..config import ConverterConfig, load_config
from ..utils.logging import configure_logging


def add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("input", nargs="?", default="-", help="Log file to read ('-' or omitted = stdin).")
    p.add_argument("--config", default=None, help="Optional converter config YAML.")


def add_logging_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--log-level", default=None, help="Logging level (e.g., INFO, DEBUG). Also respects LOG2CURL_LOG_LEVEL env var.")


def setup_logging_from_args(args: argparse.Namespace) -> None:
    configure_logging(args.log_level)


# flag dest -> ConverterConfig field
_OVERRIDES = {"accept": "default_accept", "content_type": "default_content_type", "indent": "json_indent"}


def add_override_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--accept", default=None, help="Default Accept header (overrides the config file).")
    p.add_argument("--content-type", default=None, help="Default Content-Type header (overrides the config file).")
    p.add_argument("--indent", type=int, default=None, help="JSON indent of the --data body (overrides the config file).")


def load_config_from_args(args: argparse.Namespace) -> ConverterConfig:
    cfg = load_config(args.config)
    changes = {field: getattr(args, dest) for dest, field in _OVERRIDES.items() if getattr(args, dest, None) is not None}
    return dataclasses.replace(cfg, **changes) if changes else cfg


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def ask(prompt: str) -> str:
    """Prompt on stderr so stdout stays clean for the command."""
    sys.stderr.write(prompt)
    sys.stderr.flush()
    return sys.stdin.readline().strip()


def confirm(prompt: str) -> bool:
    return ask(f"{prompt} [y/N] ").lower() in ("y", "yes")


def choose(choices: Sequence[str]) -> Optional[str]:
    listing = "  ".join(f"{i}) {c}" for i, c in enumerate(choices, 1))
    answer = ask(f"Could not detect HTTP method, please select one: {listing}\n> ")
    if answer.isdigit() and 1 <= int(answer) <= len(choices):
        return choices[int(answer) - 1]
    if answer.upper() in choices:
        return answer.upper()
    return None
