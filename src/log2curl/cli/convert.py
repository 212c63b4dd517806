"""Log -> cURL conversion command."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from ..interface.curl_builder import build_curl
from ..pipeline import convert
from ..utils.logging import get_logger
from .common import (
    add_input_args,
    add_logging_args,
    add_override_args,
    choose,
    confirm,
    load_config_from_args,
    read_input,
    setup_logging_from_args,
)

logger = get_logger(__name__)


def add_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("convert", help="Convert a pasted request log into a cURL command.")
    add_input_args(parser)
    parser.add_argument("--output", "-o", default=None, help="Write the result here instead of stdout.")
    parser.add_argument("--method", "-X", default=None, help="HTTP method; skips method detection.")
    parser.add_argument("--yes", "-y", action="store_true", help="Go on without a body when it is missing or unparseable.")
    parser.add_argument("--no-input", action="store_true", help="Never prompt; fail instead.")
    parser.add_argument("--json", action="store_true", help="Print the extracted components as JSON.")
    add_override_args(parser)
    add_logging_args(parser)
    parser.set_defaults(func=run)
    return parser


def run(args: argparse.Namespace) -> int:
    setup_logging_from_args(args)
    cfg = load_config_from_args(args)
    text = read_input(args.input)
    if not text.strip():
        raise ValueError("input is empty")

    # stdin already carried the log, so there is nobody left to ask
    interactive = not args.no_input and args.input != "-"
    components = convert(
        text,
        config=cfg,
        method=args.method,
        choose_method=choose if interactive else None,
        allow_body_failure=args.yes,
        confirm_without_body=None if args.yes or not interactive else confirm,
    )

    if args.json:
        result = json.dumps(components.to_dict(), ensure_ascii=False, indent=2)
    else:
        result = build_curl(
            components,
            default_accept=cfg.default_accept,
            default_content_type=cfg.default_content_type,
        )

    if args.output:
        Path(args.output).write_text(result + "\n", encoding="utf-8")
        print(f"[OK] wrote: {args.output}")
    else:
        print(result)
    logger.debug("generated:\n%s", result)
    return 0
