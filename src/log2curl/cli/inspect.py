"""Show what each extractor found and how body candidates were scored."""

from __future__ import annotations

import argparse
import json

from ..pipeline import explain
from .common import add_input_args, add_logging_args, load_config_from_args, read_input, setup_logging_from_args


def add_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("inspect", help="Explain extraction and body scoring for a log.")
    add_input_args(parser)
    add_logging_args(parser)
    parser.set_defaults(func=run)
    return parser


def run(args: argparse.Namespace) -> int:
    setup_logging_from_args(args)
    report = explain(read_input(args.input), load_config_from_args(args))
    print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0
