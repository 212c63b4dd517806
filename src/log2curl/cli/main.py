"""log2curl command-line entrypoint."""

from __future__ import annotations

import argparse
import sys

from ..errors import Log2CurlError
from . import convert, inspect


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="log2curl",
        description="Turn HTTP request logs into replayable cURL commands.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert.add_parser(subparsers)
    inspect.add_parser(subparsers)

    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except Log2CurlError as e:
        print(f"log2curl: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"log2curl: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
