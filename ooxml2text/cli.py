from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import ooxml2text


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {value!r}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ooxml2text",
        description="Extract the plain text of a .docx, .xlsx or .pptx file to stdout.",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the file to extract.",
    )
    parser.add_argument(
        "--max-chars",
        type=_positive_int,
        default=None,
        help="Stop extracting once roughly this many characters were emitted.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log extraction details to stderr.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args, unknown = parser.parse_known_args(argv)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        return code

    if unknown:
        unknown_str = " ".join(unknown)
        print(
            f"ooxml2text: warning: unsupported arguments: {unknown_str}",
            file=sys.stderr,
        )
        return 1

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        text = ooxml2text.read_file(args.path, max_chars=args.max_chars)
        sys.stdout.write(text)
        sys.stdout.write("\n")
        return 0
    except Exception as exc:
        print(f"ooxml2text: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
