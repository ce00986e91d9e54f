#!/usr/bin/env python3
"""
Byte reversal CLI.

Reads a file, stdin or a literal string and writes the code units in reverse
order. Output is written as raw bytes.

Usage examples:
  bin/tee_secure_cli.py --text hello  # prints "olleh"
  bin/tee_secure_cli.py payload.bin --output reversed.bin
  printf 'abc\\0junk' | bin/tee_secure_cli.py --terminated  # writes "cba\\0"
  bin/tee_secure_cli.py --config etc/tee-secure.yaml --max-length 1048576 big.bin
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tee_secure.config import load_config
from tee_secure.exceptions import AllocationError, ConfigError
from tee_secure.reverser import reverse, reverse_terminated, reverse_text


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reverse the bytes of a file, stdin or a string")
    parser.add_argument("input", nargs="?", help="Input file (default: stdin, also '-')")
    parser.add_argument("--text", help="Reverse this string instead of reading input")
    parser.add_argument("--output", type=Path, help="Write reversed bytes to this file (default: stdout)")
    parser.add_argument(
        "--terminated",
        action="store_true",
        default=None,
        help="Treat input as NUL-terminated: reverse up to the first NUL and append a fresh one",
    )
    parser.add_argument("--encoding", help="Encoding used with --text (default: TEE_SECURE_ENCODING or utf-8)")
    parser.add_argument("--max-length", type=int, help="Reject inputs longer than this many bytes")
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Set the logging level (default: %(default)s)")
    return parser


def _read_input(input_arg: str | None) -> tuple[int, bytes]:
    if input_arg is None or input_arg == "-":
        return 0, sys.stdin.buffer.read()

    path = Path(input_arg)
    if not path.is_file():
        print(f"Error: input file not found: {path}", file=sys.stderr)
        return 2, b""
    return 0, path.read_bytes()


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        stream=sys.stderr
    )
    logger = logging.getLogger(__name__)

    try:
        config = load_config(
            args.config,
            encoding=args.encoding,
            max_length=args.max_length,
            terminated=args.terminated,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.text is not None and args.input is not None:
        print("Error: pass either an input file or --text, not both", file=sys.stderr)
        return 2

    try:
        if args.text is not None and not config.terminated:
            reversed_text = reverse_text(
                args.text,
                encoding=config.encoding,
                errors=config.errors,
                max_length=config.max_length,
            )
            result = (reversed_text + "\n").encode(config.encoding, config.errors)
        else:
            if args.text is not None:
                data = args.text.encode(config.encoding, config.errors)
            else:
                rc, data = _read_input(args.input)
                if rc != 0:
                    return rc
            transform = reverse_terminated if config.terminated else reverse
            result = bytes(transform(data, max_length=config.max_length))
    except AllocationError as e:
        logger.error(f"Reversal failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (UnicodeError, LookupError) as e:
        # Codec lookup succeeds for non-text codecs such as rot13
        print(f"Error: cannot encode text with {config.encoding}: {e}", file=sys.stderr)
        return 2

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_bytes(result)
        logger.info(f"Wrote {len(result)} bytes to {args.output}")
    else:
        sys.stdout.buffer.write(result)
        sys.stdout.buffer.flush()

    return 0


if __name__ == "__main__":
    sys.exit(main())
