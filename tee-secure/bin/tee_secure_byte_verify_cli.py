#!/usr/bin/env python3
"""Byte-equal verify CLI for reversal testcases."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tee_secure.byte_verify import EXPECTED_NAME, iter_case_dirs, verify_case_dir, write_case
from tee_secure.config import load_config
from tee_secure.exceptions import ConfigError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Byte-equal verify for input.bin -> expected.bin reversal")
    parser.add_argument(
        "--testcases-dir",
        type=Path,
        help="Root directory containing testcase subdirectories (default: tests/testcases)",
    )
    parser.add_argument("--case-id", help="Only run one case directory")
    parser.add_argument(
        "--expected-name",
        default=EXPECTED_NAME,
        help="Expected output file name inside each case dir",
    )
    parser.add_argument(
        "--terminated",
        action="store_true",
        default=None,
        help="Verify NUL-terminated reversal instead of length-tagged reversal",
    )
    parser.add_argument(
        "--show-fail-limit",
        type=int,
        default=10,
        help="Number of failed cases to print in detail",
    )
    parser.add_argument("--max-length", type=int, help="Report allocation_failed for inputs longer than this many bytes")
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument(
        "--record",
        type=Path,
        help="Record this file as a new case named by --case-id, then exit",
    )
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Set the logging level (default: %(default)s)")
    return parser


def _resolve_case_dirs(testcases_dir: Path, case_id: str | None) -> tuple[int, list[Path]]:
    if not testcases_dir.is_dir():
        print(f"Error: testcases dir not found: {testcases_dir}", file=sys.stderr)
        return 2, []

    if case_id:
        case_dir = testcases_dir / case_id
        if not case_dir.is_dir():
            print(f"Error: case not found: {case_dir}", file=sys.stderr)
            return 2, []
        return 0, [case_dir]

    case_dirs = list(iter_case_dirs(testcases_dir))
    if not case_dirs:
        print("No testcase directories containing input.bin found.")
    return 0, case_dirs


def _record_case(args: argparse.Namespace, testcases_dir: Path, terminated: bool) -> int:
    if not args.case_id:
        print("Error: --record requires --case-id", file=sys.stderr)
        return 2
    if not args.record.is_file():
        print(f"Error: input file not found: {args.record}", file=sys.stderr)
        return 2

    case_dir = testcases_dir / args.case_id
    write_case(case_dir, args.record.read_bytes(), terminated=terminated)
    print(f"Recorded case {args.case_id} in {case_dir}")
    return 0


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        stream=sys.stderr
    )

    try:
        config = load_config(
            args.config,
            max_length=args.max_length,
            terminated=args.terminated,
            testcases_dir=str(args.testcases_dir.resolve()) if args.testcases_dir is not None else None,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    testcases_dir = Path(config.testcases_dir)

    if args.record is not None:
        return _record_case(args, testcases_dir, config.terminated)

    rc, case_dirs = _resolve_case_dirs(testcases_dir, args.case_id)
    if rc != 0:
        return rc
    if not case_dirs:
        return 0

    results = [
        verify_case_dir(
            case_dir,
            expected_name=args.expected_name,
            terminated=config.terminated,
            max_length=config.max_length,
        )
        for case_dir in case_dirs
    ]
    failed = [r for r in results if not r.passed]

    print(
        f"[tee-secure-byte-verify] total={len(results)} passed={len(results)-len(failed)} failed={len(failed)}"
    )

    if failed:
        print("Failed cases:", ", ".join(r.case_id for r in failed))
        limit = max(0, args.show_fail_limit)
        for idx, result in enumerate(failed[:limit], start=1):
            print(
                f"- fail#{idx} case={result.case_id} reason={result.reason} mismatch_offset={result.first_mismatch_offset}"
            )
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
