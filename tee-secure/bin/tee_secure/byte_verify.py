"""Byte-equal 검증 — testcase 디렉토리의 input.bin 역순 결과를 expected.bin과 비교한다."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from .exceptions import AllocationError
from .reverser import reverse, reverse_terminated

logger = logging.getLogger(__name__)

INPUT_NAME = "input.bin"
EXPECTED_NAME = "expected.bin"


@dataclass
class ByteVerificationResult:
    case_id: str
    passed: bool
    reason: str
    first_mismatch_offset: int


def first_mismatch_offset(a: bytes, b: bytes) -> int:
    if a == b:
        return -1
    limit = min(len(a), len(b))
    for idx in range(limit):
        if a[idx] != b[idx]:
            return idx
    return limit


def iter_case_dirs(testcases_dir: Path) -> Iterator[Path]:
    for case_dir in sorted(testcases_dir.iterdir()):
        if case_dir.is_dir() and (case_dir / INPUT_NAME).is_file():
            yield case_dir


def write_case(case_dir: Path, data: bytes, terminated: bool = False) -> None:
    """input.bin과 역순 결과인 expected.bin을 기록한다."""
    case_dir.mkdir(parents=True, exist_ok=True)
    expected = reverse_terminated(data) if terminated else reverse(data)
    (case_dir / INPUT_NAME).write_bytes(data)
    (case_dir / EXPECTED_NAME).write_bytes(bytes(expected))


def verify_case_dir(
    case_dir: Path,
    expected_name: str = EXPECTED_NAME,
    terminated: bool = False,
    max_length: Optional[int] = None,
) -> ByteVerificationResult:
    if not (case_dir / INPUT_NAME).exists():
        return ByteVerificationResult(
            case_id=case_dir.name,
            passed=False,
            reason=f"input_missing:{INPUT_NAME}",
            first_mismatch_offset=-1,
        )

    expected_path = case_dir / expected_name
    if not expected_path.exists():
        return ByteVerificationResult(
            case_id=case_dir.name,
            passed=False,
            reason=f"expected_missing:{expected_name}",
            first_mismatch_offset=-1,
        )

    data = (case_dir / INPUT_NAME).read_bytes()
    expected = expected_path.read_bytes()
    transform = reverse_terminated if terminated else reverse

    try:
        generated = bytes(transform(data, max_length=max_length))
    except AllocationError as e:
        logger.warning(f"Case {case_dir.name}: {e}")
        return ByteVerificationResult(
            case_id=case_dir.name,
            passed=False,
            reason="allocation_failed",
            first_mismatch_offset=-1,
        )

    mismatch = first_mismatch_offset(expected, generated)
    if mismatch != -1:
        logger.debug(f"Case {case_dir.name}: first mismatch at offset {mismatch}")
        return ByteVerificationResult(
            case_id=case_dir.name,
            passed=False,
            reason="byte_mismatch",
            first_mismatch_offset=mismatch,
        )

    return ByteVerificationResult(
        case_id=case_dir.name,
        passed=True,
        reason="byte_equal",
        first_mismatch_offset=-1,
    )
