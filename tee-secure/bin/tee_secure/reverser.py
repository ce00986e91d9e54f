"""Reverser — bytes-like 입력의 code unit 순서를 뒤집은 새 버퍼를 반환한다."""

from __future__ import annotations

from typing import Optional, Union

from .exceptions import AllocationError

BytesLike = Union[bytes, bytearray, memoryview]

TERMINATOR = b"\x00"

_BYTES_LIKE_TYPES = (bytes, bytearray, memoryview)


def _check_bytes_like(data: object) -> None:
    # bytearray(int) would allocate zero bytes instead of failing
    if not isinstance(data, _BYTES_LIKE_TYPES):
        raise TypeError(
            f"expected a bytes-like object, got {type(data).__name__}"
        )


def reverse(data: BytesLike, max_length: Optional[int] = None) -> bytearray:
    """Return a new buffer holding the code units of ``data`` in reverse order.

    The result never shares storage with ``data`` and ``data`` is left
    untouched. Empty input yields an empty ``bytearray``.

    Raises:
        TypeError: ``data`` is not bytes-like (including ``None``).
        AllocationError: the output cannot be allocated, or its length
            exceeds ``max_length``.
    """
    _check_bytes_like(data)
    length = memoryview(data).nbytes
    if max_length is not None and length > max_length:
        raise AllocationError(length, limit=max_length)

    try:
        result = bytearray(data)
    except MemoryError as exc:
        raise AllocationError(length) from exc
    result.reverse()
    return result


def reverse_terminated(data: BytesLike, max_length: Optional[int] = None) -> bytearray:
    """NUL-terminated 버퍼를 뒤집는다.

    첫 번째 NUL 앞까지만 payload로 보고, 뒤집은 payload 끝에 새 terminator를 붙인다.
    NUL이 없으면 입력 전체가 payload이다.
    """
    _check_bytes_like(data)
    raw = data if isinstance(data, (bytes, bytearray)) else data.tobytes()
    end = raw.find(TERMINATOR)
    payload = raw if end == -1 else memoryview(raw)[:end]

    result = reverse(payload, max_length=max_length)
    result += TERMINATOR
    return result


def reverse_text(
    text: str,
    encoding: str = "utf-8",
    errors: str = "surrogateescape",
    max_length: Optional[int] = None,
) -> str:
    """Reverse the encoded code units of ``text`` and decode the result.

    Works on bytes, not characters: multi-byte sequences come out reversed.
    With the default ``surrogateescape`` handler the returned string always
    encodes back to exactly the reversed bytes.
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    reversed_bytes = reverse(text.encode(encoding, errors), max_length=max_length)
    return reversed_bytes.decode(encoding, errors)
