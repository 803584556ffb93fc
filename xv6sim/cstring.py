"""Byte-string helpers with C string semantics: NUL ends a string."""

from __future__ import annotations

import re
from itertools import zip_longest
from typing import BinaryIO, Optional, Union

BytesLike = Union[bytes, bytearray, memoryview, str]

_DIGITS = re.compile(rb"[0-9]*")


def _as_bytes(s: BytesLike) -> bytes:
    if isinstance(s, str):
        return s.encode("latin-1")
    return bytes(s)


def _cstr(s: BytesLike) -> bytes:
    """The bytes of ``s`` up to, not including, the first NUL."""
    data = _as_bytes(s)
    end = data.find(0)
    return data if end < 0 else data[:end]


def _compare(a: bytes, b: bytes) -> int:
    for x, y in zip_longest(a, b, fillvalue=0):
        if x != y:
            return x - y
        if x == 0:
            break
    return 0


def memcmp(v1: BytesLike, v2: BytesLike, n: int) -> int:
    """Compare the first ``n`` bytes; the difference of the first mismatch, else 0."""
    a, b = _as_bytes(v1), _as_bytes(v2)
    if n < 0:
        raise ValueError("length must not be negative")
    if len(a) < n or len(b) < n:
        raise ValueError(f"both buffers must hold at least {n} bytes")
    for x, y in zip(a[:n], b[:n]):
        if x != y:
            return x - y
    return 0


def strncmp(p: BytesLike, q: BytesLike, n: int) -> int:
    """Compare at most ``n`` characters of two NUL-terminated strings."""
    if n <= 0:
        return 0
    return _compare(_cstr(p)[:n], _cstr(q)[:n])


def strcmp(p: BytesLike, q: BytesLike) -> int:
    """Compare two NUL-terminated strings."""
    return _compare(_cstr(p), _cstr(q))


def strncpy(t: BytesLike, n: int) -> bytes:
    """The ``n``-byte buffer strncpy fills: ``t`` then NUL padding, unterminated if ``t`` is long."""
    if n <= 0:
        return b""
    return _cstr(t)[:n].ljust(n, b"\0")


def safestrcpy(t: BytesLike, n: int) -> bytes:
    """The string a buffer of ``n`` bytes holds after a terminating copy of ``t``."""
    if n <= 0:
        return b""
    return _cstr(t)[: n - 1]


def strlen(s: BytesLike) -> int:
    return len(_cstr(s))


def strchr(s: BytesLike, c: Union[int, BytesLike]) -> Optional[int]:
    """Index of the first ``c`` before the terminating NUL, or None."""
    if isinstance(c, int):
        ch = c
    else:
        raw = _as_bytes(c)
        if len(raw) != 1:
            raise ValueError("strchr needs a single character")
        ch = raw[0]
    if ch == 0:
        return None
    index = _cstr(s).find(ch)
    return None if index < 0 else index


def atoi(s: BytesLike) -> int:
    """Value of the leading decimal digits of ``s``; no sign or whitespace is accepted."""
    digits = _DIGITS.match(_as_bytes(s)).group()
    return int(digits) if digits else 0


def gets(stream: BinaryIO, max: int) -> bytes:
    """Read one line of at most ``max - 1`` bytes, keeping the newline or carriage return."""
    line = bytearray()
    while len(line) + 1 < max:
        c = stream.read(1)
        if not c:
            break
        line += c
        if c in (b"\n", b"\r"):
            break
    return bytes(line)