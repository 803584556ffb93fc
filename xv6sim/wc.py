"""Count lines, words and bytes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Iterator, List, Optional, Union

# A NUL byte also separates words.
_SEPARATORS = frozenset(b" \r\t\n\v\0")
_CHUNK = 512


@dataclass(frozen=True)
class Counts:
    lines: int = 0
    words: int = 0
    chars: int = 0


def count(data: Union[bytes, bytearray, Iterable[bytes]]) -> Counts:
    """Count a byte string, or a stream of byte chunks as one text."""
    chunks = [data] if isinstance(data, (bytes, bytearray)) else data
    lines = words = chars = 0
    inword = False
    for chunk in chunks:
        chars += len(chunk)
        lines += chunk.count(b"\n")
        for byte in chunk:
            if byte in _SEPARATORS:
                inword = False
            elif not inword:
                words += 1
                inword = True
    return Counts(lines, words, chars)


def format_counts(counts: Counts, name: str) -> str:
    return f"{counts.lines} {counts.words} {counts.chars} {name}"


def _chunks(stream: BinaryIO) -> Iterator[bytes]:
    return iter(lambda: stream.read(_CHUNK), b"")


def _report(stream: BinaryIO, name: str) -> int:
    try:
        counts = count(_chunks(stream))
    except OSError:
        print("wc: read error")
        return 1
    print(format_counts(counts, name))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Print counts for each named file, or for standard input if none is named."""
    names = sys.argv[1:] if argv is None else list(argv)
    if not names:
        return _report(sys.stdin.buffer, "")
    for name in names:
        try:
            stream = open(name, "rb")
        except OSError:
            print(f"wc: cannot open {name}")
            return 1
        with stream:
            status = _report(stream, name)
        if status:
            return status
    return 0


if __name__ == "__main__":
    raise SystemExit(main())