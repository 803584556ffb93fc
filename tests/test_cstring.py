import io

import pytest

from xv6sim.cstring import (
    atoi,
    gets,
    memcmp,
    safestrcpy,
    strchr,
    strcmp,
    strlen,
    strncmp,
    strncpy,
)


def test_memcmp_equal():
    assert memcmp(b"abcdef", b"abcxyz", 3) == 0


def test_memcmp_difference():
    assert memcmp(b"abc", b"abd", 3) == ord("c") - ord("d")
    assert memcmp(b"\xff", b"\x01", 1) == 0xFF - 0x01


def test_memcmp_ignores_nul():
    assert memcmp(b"a\0b", b"a\0c", 3) == ord("b") - ord("c")


def test_memcmp_short_buffer():
    with pytest.raises(ValueError):
        memcmp(b"ab", b"abc", 3)


def test_strncmp_limits_length():
    assert strncmp(b"abcX", b"abcY", 3) == 0
    assert strncmp(b"abc", b"abd", 3) == ord("c") - ord("d")


def test_strncmp_shorter_string():
    assert strncmp(b"ab", b"abc", 5) == -ord("c")
    assert strncmp("abc", "ab", 5) == ord("c")


def test_strncmp_zero_length():
    assert strncmp(b"a", b"b", 0) == 0


def test_strcmp():
    assert strcmp(b"abc", b"abc") == 0
    assert strcmp(b"b", b"a") > 0
    assert strcmp(b"a", b"b") < 0


def test_strcmp_stops_at_nul():
    assert strcmp(b"ab\0x", b"ab\0y") == 0


def test_strncpy_pads():
    assert strncpy(b"hi", 5) == b"hi\0\0\0"


def test_strncpy_truncates_without_terminator():
    assert strncpy(b"hello", 3) == b"hel"
    assert len(strncpy(b"hello world", 8)) == 8


def test_strncpy_nonpositive():
    assert strncpy(b"hello", 0) == b""


def test_safestrcpy():
    assert safestrcpy(b"hello", 3) == b"he"
    assert safestrcpy(b"hi", 10) == b"hi"
    assert safestrcpy(b"hello", 0) == b""


def test_strlen():
    assert strlen(b"hello\0world") == len(b"hello")
    assert strlen("") == 0


def test_strchr():
    assert strchr(b"hello", b"l") == 2
    assert strchr("hello", "z") is None
    assert strchr(b"ab\0c", "c") is None
    assert strchr(b"abc", 0) is None
    assert strchr(b"abc", ord("c")) == 2


def test_strchr_needs_single_char():
    with pytest.raises(ValueError):
        strchr(b"abc", b"ab")


def test_atoi():
    assert atoi("42") == 42
    assert atoi(b"12ab") == 12
    assert atoi("-5") == 0
    assert atoi(" 7") == 0
    assert atoi("") == 0


def test_gets_reads_one_line():
    stream = io.BytesIO(b"line one\nrest")
    assert gets(stream, 100) == b"line one\n"
    assert gets(stream, 100) == b"rest"
    assert gets(stream, 100) == b""


def test_gets_respects_max():
    stream = io.BytesIO(b"abcdef")
    assert gets(stream, 4) == b"abc"
    assert gets(stream, 4) == b"def"


def test_gets_stops_at_carriage_return():
    assert gets(io.BytesIO(b"ab\rcd"), 50) == b"ab\r"