import io
import sys

from xv6sim.wc import Counts, count, format_counts, main


def test_count_simple_line():
    assert count(b"hello world\n") == Counts(1, 2, 12)


def test_count_invariants():
    data = b"one two\n\tthree\r\nfour  five\n\n"
    counts = count(data)
    assert counts.chars == len(data)
    assert counts.lines == data.count(b"\n")


def test_empty_input():
    assert count(b"") == Counts()


def test_nul_separates_words():
    assert count(b"a\0b").words == count(b"a b").words


def test_chunks_count_as_one_text():
    assert count([b"hel", b"lo wor", b"ld"]) == count(b"hello world")


def test_format_counts():
    assert format_counts(Counts(1, 2, 3), "f") == "1 2 3 f"


def test_main_on_files(tmp_path, capsys):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_bytes(b"x y\nz\n" * 300)
    second.write_bytes(b"")
    assert main([str(first), str(second)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        format_counts(count(first.read_bytes()), str(first)),
        format_counts(count(b""), str(second)),
    ]


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "nope"
    assert main([str(missing)]) == 1
    assert capsys.readouterr().out == f"wc: cannot open {missing}\n"


def test_main_reads_stdin(monkeypatch, capsys):
    data = b"alpha beta\ngamma\n"
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))
    assert main([]) == 0
    assert capsys.readouterr().out == format_counts(count(data), "") + "\n"