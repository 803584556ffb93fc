import pytest

from xv6sim.elf import (
    ELF_PROG_FLAG_EXEC,
    ELF_PROG_FLAG_READ,
    ELF_PROG_LOAD,
    ElfFormatError,
    ElfHeader,
    ProgramHeader,
)


def _image(phdrs):
    header = ElfHeader(entry=0x1000, phoff=ElfHeader.SIZE, phnum=len(phdrs))
    return header, header.pack() + b"".join(p.pack() for p in phdrs)


def test_pack_starts_with_magic():
    assert ElfHeader().pack()[:4] == b"\x7fELF"


def test_header_size():
    assert len(ElfHeader().pack()) == ElfHeader.SIZE == 52


def test_header_round_trip():
    header = ElfHeader(type=2, machine=3, version=1, entry=0x1234, phoff=52, phnum=2)
    assert ElfHeader.parse(header.pack()) == header


def test_bad_magic():
    data = b"\x00ELF" + ElfHeader().pack()[4:]
    with pytest.raises(ElfFormatError):
        ElfHeader.parse(data)


def test_truncated_header():
    with pytest.raises(ElfFormatError):
        ElfHeader.parse(ElfHeader().pack()[:20])


def test_program_header_round_trip():
    ph = ProgramHeader(ELF_PROG_LOAD, 0x1000, 0, 0, 300, 400,
                       ELF_PROG_FLAG_EXEC | ELF_PROG_FLAG_READ, 4096)
    assert ProgramHeader.parse(ph.pack()) == ph
    assert len(ph.pack()) == ProgramHeader.SIZE


def test_program_headers_from_image():
    phdrs = [
        ProgramHeader(type=ELF_PROG_LOAD, off=0x100, filesz=10, memsz=20),
        ProgramHeader(type=0, off=0x200),
    ]
    header, data = _image(phdrs)
    parsed = ElfHeader.parse(data).program_headers(data)
    assert parsed == phdrs
    assert [p.is_loadable() for p in parsed] == [True, False]


def test_program_headers_truncated():
    phdrs = [ProgramHeader(type=ELF_PROG_LOAD)]
    header, data = _image(phdrs)
    with pytest.raises(ElfFormatError):
        header.program_headers(data[:-1])


def test_program_header_parse_at_offset():
    ph = ProgramHeader(type=ELF_PROG_LOAD, vaddr=0x2000)
    data = b"\xff" * 7 + ph.pack()
    assert ProgramHeader.parse(data, 7) == ph