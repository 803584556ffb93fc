"""ELF executable headers."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import List

ELF_MAGIC = 0x464C457F  # "\x7FELF" in little endian

ELF_PROG_LOAD = 1

ELF_PROG_FLAG_EXEC = 1
ELF_PROG_FLAG_WRITE = 2
ELF_PROG_FLAG_READ = 4

_ELFHDR = struct.Struct("<I12sHHIIIIIHHHHHH")
_PROGHDR = struct.Struct("<8I")


class ElfFormatError(ValueError):
    """Raised when bytes do not hold a valid ELF structure."""


@dataclass
class ProgramHeader:
    """A program section header."""

    type: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    flags: int = 0
    align: int = 0

    SIZE = _PROGHDR.size

    @classmethod
    def parse(cls, data: bytes, offset: int = 0) -> "ProgramHeader":
        if offset < 0 or len(data) < offset + _PROGHDR.size:
            raise ElfFormatError("truncated program header")
        return cls(*_PROGHDR.unpack_from(data, offset))

    def pack(self) -> bytes:
        return _PROGHDR.pack(
            self.type, self.off, self.vaddr, self.paddr,
            self.filesz, self.memsz, self.flags, self.align,
        )

    def is_loadable(self) -> bool:
        return self.type == ELF_PROG_LOAD


@dataclass
class ElfHeader:
    """The ELF file header."""

    magic: int = ELF_MAGIC
    elf: bytes = field(default=bytes(12))
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    SIZE = _ELFHDR.size

    @classmethod
    def parse(cls, data: bytes) -> "ElfHeader":
        if len(data) < _ELFHDR.size:
            raise ElfFormatError("truncated ELF header")
        header = cls(*_ELFHDR.unpack_from(data, 0))
        if header.magic != ELF_MAGIC:
            raise ElfFormatError("bad ELF magic")
        return header

    def pack(self) -> bytes:
        return _ELFHDR.pack(
            self.magic, self.elf, self.type, self.machine, self.version,
            self.entry, self.phoff, self.shoff, self.flags, self.ehsize,
            self.phentsize, self.phnum, self.shentsize, self.shnum,
            self.shstrndx,
        )

    def program_headers(self, data: bytes) -> List[ProgramHeader]:
        """Program headers found in the whole file image ``data``."""
        return [
            ProgramHeader.parse(data, self.phoff + i * _PROGHDR.size)
            for i in range(self.phnum)
        ]