"""x86 memory-management unit definitions: descriptors, paging helpers and flags."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

_MASK32 = 0xFFFFFFFF

# Eflags register
FL_CF = 0x00000001
FL_PF = 0x00000004
FL_AF = 0x00000010
FL_ZF = 0x00000040
FL_SF = 0x00000080
FL_TF = 0x00000100
FL_IF = 0x00000200
FL_DF = 0x00000400
FL_OF = 0x00000800
FL_IOPL_MASK = 0x00003000
FL_IOPL_0 = 0x00000000
FL_IOPL_1 = 0x00001000
FL_IOPL_2 = 0x00002000
FL_IOPL_3 = 0x00003000
FL_NT = 0x00004000
FL_RF = 0x00010000
FL_VM = 0x00020000
FL_AC = 0x00040000
FL_VIF = 0x00080000
FL_VIP = 0x00100000
FL_ID = 0x00200000

# Control register flags
CR0_PE = 0x00000001
CR0_MP = 0x00000002
CR0_EM = 0x00000004
CR0_TS = 0x00000008
CR0_ET = 0x00000010
CR0_NE = 0x00000020
CR0_WP = 0x00010000
CR0_AM = 0x00040000
CR0_NW = 0x20000000
CR0_CD = 0x40000000
CR0_PG = 0x80000000

CR4_PSE = 0x00000010

# Segment selectors
SEG_KCODE = 1
SEG_KDATA = 2
SEG_UCODE = 3
SEG_UDATA = 4
SEG_TSS = 5
NSEGS = 6

DPL_USER = 0x3

# Application segment type bits
STA_X = 0x8
STA_E = 0x4
STA_C = 0x4
STA_W = 0x2
STA_R = 0x2
STA_A = 0x1

# System segment type bits
STS_T16A = 0x1
STS_LDT = 0x2
STS_T16B = 0x3
STS_CG16 = 0x4
STS_TG = 0x5
STS_IG16 = 0x6
STS_TG16 = 0x7
STS_T32A = 0x9
STS_T32B = 0xB
STS_CG32 = 0xC
STS_IG32 = 0xE
STS_TG32 = 0xF

# Paging constants
NPDENTRIES = 1024
NPTENTRIES = 1024
PGSIZE = 4096
PGSHIFT = 12
PTXSHIFT = 12
PDXSHIFT = 22

# Page table / directory entry flags
PTE_P = 0x001
PTE_W = 0x002
PTE_U = 0x004
PTE_PWT = 0x008
PTE_PCD = 0x010
PTE_A = 0x020
PTE_D = 0x040
PTE_PS = 0x080
PTE_MBZ = 0x180

# The all-zero descriptor that opens every GDT.
SEG_NULLASM = bytes(8)

_Layout = Tuple[Tuple[str, int], ...]

_SEG_LAYOUT: _Layout = (
    ("lim_15_0", 16),
    ("base_15_0", 16),
    ("base_23_16", 8),
    ("type", 4),
    ("s", 1),
    ("dpl", 2),
    ("p", 1),
    ("lim_19_16", 4),
    ("avl", 1),
    ("rsv1", 1),
    ("db", 1),
    ("g", 1),
    ("base_31_24", 8),
)

_GATE_LAYOUT: _Layout = (
    ("off_15_0", 16),
    ("cs", 16),
    ("args", 5),
    ("rsv1", 3),
    ("type", 4),
    ("s", 1),
    ("dpl", 2),
    ("p", 1),
    ("off_31_16", 16),
)


def _check(obj: object, layout: _Layout) -> None:
    for name, width in layout:
        value = getattr(obj, name)
        if not 0 <= value < (1 << width):
            raise ValueError(f"{name}={value} does not fit in {width} bits")


def _pack(obj: object, layout: _Layout) -> bytes:
    _check(obj, layout)
    value = 0
    shift = 0
    for name, width in layout:
        value |= getattr(obj, name) << shift
        shift += width
    return value.to_bytes(8, "little")


def _unpack(data: bytes, layout: _Layout) -> Dict[str, int]:
    if len(data) != 8:
        raise ValueError(f"descriptor must be 8 bytes, got {len(data)}")
    value = int.from_bytes(data, "little")
    fields = {}
    for name, width in layout:
        fields[name] = value & ((1 << width) - 1)
        value >>= width
    return fields


@dataclass
class SegDesc:
    """An x86 segment descriptor."""

    lim_15_0: int = 0
    base_15_0: int = 0
    base_23_16: int = 0
    type: int = 0
    s: int = 0
    dpl: int = 0
    p: int = 0
    lim_19_16: int = 0
    avl: int = 0
    rsv1: int = 0
    db: int = 0
    g: int = 0
    base_31_24: int = 0

    def __post_init__(self) -> None:
        _check(self, _SEG_LAYOUT)

    @classmethod
    def seg(cls, type: int, base: int, lim: int, dpl: int) -> "SegDesc":
        """A normal 32-bit segment whose limit is in 4096-byte units."""
        base &= _MASK32
        lim &= _MASK32
        return cls(
            (lim >> 12) & 0xFFFF, base & 0xFFFF, (base >> 16) & 0xFF,
            type, 1, dpl, 1, (lim >> 28) & 0xF, 0, 0, 1, 1, base >> 24,
        )

    @classmethod
    def seg16(cls, type: int, base: int, lim: int, dpl: int) -> "SegDesc":
        """A segment with byte granularity."""
        base &= _MASK32
        lim &= _MASK32
        return cls(
            lim & 0xFFFF, base & 0xFFFF, (base >> 16) & 0xFF,
            type, 1, dpl, 1, (lim >> 16) & 0xF, 0, 0, 1, 0, base >> 24,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "SegDesc":
        return cls(**_unpack(data, _SEG_LAYOUT))

    def to_bytes(self) -> bytes:
        return _pack(self, _SEG_LAYOUT)

    @property
    def base(self) -> int:
        return self.base_15_0 | (self.base_23_16 << 16) | (self.base_31_24 << 24)


@dataclass
class GateDesc:
    """An interrupt or trap gate descriptor."""

    off_15_0: int = 0
    cs: int = 0
    args: int = 0
    rsv1: int = 0
    type: int = 0
    s: int = 0
    dpl: int = 0
    p: int = 0
    off_31_16: int = 0

    def __post_init__(self) -> None:
        _check(self, _GATE_LAYOUT)

    @classmethod
    def set_gate(cls, istrap: bool, sel: int, off: int, dpl: int) -> "GateDesc":
        """Build a present gate; a trap gate leaves interrupts enabled."""
        off &= _MASK32
        return cls(
            off_15_0=off & 0xFFFF,
            cs=sel,
            args=0,
            rsv1=0,
            type=STS_TG32 if istrap else STS_IG32,
            s=0,
            dpl=dpl,
            p=1,
            off_31_16=off >> 16,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "GateDesc":
        return cls(**_unpack(data, _GATE_LAYOUT))

    def to_bytes(self) -> bytes:
        return _pack(self, _GATE_LAYOUT)

    @property
    def offset(self) -> int:
        return self.off_15_0 | (self.off_31_16 << 16)


def seg_asm(type: int, base: int, lim: int) -> bytes:
    """The eight bytes the boot assembler emits for a flat 32-bit segment."""
    base &= _MASK32
    lim &= _MASK32
    return bytes((
        (lim >> 12) & 0xFF, (lim >> 20) & 0xFF,
        base & 0xFF, (base >> 8) & 0xFF,
        (base >> 16) & 0xFF,
        0x90 | type,
        0xC0 | ((lim >> 28) & 0xF),
        (base >> 24) & 0xFF,
    ))


def pdx(va: int) -> int:
    """Page directory index of a virtual address."""
    return ((va & _MASK32) >> PDXSHIFT) & 0x3FF


def ptx(va: int) -> int:
    """Page table index of a virtual address."""
    return ((va & _MASK32) >> PTXSHIFT) & 0x3FF


def pgaddr(d: int, t: int, o: int) -> int:
    """Build a virtual address from directory index, table index and offset."""
    return ((d << PDXSHIFT) | (t << PTXSHIFT) | o) & _MASK32


def pgroundup(sz: int) -> int:
    return (sz + PGSIZE - 1) & ~(PGSIZE - 1) & _MASK32


def pgrounddown(a: int) -> int:
    return a & ~(PGSIZE - 1) & _MASK32


def pte_addr(pte: int) -> int:
    """Physical address held in a page table or directory entry."""
    return pte & _MASK32 & ~0xFFF


def pte_flags(pte: int) -> int:
    return pte & 0xFFF