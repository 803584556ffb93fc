"""Physical and virtual memory layout of the kernel."""

_MASK32 = 0xFFFFFFFF

EXTMEM = 0x100000  # start of extended memory
PHYSTOP = 0xE000000  # top of physical memory
DEVSPACE = 0xFE000000  # other devices are at high addresses

KERNBASE = 0x80000000  # first kernel virtual address
KERNLINK = KERNBASE + EXTMEM  # address where the kernel is linked


def v2p(a: int) -> int:
    """Translate a kernel virtual address to a physical address."""
    return (a - KERNBASE) & _MASK32


def p2v(a: int) -> int:
    """Translate a physical address to a kernel virtual address."""
    return (a + KERNBASE) & _MASK32