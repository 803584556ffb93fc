# xv6sim

Pure-Python models of the pieces of a small teaching Unix kernel and its
user space: x86 descriptors and paging helpers, a page-table model over
simulated physical memory, ELF headers, the shell's command parser, a
free-list allocator, spin and sleep locks, and a `wc` command. Each piece
can be used and tested on its own, without an emulator. The package has
no dependencies beyond the standard library.

## Modules

- `xv6sim.mmu`: EFLAGS, control-register, segment-type and page-table-entry
  constants. `SegDesc` (built with `SegDesc.seg` or `SegDesc.seg16`) and
  `GateDesc` (built with `GateDesc.set_gate`) pack to and from their
  8-byte form with `to_bytes` / `from_bytes`; fields that do not fit their
  bit width raise `ValueError`. `seg_asm` gives the eight bytes of a flat
  32-bit segment. Paging helpers: `pdx`, `ptx`, `pgaddr`, `pgroundup`,
  `pgrounddown`, `pte_addr` and `pte_flags`.
- `xv6sim.memlayout`: address-space constants (`EXTMEM`, `PHYSTOP`,
  `DEVSPACE`, `KERNBASE`, `KERNLINK`) and the translations `v2p` and `p2v`.
- `xv6sim.elf`: `ElfHeader` and `ProgramHeader` parse from and pack to
  bytes; `ElfHeader.program_headers` reads the program headers of a file
  image and `ProgramHeader.is_loadable` tells loadable segments. Truncated
  data or a bad magic number raises `ElfFormatError`.
- `xv6sim.syscalls`: system-call numbers as the `Syscall` enum and open
  flags as the `OpenMode` flag, with `readable()` and `writable()`.
- `xv6sim.cstring`: C string and memory semantics on Python bytes (a NUL
  ends a string): `memcmp`, `strncmp`, `strcmp`, `strncpy`, `safestrcpy`,
  `strlen`, `strchr` (returns an index or `None`), `atoi` and `gets`
  (reads one line from a binary stream).
- `xv6sim.vm`: `PhysicalMemory` is a run of pages with a free list
  (`alloc_page`, `free_page`, `read`, `write`, `free_count`).
  `PageDirectory` keeps a two-level page table inside that memory and
  offers `walk`, `map_pages`, `inituvm`, `loaduvm`, `allocuvm`,
  `deallocuvm`, `freevm`, `clearpteu`, `copyuvm`, `uva2ka`, `copyout` and
  `read_user`. Failures raise `VMError`; running out of pages raises
  `OutOfMemory`.
- `xv6sim.shell`: `tokenize` splits a command line into `(kind, text)`
  tokens, and `parse_command` builds a tree of `ExecCmd`, `RedirCmd`,
  `PipeCmd`, `ListCmd` and `BackCmd`. It handles `<`, `>`, `>>`, `|`, `;`,
  `&` and parentheses, allows fewer than 10 arguments per command, and
  raises `ShellSyntaxError` on bad input.
- `xv6sim.umalloc`: `Allocator` is a first-fit, address-ordered free-list
  allocator over a simulated heap that grows on demand up to an optional
  limit. It provides `malloc` (returns an address, or `None` when the heap
  cannot grow), `free` and `free_blocks`.
- `xv6sim.locks`: `SpinLock` is owned by the thread that acquired it and
  works as a context manager. `SleepLock` makes waiters block until it is
  free and records the holding `pid`. Acquiring a held spin lock again or
  releasing one that is not held raises `LockError`.
- `xv6sim.wc`: `count` returns `Counts(lines, words, chars)` for bytes or
  an iterable of byte chunks, `format_counts` formats them, and `main` is
  the command below.

## Examples

```python
from xv6sim.shell import parse_command
tree = parse_command("ls > out; cat < out | wc &")

from xv6sim.mmu import pdx, ptx, pgroundup
pdx(0x80401000), ptx(0x80401000), pgroundup(4097)   # (513, 1, 8192)

from xv6sim.vm import PhysicalMemory, PageDirectory
pgdir = PageDirectory(PhysicalMemory())
size = pgdir.allocuvm(0, 8192)
pgdir.copyout(100, b"hello")
pgdir.read_user(100, 5)                             # b'hello'
```

## Command line

Count the lines, words and bytes of one or more files:

```
xv6sim-wc README.md
```

With no file names it reads standard input. A file that cannot be opened
prints `wc: cannot open NAME` and ends the command with status 1.

## What it does not do

This is a set of models, not a running system. There is no boot process,
scheduler, process table, file system, disk or console. The shell module
parses command lines into trees but does not execute them. The allocator
and page tables work on simulated memory only.

## Tests

```
pip install .[test]
pytest
```