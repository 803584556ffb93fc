"""Simulated physical memory and two-level x86 page tables for user address spaces."""

from __future__ import annotations

from typing import Callable, List, Optional

from .memlayout import EXTMEM, KERNBASE
from .mmu import (
    NPDENTRIES,
    PDXSHIFT,
    PGSIZE,
    PTE_P,
    PTE_U,
    PTE_W,
    pdx,
    pgrounddown,
    pgroundup,
    pte_addr,
    pte_flags,
    ptx,
)

_MASK32 = 0xFFFFFFFF


class VMError(Exception):
    """A virtual-memory operation was asked to do something impossible."""


class OutOfMemory(VMError):
    """No free physical page is left."""


class PhysicalMemory:
    """A run of physical pages with a free list."""

    def __init__(self, npages: int = 1024, base: int = EXTMEM) -> None:
        if npages <= 0:
            raise ValueError("physical memory needs at least one page")
        if base <= 0 or base % PGSIZE:
            raise ValueError("base must be a positive page-aligned address")
        self.base = base
        self.npages = npages
        self._data = bytearray(npages * PGSIZE)
        self._free: List[int] = [base + i * PGSIZE for i in reversed(range(npages))]
        self._free_set = set(self._free)

    @property
    def end(self) -> int:
        return self.base + self.npages * PGSIZE

    def alloc_page(self) -> int:
        """Take a free page and return its physical address."""
        if not self._free:
            raise OutOfMemory("out of physical memory")
        pa = self._free.pop()
        self._free_set.discard(pa)
        return pa

    def free_page(self, pa: int) -> None:
        """Return a page to the free list."""
        if pa % PGSIZE or not self.base <= pa < self.end:
            raise VMError(f"kfree: bad page address {pa:#x}")
        if pa in self._free_set:
            raise VMError(f"kfree: page {pa:#x} is already free")
        self._free.append(pa)
        self._free_set.add(pa)

    def _offset(self, pa: int, n: int) -> int:
        if n < 0 or pa < self.base or pa + n > self.end:
            raise VMError(f"physical range {pa:#x}+{n} is outside memory")
        return pa - self.base

    def read(self, pa: int, n: int) -> bytes:
        off = self._offset(pa, n)
        return bytes(self._data[off:off + n])

    def write(self, pa: int, data: bytes) -> None:
        off = self._offset(pa, len(data))
        self._data[off:off + len(data)] = data

    def free_count(self) -> int:
        return len(self._free)


class PageDirectory:
    """A process page directory kept in simulated physical memory."""

    def __init__(self, memory: PhysicalMemory) -> None:
        self.memory = memory
        self.pa = memory.alloc_page()
        memory.write(self.pa, bytes(PGSIZE))

    def _load(self, pa: int) -> int:
        return int.from_bytes(self.memory.read(pa, 4), "little")

    def _store(self, pa: int, value: int) -> None:
        self.memory.write(pa, (value & _MASK32).to_bytes(4, "little"))

    def walk(self, va: int, alloc: bool = False) -> Optional[int]:
        """Physical address of the PTE for ``va``; page tables are created if ``alloc``."""
        pde_at = self.pa + 4 * pdx(va)
        pde = self._load(pde_at)
        if pde & PTE_P:
            pgtab = pte_addr(pde)
        else:
            if not alloc:
                return None
            pgtab = self.memory.alloc_page()
            self.memory.write(pgtab, bytes(PGSIZE))
            self._store(pde_at, pgtab | PTE_P | PTE_W | PTE_U)
        return pgtab + 4 * ptx(va)

    def map_pages(self, va: int, size: int, pa: int, perm: int) -> None:
        """Map the pages covering ``va``..``va+size`` to physical pages from ``pa``."""
        if size <= 0:
            raise ValueError("size must be positive")
        a = pgrounddown(va)
        last = pgrounddown(va + size - 1)
        while True:
            pte_at = self.walk(a, alloc=True)
            if self._load(pte_at) & PTE_P:
                raise VMError(f"remap of {a:#x}")
            self._store(pte_at, pa | perm | PTE_P)
            if a == last:
                break
            a += PGSIZE
            pa += PGSIZE

    def inituvm(self, init: bytes) -> None:
        """Load ``init``, smaller than a page, at address 0."""
        if len(init) >= PGSIZE:
            raise VMError("inituvm: more than a page")
        mem = self.memory.alloc_page()
        self.memory.write(mem, bytes(PGSIZE))
        self.map_pages(0, PGSIZE, mem, PTE_W | PTE_U)
        self.memory.write(mem, bytes(init))

    def loaduvm(self, addr: int, read: Callable[[int, int], bytes], offset: int, sz: int) -> None:
        """Fill already-mapped pages at ``addr`` with ``read(offset, n)`` results."""
        if addr % PGSIZE:
            raise VMError("loaduvm: addr must be page aligned")
        for i in range(0, sz, PGSIZE):
            pte_at = self.walk(addr + i)
            if pte_at is None:
                raise VMError("loaduvm: address should exist")
            pa = pte_addr(self._load(pte_at))
            n = min(sz - i, PGSIZE)
            chunk = read(offset + i, n)
            if len(chunk) != n:
                raise VMError("loaduvm: short read")
            self.memory.write(pa, chunk)

    def allocuvm(self, oldsz: int, newsz: int) -> int:
        """Grow the user space from ``oldsz`` to ``newsz`` with zeroed pages; the new size."""
        if newsz >= KERNBASE:
            raise VMError("allocuvm: size reaches kernel space")
        if newsz < oldsz:
            return oldsz
        for a in range(pgroundup(oldsz), newsz, PGSIZE):
            try:
                mem = self.memory.alloc_page()
            except OutOfMemory:
                self.deallocuvm(newsz, oldsz)
                raise
            self.memory.write(mem, bytes(PGSIZE))
            try:
                self.map_pages(a, PGSIZE, mem, PTE_W | PTE_U)
            except OutOfMemory:
                self.deallocuvm(newsz, oldsz)
                self.memory.free_page(mem)
                raise
        return newsz

    def deallocuvm(self, oldsz: int, newsz: int) -> int:
        """Shrink the user space from ``oldsz`` to ``newsz``; the new size."""
        if newsz >= oldsz:
            return oldsz
        a = pgroundup(newsz)
        while a < oldsz:
            pte_at = self.walk(a)
            if pte_at is None:
                a = ((pdx(a) + 1) << PDXSHIFT) - PGSIZE
            else:
                pte = self._load(pte_at)
                if pte & PTE_P:
                    pa = pte_addr(pte)
                    if pa == 0:
                        raise VMError("kfree")
                    self.memory.free_page(pa)
                    self._store(pte_at, 0)
            a += PGSIZE
        return newsz

    def freevm(self) -> None:
        """Free all user pages, the page tables and the directory itself."""
        self.deallocuvm(KERNBASE, 0)
        for i in range(NPDENTRIES):
            pde = self._load(self.pa + 4 * i)
            if pde & PTE_P:
                self.memory.free_page(pte_addr(pde))
        self.memory.free_page(self.pa)

    def clearpteu(self, uva: int) -> None:
        """Make the page at ``uva`` inaccessible to user code."""
        pte_at = self.walk(uva)
        if pte_at is None:
            raise VMError("clearpteu")
        self._store(pte_at, self._load(pte_at) & ~PTE_U)

    def copyuvm(self, sz: int) -> "PageDirectory":
        """A new directory holding a copy of the first ``sz`` bytes of user space."""
        child = PageDirectory(self.memory)
        for i in range(0, sz, PGSIZE):
            pte_at = self.walk(i)
            if pte_at is None:
                child.freevm()
                raise VMError("copyuvm: pte should exist")
            pte = self._load(pte_at)
            if not pte & PTE_P:
                child.freevm()
                raise VMError("copyuvm: page not present")
            try:
                mem = self.memory.alloc_page()
            except OutOfMemory:
                child.freevm()
                raise
            self.memory.write(mem, self.memory.read(pte_addr(pte), PGSIZE))
            try:
                child.map_pages(i, PGSIZE, mem, pte_flags(pte))
            except OutOfMemory:
                self.memory.free_page(mem)
                child.freevm()
                raise
        return child

    def uva2ka(self, uva: int) -> Optional[int]:
        """Physical address of the user page holding ``uva``, or None."""
        pte_at = self.walk(uva)
        if pte_at is None:
            return None
        pte = self._load(pte_at)
        if not pte & PTE_P or not pte & PTE_U:
            return None
        return pte_addr(pte)

    def _user_pages(self, va: int, n: int):
        """Yield (physical address, length) pieces covering ``n`` user bytes from ``va``."""
        while n > 0:
            va0 = pgrounddown(va)
            pa0 = self.uva2ka(va0)
            if pa0 is None:
                raise VMError(f"user address {va0:#x} is not mapped")
            chunk = min(PGSIZE - (va - va0), n)
            yield pa0 + (va - va0), chunk
            n -= chunk
            va = va0 + PGSIZE

    def copyout(self, va: int, data: bytes) -> None:
        """Copy ``data`` to user address ``va``."""
        view = memoryview(bytes(data))
        for pa, n in self._user_pages(va, len(view)):
            self.memory.write(pa, view[:n])
            view = view[n:]

    def read_user(self, va: int, n: int) -> bytes:
        """Read ``n`` bytes from user address ``va``."""
        return b"".join(self.memory.read(pa, chunk) for pa, chunk in self._user_pages(va, n))