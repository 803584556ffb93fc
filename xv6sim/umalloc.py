"""First-fit free-list allocator over a simulated, growable heap."""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

# Size of a block header; block sizes are counted in these units.
UNIT = 8
# Smallest number of units requested from the heap at once.
MIN_GROWTH = 4096

_BASE_ADDR = 0  # the empty sentinel block sits below the heap


@dataclass
class _Block:
    addr: int
    size: int  # in units, header included


class Allocator:
    """Hands out addresses in a heap that grows from ``heap_base`` up to ``limit`` bytes."""

    def __init__(self, heap_base: int = 4096, limit: Optional[int] = None) -> None:
        if heap_base <= _BASE_ADDR or heap_base % UNIT:
            raise ValueError(f"heap base must be a positive multiple of {UNIT}")
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")
        self.heap_base = heap_base
        self.limit = limit
        self._brk = heap_base
        self._blocks: List[_Block] = []
        self._rover: Optional[int] = None
        self._allocated: Dict[int, int] = {}

    @property
    def brk(self) -> int:
        """Current end of the heap."""
        return self._brk

    def _sbrk(self, nbytes: int) -> Optional[int]:
        if self.limit is not None and self._brk + nbytes > self.heap_base + self.limit:
            return None
        old = self._brk
        self._brk += nbytes
        return old

    def _succ(self, index: int) -> int:
        return (index + 1) % len(self._blocks)

    def _morecore(self, nunits: int) -> Optional[int]:
        nunits = max(nunits, MIN_GROWTH)
        addr = self._sbrk(nunits * UNIT)
        if addr is None:
            return None
        self._insert(addr, nunits)
        return self._rover

    def _insert(self, addr: int, size: int) -> None:
        blocks = self._blocks
        i = bisect.bisect_left(blocks, addr, key=lambda b: b.addr)
        pred = i - 1
        block = _Block(addr, size)
        if i < len(blocks) and addr + size * UNIT == blocks[i].addr:
            block.size += blocks[i].size
            del blocks[i]
        prev = blocks[pred]
        if prev.addr + prev.size * UNIT == addr:
            prev.size += block.size
        else:
            blocks.insert(i, block)
        self._rover = pred

    def malloc(self, nbytes: int) -> Optional[int]:
        """Address of ``nbytes`` of free memory, or None when the heap cannot grow."""
        if nbytes < 0:
            raise ValueError("size must not be negative")
        nunits = (nbytes + UNIT - 1) // UNIT + 1
        if self._rover is None:
            self._blocks = [_Block(_BASE_ADDR, 0)]
            self._rover = 0
        prev = self._rover
        p = self._succ(prev)
        while True:
            block = self._blocks[p]
            if block.size >= nunits:
                if block.size == nunits:
                    del self._blocks[p]
                    addr = block.addr
                else:
                    block.size -= nunits
                    addr = block.addr + block.size * UNIT
                self._allocated[addr] = nunits
                self._rover = prev
                return addr + UNIT
            if p == self._rover:
                found = self._morecore(nunits)
                if found is None:
                    return None
                p = found
            prev, p = p, self._succ(p)

    def free(self, addr: int) -> None:
        """Return memory got from :meth:`malloc`."""
        header = addr - UNIT
        try:
            size = self._allocated.pop(header)
        except KeyError:
            raise ValueError(f"address {addr:#x} was not allocated") from None
        self._insert(header, size)

    def free_blocks(self) -> List[Tuple[int, int]]:
        """Free blocks in address order as (header address, size in bytes)."""
        return [(b.addr, b.size * UNIT) for b in self._blocks[1:]]