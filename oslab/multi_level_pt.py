"""A simulated RISC-V SV39 three-level page table.

A 39-bit virtual address splits into VPN[2], VPN[1] and VPN[0] of 9 bits
each, followed by a 12-bit page offset. Page table pages live in a
dictionary keyed by physical page number, standing in for memory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .pte_flags import PPN_SHIFT, PTE_R, PTE_V, PTE_W, PTE_X

PAGE_SIZE = 4096
PT_ENTRIES = 512
MEGAPAGE_SIZE = PAGE_SIZE * PT_ENTRIES

_U64_MASK = (1 << 64) - 1
_LEAF_BITS = int(PTE_R | PTE_W | PTE_X)
_VALID = int(PTE_V)
_ROOT_PPN = 0x80000
_OFFSET_BITS = {0: 12, 1: 21, 2: 30}


class PageFault(Exception):
    """The virtual address has no valid mapping."""

    def __init__(self, va: int) -> None:
        super().__init__(f"page fault at virtual address {va:#x}")
        self.va = va


@dataclass
class PageTableNode:
    """One page table page of 512 64-bit entries."""

    entries: List[int] = field(default_factory=lambda: [0] * PT_ENTRIES)


class Sv39PageTable:
    """Three-level page table with a bump allocator for table pages."""

    def __init__(self) -> None:
        self.root_ppn = _ROOT_PPN
        self._next_ppn = _ROOT_PPN + 1
        self._nodes: Dict[int, PageTableNode] = {self.root_ppn: PageTableNode()}

    def _alloc_node(self) -> int:
        ppn = self._next_ppn
        self._next_ppn += 1
        self._nodes[ppn] = PageTableNode()
        return ppn

    def _node(self, ppn: int) -> PageTableNode:
        try:
            return self._nodes[ppn]
        except KeyError:
            raise ValueError(
                f"physical page {ppn:#x} is not a page table; "
                "the region is already mapped by a larger page"
            ) from None

    def _descend(self, node_ppn: int, vpn: int) -> int:
        """Return the next-level table under ``vpn``, allocating it if absent."""
        node = self._node(node_ppn)
        pte = node.entries[vpn]
        if not pte & _VALID:
            new_ppn = self._alloc_node()
            node.entries[vpn] = ((new_ppn << PPN_SHIFT) | _VALID) & _U64_MASK
            return new_ppn
        return pte >> PPN_SHIFT

    @staticmethod
    def extract_vpn(va: int, level: int) -> int:
        """Return the 9-bit VPN index of ``va`` for ``level`` 0, 1 or 2."""
        try:
            shift = _OFFSET_BITS[level]
        except KeyError:
            raise ValueError(f"level must be 0, 1 or 2, not {level}") from None
        return (va >> shift) & 0x1FF

    def map_page(self, va: int, pa: int, flags: int) -> None:
        """Map the 4 KiB page holding ``va`` to the one holding ``pa``."""
        va &= ~(PAGE_SIZE - 1)
        pa &= ~(PAGE_SIZE - 1)
        current = self.root_ppn
        for level in (2, 1):
            current = self._descend(current, self.extract_vpn(va, level))
        leaf = (((pa >> 12) << PPN_SHIFT) | int(flags)) & _U64_MASK
        self._node(current).entries[self.extract_vpn(va, 0)] = leaf

    def map_superpage(self, va: int, pa: int, flags: int) -> None:
        """Map a 2 MiB page with a leaf entry at level 1.

        Both ``va`` and ``pa`` must be 2 MiB aligned; ValueError otherwise.
        """
        if va % MEGAPAGE_SIZE != 0:
            raise ValueError("va must be 2MB-aligned")
        if pa % MEGAPAGE_SIZE != 0:
            raise ValueError("pa must be 2MB-aligned")
        current = self._descend(self.root_ppn, self.extract_vpn(va, 2))
        leaf = (((pa >> 12) << PPN_SHIFT) | int(flags)) & _U64_MASK
        self._node(current).entries[self.extract_vpn(va, 1)] = leaf

    def translate(self, va: int) -> int:
        """Walk the table and return the physical address of ``va``.

        Raises :class:`PageFault` if any level has no valid entry.
        """
        current = self.root_ppn
        for level in (2, 1, 0):
            node = self._nodes.get(current)
            if node is None:
                raise PageFault(va)
            pte = node.entries[self.extract_vpn(va, level)]
            if not pte & _VALID:
                raise PageFault(va)
            if pte & _LEAF_BITS:
                offset = va & ((1 << _OFFSET_BITS[level]) - 1)
                return (((pte >> PPN_SHIFT) << 12) | offset) & _U64_MASK
            current = pte >> PPN_SHIFT
        raise PageFault(va)