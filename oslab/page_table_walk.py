"""Address translation through a single-level page table.

A 32-bit virtual address splits into a 20-bit virtual page number (VPN)
and a 12-bit page offset. The physical address is the mapped physical
page number times the 4 KiB page size, plus the offset.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

PAGE_SIZE = 4096
PAGE_OFFSET_BITS = 12

PTE_VALID = 1 << 0
PTE_READ = 1 << 1
PTE_WRITE = 1 << 2

_U32_MASK = (1 << 32) - 1
_U8_MASK = 0xFF
_OFFSET_MASK = (1 << PAGE_OFFSET_BITS) - 1


def _check_range(value: int, mask: int, name: str) -> int:
    if not 0 <= value <= mask:
        raise ValueError(f"{name} {value} is out of range")
    return value


class PageFault(Exception):
    """The virtual page is not mapped, or its entry is not valid."""

    def __init__(self, va: int) -> None:
        super().__init__(f"page fault at virtual address {va:#x}")
        self.va = va


class PermissionDenied(Exception):
    """A write was attempted on a page that is not writable."""

    def __init__(self, va: int) -> None:
        super().__init__(f"write to read-only page at virtual address {va:#x}")
        self.va = va


@dataclass(frozen=True)
class PageTableEntry:
    """A mapping to physical page ``ppn`` with permission ``flags``."""

    ppn: int
    flags: int


def va_to_vpn(va: int) -> int:
    """Return the virtual page number of a 32-bit virtual address."""
    return _check_range(va, _U32_MASK, "virtual address") >> PAGE_OFFSET_BITS


def va_to_offset(va: int) -> int:
    """Return the offset within the page of a 32-bit virtual address."""
    return _check_range(va, _U32_MASK, "virtual address") & _OFFSET_MASK


def make_pa(ppn: int, offset: int) -> int:
    """Combine a physical page number and an offset into a 32-bit address."""
    _check_range(ppn, _U32_MASK, "ppn")
    _check_range(offset, _U32_MASK, "offset")
    return ((ppn << PAGE_OFFSET_BITS) | offset) & _U32_MASK


class SingleLevelPageTable:
    """A flat table of ``max_pages`` optional entries, indexed by VPN."""

    def __init__(self, max_pages: int) -> None:
        if max_pages < 0:
            raise ValueError("max_pages must not be negative")
        self._entries: List[Optional[PageTableEntry]] = [None] * max_pages

    def __len__(self) -> int:
        return len(self._entries)

    def _check_vpn(self, vpn: int) -> None:
        if not 0 <= vpn < len(self._entries):
            raise IndexError(
                f"vpn {vpn} is outside a table of {len(self._entries)} pages"
            )

    def map(self, vpn: int, ppn: int, flags: int) -> None:
        """Map virtual page ``vpn`` to physical page ``ppn`` with ``flags``."""
        self._check_vpn(vpn)
        _check_range(ppn, _U32_MASK, "ppn")
        _check_range(int(flags), _U8_MASK, "flags")
        self._entries[vpn] = PageTableEntry(ppn, int(flags))

    def unmap(self, vpn: int) -> None:
        """Remove the mapping of virtual page ``vpn``."""
        self._check_vpn(vpn)
        self._entries[vpn] = None

    def lookup(self, vpn: int) -> Optional[PageTableEntry]:
        """Return the entry for ``vpn``, or None if unmapped or out of range."""
        if not 0 <= vpn < len(self._entries):
            return None
        return self._entries[vpn]

    def translate(self, va: int, is_write: bool) -> int:
        """Translate ``va`` to a physical address.

        Raises :class:`PageFault` if the page is unmapped or invalid, and
        :class:`PermissionDenied` for a write to a non-writable page.
        """
        entry = self.lookup(va_to_vpn(va))
        if entry is None or not entry.flags & PTE_VALID:
            raise PageFault(va)
        if is_write and not entry.flags & PTE_WRITE:
            raise PermissionDenied(va)
        return make_pa(entry.ppn, va_to_offset(va))