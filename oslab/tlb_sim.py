"""A translation lookaside buffer with FIFO replacement, and an MMU using it.

The TLB caches (ASID, VPN) -> PPN translations. It can be flushed whole,
by virtual page number (any address space) or by address space id. The
MMU looks a page up in the TLB first and, on a miss, searches its page
table and fills the TLB with the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

_U16_MAX = (1 << 16) - 1


def _check_asid(asid: int) -> int:
    if not 0 <= asid <= _U16_MAX:
        raise ValueError(f"asid {asid} does not fit in an unsigned 16-bit integer")
    return asid


@dataclass
class TlbEntry:
    """One TLB slot; an empty slot has ``valid`` False."""

    valid: bool = False
    asid: int = 0
    vpn: int = 0
    ppn: int = 0
    flags: int = 0

    def matches(self, vpn: int, asid: int) -> bool:
        return self.valid and self.vpn == vpn and self.asid == asid


@dataclass
class TlbStats:
    """Hit and miss counts of TLB lookups."""

    hits: int = 0
    misses: int = 0

    def hit_rate(self) -> float:
        """Fraction of lookups that hit; 0.0 when nothing was looked up."""
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class Tlb:
    """Fixed-size TLB replacing entries in first-in, first-out order."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: List[TlbEntry] = [TlbEntry() for _ in range(capacity)]
        self._fifo_ptr = 0
        self.stats = TlbStats()

    @property
    def entries(self) -> Tuple[TlbEntry, ...]:
        """The slots, in storage order."""
        return tuple(self._entries)

    def _find(self, vpn: int, asid: int) -> Optional[TlbEntry]:
        return next((e for e in self._entries if e.matches(vpn, asid)), None)

    def lookup(self, vpn: int, asid: int) -> Optional[int]:
        """Return the cached PPN for ``(vpn, asid)``, or None on a miss.

        Every call counts as a hit or a miss in ``stats``.
        """
        entry = self._find(vpn, asid)
        if entry is None:
            self.stats.misses += 1
            return None
        self.stats.hits += 1
        return entry.ppn

    def insert(self, vpn: int, ppn: int, asid: int, flags: int) -> None:
        """Cache a translation.

        An existing valid entry for ``(vpn, asid)`` is updated in place;
        otherwise the slot next in FIFO order is overwritten.
        """
        _check_asid(asid)
        entry = self._find(vpn, asid)
        if entry is not None:
            entry.ppn = ppn
            entry.flags = flags
            return
        self._entries[self._fifo_ptr] = TlbEntry(True, asid, vpn, ppn, flags)
        self._fifo_ptr = (self._fifo_ptr + 1) % self.capacity

    def flush_all(self) -> None:
        """Invalidate every entry."""
        for entry in self._entries:
            entry.valid = False

    def flush_by_vpn(self, vpn: int) -> None:
        """Invalidate the entries for ``vpn`` in every address space."""
        for entry in self._entries:
            if entry.vpn == vpn:
                entry.valid = False

    def flush_by_asid(self, asid: int) -> None:
        """Invalidate every entry of address space ``asid``."""
        for entry in self._entries:
            if entry.asid == asid:
                entry.valid = False

    def valid_count(self) -> int:
        """Number of valid entries."""
        return sum(entry.valid for entry in self._entries)


@dataclass(frozen=True)
class PageMapping:
    """A page table mapping from ``vpn`` to ``ppn`` with ``flags``."""

    vpn: int
    ppn: int
    flags: int


@dataclass
class Mmu:
    """A TLB backed by a simple page table of per-ASID mappings."""

    tlb: Tlb
    current_asid: int = 0
    _page_table: List[Tuple[int, PageMapping]] = field(default_factory=list)

    def __init__(self, tlb_capacity: int) -> None:
        self.tlb = Tlb(tlb_capacity)
        self.current_asid = 0
        self._page_table = []

    def add_mapping(self, asid: int, vpn: int, ppn: int, flags: int) -> None:
        """Add a mapping to the page table of address space ``asid``."""
        _check_asid(asid)
        self._page_table.append((asid, PageMapping(vpn, ppn, flags)))

    def switch_asid(self, new_asid: int) -> None:
        """Make ``new_asid`` the current address space."""
        self.current_asid = _check_asid(new_asid)

    def translate(self, vpn: int) -> Optional[int]:
        """Translate ``vpn`` in the current address space.

        Returns the PPN, filling the TLB on a miss, or None on a page fault.
        """
        asid = self.current_asid
        ppn = self.tlb.lookup(vpn, asid)
        if ppn is not None:
            return ppn
        mapping = next(
            (m for a, m in self._page_table if a == asid and m.vpn == vpn), None
        )
        if mapping is None:
            return None
        self.tlb.insert(vpn, mapping.ppn, asid, mapping.flags)
        return mapping.ppn