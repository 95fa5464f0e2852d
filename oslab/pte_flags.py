"""Building and decoding RISC-V SV39 page table entries.

Layout of the 64-bit entry: bits 0-7 hold the flags V R W X U G A D,
bits 8-9 are reserved for software, bits 10-53 hold the 44-bit physical
page number, and bits 54-63 are reserved.
"""

from __future__ import annotations

import enum

_U64_MASK = (1 << 64) - 1
_FLAGS_MASK = 0xFF
PPN_SHIFT = 10
PPN_MASK = (1 << 44) - 1


class PteFlags(enum.IntFlag):
    V = 1 << 0  # valid
    R = 1 << 1  # readable
    W = 1 << 2  # writable
    X = 1 << 3  # executable
    U = 1 << 4  # user accessible
    G = 1 << 5  # global
    A = 1 << 6  # accessed
    D = 1 << 7  # dirty


PTE_V = PteFlags.V
PTE_R = PteFlags.R
PTE_W = PteFlags.W
PTE_X = PteFlags.X
PTE_U = PteFlags.U
PTE_G = PteFlags.G
PTE_A = PteFlags.A
PTE_D = PteFlags.D


def _check_u64(value: int, name: str) -> int:
    if not 0 <= value <= _U64_MASK:
        raise ValueError(f"{name} {value} does not fit in an unsigned 64-bit integer")
    return value


def make_pte(ppn: int, flags: int) -> int:
    """Build an entry from a physical page number and flags.

    Only the low 8 bits of ``flags`` are kept; the result is truncated to
    64 bits.
    """
    _check_u64(ppn, "ppn")
    _check_u64(int(flags), "flags")
    return ((ppn << PPN_SHIFT) | (int(flags) & _FLAGS_MASK)) & _U64_MASK


def extract_ppn(pte: int) -> int:
    """Return the 44-bit physical page number of an entry."""
    return (_check_u64(pte, "pte") >> PPN_SHIFT) & PPN_MASK


def extract_flags(pte: int) -> PteFlags:
    """Return the low 8 flag bits of an entry."""
    return PteFlags(_check_u64(pte, "pte") & _FLAGS_MASK)


def is_valid(pte: int) -> bool:
    """Whether the V bit is set."""
    return bool(_check_u64(pte, "pte") & PteFlags.V)


def is_leaf(pte: int) -> bool:
    """Whether any of R, W or X is set, making the entry a leaf."""
    return bool(_check_u64(pte, "pte") & (PteFlags.R | PteFlags.W | PteFlags.X))


def check_permission(pte: int, read: bool, write: bool, execute: bool) -> bool:
    """Whether the entry is valid and grants every requested access."""
    if not is_valid(pte):
        return False
    required = (
        (PteFlags.R if read else PteFlags(0))
        | (PteFlags.W if write else PteFlags(0))
        | (PteFlags.X if execute else PteFlags(0))
    )
    return pte & required == required