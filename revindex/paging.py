"""x86-64 four-level paging: address constants and helpers that split a
virtual address into page-table indexes and page offsets."""

from __future__ import annotations

from revindex.clib import ULONG_MAX

PAGEOFFBITS = 12
PAGEINDEXBITS = 9
PAGESIZE = 1 << PAGEOFFBITS
PAGEOFFMASK = PAGESIZE - 1
PAGETABLE_ENTRIES = 1 << PAGEINDEXBITS

PTE_P = 0x1
PTE_W = 0x2
PTE_U = 0x4
PTE_PWU = 0x7
PTE_PWT = 0x8
PTE_PCD = 0x10
PTE_A = 0x20
PTE_D = 0x40
PTE_PS = 0x80
PTE_OS1 = 0x200
PTE_OS2 = 0x400
PTE_OS3 = 0x800
PTE_XD = 0x8000000000000000

PTE_PAMASK = 0x000FFFFFFFFFF000
PTE_PS_PAMASK = 0x000FFFFFFFFFE000

VA_LOWMIN = 0
VA_LOWMAX = 0x00007FFFFFFFFFFF
VA_LOWEND = 0x0000800000000000
VA_HIGHMIN = 0xFFFF800000000000
VA_HIGHMAX = 0xFFFFFFFFFFFFFFFF
VA_NONCANONMAX = 0x0000FFFFFFFFFFFF
VA_NONCANONEND = 0x0001000000000000

PA_IOLOWMIN = 0x00000000000A0000
PA_IOLOWEND = 0x0000000000100000
PA_IOHIGHMIN = 0x00000000C0000000
PA_IOHIGHEND = 0x0000000100000000

PFERR_PRESENT = PTE_P
PFERR_WRITE = PTE_W
PFERR_USER = PTE_U

_INDEX_MASK = PAGETABLE_ENTRIES - 1


def _shift(level: int) -> int:
    if level < 0:
        raise ValueError(f"page table level must be non-negative, got {level}")
    return PAGEOFFBITS + level * PAGEINDEXBITS


def pageindex(addr: int, level: int) -> int:
    """Index into the page table at ``level`` (0 is the lowest) for ``addr``."""
    return ((addr & ULONG_MAX) >> _shift(level)) & _INDEX_MASK


def pageoffmask(level: int) -> int:
    """Mask of the address bits below the page-table index at ``level``."""
    shift = _shift(level)
    if shift >= 64:
        return ULONG_MAX
    return (1 << shift) - 1


def pageoffset(addr: int, level: int) -> int:
    """Offset of ``addr`` within its page at ``level``."""
    return (addr & ULONG_MAX) & pageoffmask(level)


def va_is_canonical(va: int) -> bool:
    """True if ``va``, as an unsigned 64-bit address, is canonical."""
    v = va & ULONG_MAX
    return v <= VA_LOWMAX or v >= VA_HIGHMIN