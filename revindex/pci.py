"""PCI configuration-space addressing: packing and unpacking of
bus/slot/function triples into configuration addresses."""

from __future__ import annotations

REG_HOST_BRIDGE_CONFIG_ADDR = 0xCF8
REG_HOST_BRIDGE_CONFIG_DATA = 0xCFC

CONFIG_VENDOR = 0
CONFIG_COMMAND = 4
CONFIG_RPSC = 8
CONFIG_SUBCLASS = 10
CONFIG_LTHB = 12
CONFIG_BAR0 = 16
CONFIG_BAR1 = 20
CONFIG_BAR2 = 24
CONFIG_BAR3 = 28
CONFIG_BAR4 = 32
CONFIG_BAR5 = 36

# Addresses at or above this value lie beyond the eighth bus.
PCI_ADDR_END = 0x80000

_ADDR_LIMIT = 0x1000000


def pci_make_addr(bus: int, slot: int, func: int) -> int:
    """Configuration address of function ``func`` of ``slot`` on ``bus``."""
    if not 0 <= bus < 256:
        raise ValueError(f"bus {bus} out of range [0, 256)")
    if not 0 <= slot < 32:
        raise ValueError(f"slot {slot} out of range [0, 32)")
    if not 0 <= func < 8:
        raise ValueError(f"function {func} out of range [0, 8)")
    return (bus << 16) | (slot << 11) | (func << 8)


def _check_addr(addr: int) -> None:
    if not 0 <= addr < _ADDR_LIMIT:
        raise ValueError(f"PCI address {addr:#x} out of range")


def pci_addr_bus(addr: int) -> int:
    """Bus number of a configuration address."""
    _check_addr(addr)
    return addr >> 16


def pci_addr_slot(addr: int) -> int:
    """Slot number of a configuration address."""
    _check_addr(addr)
    return (addr >> 11) & 0x1F


def pci_addr_func(addr: int) -> int:
    """Function number of a configuration address."""
    _check_addr(addr)
    return (addr >> 8) & 0x7