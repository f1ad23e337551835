"""Word search with context over text files, printf formatting, a text
console, and C-style, paging, PCI and ELF helpers."""

__version__ = "0.1.0"

__all__ = ["clib", "printer", "paging", "pci", "elf", "wordindex"]