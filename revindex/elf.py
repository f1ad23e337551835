"""Little-endian ELF64 structures: executable header, program headers,
section headers and symbol-table entries."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, List

ELF_MAGIC = 0x464C457F  # "\x7FELF" read as a little-endian word

ELF_ET_EXEC = 2

ELF_PTYPE_LOAD = 1

ELF_PFLAG_EXEC = 1
ELF_PFLAG_WRITE = 2
ELF_PFLAG_READ = 4

ELF_SHT_NULL = 0
ELF_SHT_PROGBITS = 1
ELF_SHT_SYMTAB = 2
ELF_SHT_STRTAB = 3
ELF_SHT_NOBITS = 8

ELF_SHF_ALLOC = 2

ELF_STN_UNDEF = 0

ELF_SHN_UNDEF = 0
ELF_SHN_ABS = 0xFFF1
ELF_SHN_COMMON = 0xFFF2

ELF_STB_MASK = 0xF0
ELF_STB_LOCAL = 0x00
ELF_STB_GLOBAL = 0x10
ELF_STB_WEAK = 0x20
ELF_STT_MASK = 0x0F
ELF_STT_OBJECT = 0x01
ELF_STT_FUNC = 0x02


def _unpack(layout: struct.Struct, data: bytes, offset: int, name: str) -> tuple:
    if offset < 0 or offset + layout.size > len(data):
        raise ValueError(
            f"{name} needs {layout.size} bytes at offset {offset}, "
            f"buffer holds {len(data)}"
        )
    return layout.unpack_from(data, offset)


@dataclass
class ElfHeader:
    """The executable header at the start of an ELF file."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<I12sHHIQQQIHHHHHH")

    e_magic: int = ELF_MAGIC
    e_elf: bytes = field(default=bytes(12))
    e_type: int = 0
    e_machine: int = 0
    e_version: int = 0
    e_entry: int = 0
    e_phoff: int = 0
    e_shoff: int = 0
    e_flags: int = 0
    e_ehsize: int = 0
    e_phentsize: int = 0
    e_phnum: int = 0
    e_shentsize: int = 0
    e_shnum: int = 0
    e_shstrndx: int = 0

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> "ElfHeader":
        """Decode a header from ``data`` at ``offset``."""
        return cls(*_unpack(cls.LAYOUT, bytes(data), offset, "ELF header"))

    def to_bytes(self) -> bytes:
        """Encode this header."""
        if len(self.e_elf) != 12:
            raise ValueError("e_elf must be exactly 12 bytes")
        return self.LAYOUT.pack(
            self.e_magic, bytes(self.e_elf), self.e_type, self.e_machine,
            self.e_version, self.e_entry, self.e_phoff, self.e_shoff,
            self.e_flags, self.e_ehsize, self.e_phentsize, self.e_phnum,
            self.e_shentsize, self.e_shnum, self.e_shstrndx,
        )

    def is_valid(self) -> bool:
        """True if the magic number marks this as an ELF file."""
        return self.e_magic == ELF_MAGIC


@dataclass
class ElfProgram:
    """A program header describing one loadable segment."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<IIQQQQQQ")

    p_type: int = 0
    p_flags: int = 0
    p_offset: int = 0
    p_va: int = 0
    p_pa: int = 0
    p_filesz: int = 0
    p_memsz: int = 0
    p_align: int = 0

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> "ElfProgram":
        """Decode a program header from ``data`` at ``offset``."""
        return cls(*_unpack(cls.LAYOUT, bytes(data), offset, "program header"))

    def to_bytes(self) -> bytes:
        """Encode this program header."""
        return self.LAYOUT.pack(
            self.p_type, self.p_flags, self.p_offset, self.p_va,
            self.p_pa, self.p_filesz, self.p_memsz, self.p_align,
        )


@dataclass
class ElfSection:
    """A section header."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<IIQQQQIIQQ")

    sh_name: int = 0
    sh_type: int = 0
    sh_flags: int = 0
    sh_addr: int = 0
    sh_offset: int = 0
    sh_size: int = 0
    sh_link: int = 0
    sh_info: int = 0
    sh_addralign: int = 0
    sh_entsize: int = 0

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> "ElfSection":
        """Decode a section header from ``data`` at ``offset``."""
        return cls(*_unpack(cls.LAYOUT, bytes(data), offset, "section header"))

    def to_bytes(self) -> bytes:
        """Encode this section header."""
        return self.LAYOUT.pack(
            self.sh_name, self.sh_type, self.sh_flags, self.sh_addr,
            self.sh_offset, self.sh_size, self.sh_link, self.sh_info,
            self.sh_addralign, self.sh_entsize,
        )


@dataclass
class ElfSymbol:
    """A symbol-table entry."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<IBBHQQ")

    st_name: int = 0
    st_info: int = 0
    st_other: int = 0
    st_shndx: int = 0
    st_value: int = 0
    st_size: int = 0

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> "ElfSymbol":
        """Decode a symbol from ``data`` at ``offset``."""
        return cls(*_unpack(cls.LAYOUT, bytes(data), offset, "symbol"))

    def to_bytes(self) -> bytes:
        """Encode this symbol."""
        return self.LAYOUT.pack(
            self.st_name, self.st_info, self.st_other,
            self.st_shndx, self.st_value, self.st_size,
        )

    @property
    def binding(self) -> int:
        """The STB_* part of ``st_info``."""
        return self.st_info & ELF_STB_MASK

    @property
    def kind(self) -> int:
        """The STT_* part of ``st_info``."""
        return self.st_info & ELF_STT_MASK


def program_headers(data: bytes, header: ElfHeader) -> List[ElfProgram]:
    """Decode all program headers that ``header`` describes within ``data``."""
    if not header.is_valid():
        raise ValueError("not an ELF file: bad magic number")
    if header.e_phnum and header.e_phentsize < ElfProgram.LAYOUT.size:
        raise ValueError(
            f"program header entry size {header.e_phentsize} is too small"
        )
    data = bytes(data)
    return [
        ElfProgram.from_bytes(data, header.e_phoff + i * header.e_phentsize)
        for i in range(header.e_phnum)
    ]