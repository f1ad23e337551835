"""printf-style formatting onto generic printers, strings and an
80x25 text console with colour attributes."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Tuple, Union

from revindex.clib import ULONG_MAX

CONSOLE_COLUMNS = 80
CONSOLE_ROWS = 25
END_CPOS = CONSOLE_ROWS * CONSOLE_COLUMNS

COLOR_ERROR = 0xC000
COLOR_SUCCESS = 0x0A00
COLOR_NORMAL = 0x0700

_FLAG_CHARS = "#0- +'"
FLAG_ALT = 1 << 0
FLAG_ZERO = 1 << 1
FLAG_LEFTJUSTIFY = 1 << 2
FLAG_SPACEPOSITIVE = 1 << 3
FLAG_PLUSPOSITIVE = 1 << 4
FLAG_THOUSANDS = 1 << 5
FLAG_NUMERIC = 1 << 6
FLAG_SIGNED = 1 << 7
FLAG_NEGATIVE = 1 << 8
FLAG_ALT2 = 1 << 9

_SPEC = re.compile(
    r"%(?P<flags>[#0\- +']*)"
    r"(?P<width>[1-9][0-9]*|\*)?"
    r"(?P<dot>\.(?P<precision>[0-9]+|\*)?)?"
    r"(?P<length>[ltzh])?"
    r"(?P<conv>.?)"
    r"|(?P<literal>[^%]+)",
    re.DOTALL,
)


def cpos(row: int, col: int) -> int:
    """Cursor position of ``row`` and ``col``."""
    return row * CONSOLE_COLUMNS + col


def crow(pos: int) -> int:
    """Row of a cursor position."""
    return pos // CONSOLE_COLUMNS


def ccol(pos: int) -> int:
    """Column of a cursor position."""
    return pos % CONSOLE_COLUMNS


def _cut(text: str) -> str:
    return text.split("\0", 1)[0]


def _signed(value: Any, bits: int) -> int:
    v = int(value) & ((1 << bits) - 1)
    return v - (1 << bits) if v >= 1 << (bits - 1) else v


def _unsigned(value: Any, bits: int) -> int:
    return int(value) & ((1 << bits) - 1)


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return _cut(value)
    if isinstance(value, (bytes, bytearray)):
        return _cut(bytes(value).decode("latin-1"))
    raise TypeError(f"%s expects a string, got {type(value).__name__}")


def _as_char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c expects a single character")
        ch = value
    else:
        ch = chr(int(value) & 0xFF)
    return "" if ch == "\0" else ch


def _number(num: int, hexadecimal: bool, lower: bool, thousands: bool) -> str:
    digits = format(num, ("x" if lower else "X") if hexadecimal else "d")
    if not thousands:
        return digits
    size, sep = (4, "'") if hexadecimal else (3, ",")
    groups = [digits[max(end - size, 0):end]
              for end in range(len(digits), 0, -size)]
    return sep.join(reversed(groups))


class Printer(ABC):
    """Sink for characters that knows how to format printf-style text."""

    color: int = COLOR_NORMAL

    @abstractmethod
    def putc(self, c: str) -> None:
        """Emit one character."""

    def printf(self, fmt: str, *args: Any) -> None:
        """Format ``args`` according to ``fmt`` and emit the result.

        Raises TypeError if ``fmt`` asks for more arguments than given.
        """
        supply: Iterator[Any] = iter(args)

        def take() -> Any:
            try:
                return next(supply)
            except StopIteration:
                raise TypeError("not enough arguments for format") from None

        for m in _SPEC.finditer(_cut(fmt)):
            literal = m.group("literal")
            if literal is not None:
                for ch in literal:
                    self.putc(ch)
                continue
            self._conversion(m, take)

    def _conversion(self, m: "re.Match[str]", take) -> None:
        flags = 0
        for ch in m.group("flags"):
            flags |= 1 << _FLAG_CHARS.index(ch)

        width = -1
        w = m.group("width")
        if w == "*":
            width = int(take())
        elif w:
            width = int(w)

        precision = -1
        if m.group("dot"):
            p = m.group("precision")
            if p == "*":
                precision = int(take())
            elif p:
                precision = int(p)
            precision = max(precision, 0)

        long = m.group("length") in ("l", "t", "z")
        bits = 64 if long else 32
        conv = m.group("conv")

        hexadecimal = False
        lower = False
        num = 0
        data = ""

        if conv in ("d", "i"):
            x = _signed(take(), bits)
            if x < 0:
                flags |= FLAG_NEGATIVE
            num = -x if x < 0 else x
            flags |= FLAG_NUMERIC | FLAG_SIGNED
        elif conv in ("u", "x", "X"):
            num = _unsigned(take(), bits)
            hexadecimal = conv != "u"
            lower = conv == "x"
            flags |= FLAG_NUMERIC
        elif conv == "p":
            num = int(take()) & ULONG_MAX
            hexadecimal = lower = True
            flags |= FLAG_ALT | FLAG_ALT2 | FLAG_NUMERIC
        elif conv == "s":
            data = _as_text(take())
        elif conv == "C":
            self.color = int(take())
            return
        elif conv == "c":
            data = _as_char(take())
        else:
            data = conv or "%"

        numeric = bool(flags & FLAG_NUMERIC)
        if numeric:
            data = _number(num, hexadecimal, lower,
                           bool(flags & FLAG_THOUSANDS))

        prefix = ""
        if numeric and flags & FLAG_SIGNED:
            if flags & FLAG_NEGATIVE:
                prefix = "-"
            elif flags & FLAG_PLUSPOSITIVE:
                prefix = "+"
            elif flags & FLAG_SPACEPOSITIVE:
                prefix = " "
        elif (numeric and flags & FLAG_ALT and hexadecimal
              and (num or flags & FLAG_ALT2)):
            prefix = "0x" if lower else "0X"

        if precision >= 0 and not numeric:
            data = data[:precision]

        if numeric and precision >= 0:
            zeros = max(precision - len(data), 0)
        elif (numeric and flags & FLAG_ZERO
              and not flags & FLAG_LEFTJUSTIFY
              and len(data) + len(prefix) < width):
            zeros = width - len(data) - len(prefix)
        else:
            zeros = 0

        width -= len(data) + zeros + len(prefix)
        left = not flags & FLAG_LEFTJUSTIFY
        pieces = [
            " " * width if left and width > 0 else "",
            prefix,
            "0" * zeros,
            data,
            " " * width if not left and width > 0 else "",
        ]
        for ch in "".join(pieces):
            self.putc(ch)


class StringPrinter(Printer):
    """Printer that collects its output into a string."""

    def __init__(self) -> None:
        self._chars: List[str] = []

    def putc(self, c: str) -> None:
        self._chars.append(c)

    def getvalue(self) -> str:
        """Everything printed so far."""
        return "".join(self._chars)


def format_string(fmt: str, *args: Any) -> str:
    """Return the formatted text."""
    sp = StringPrinter()
    sp.printf(fmt, *args)
    return sp.getvalue()


def snprintf(size: int, fmt: str, *args: Any) -> Tuple[str, int]:
    """Format into a buffer of ``size`` bytes.

    Returns the text that fits (at most ``size - 1`` characters) and the
    length the full output would have had.
    """
    full = format_string(fmt, *args)
    kept = full[:size - 1] if size > 0 else ""
    return kept, len(full)


class Console:
    """An 80x25 grid of 16-bit cells: character in the low byte, colour above."""

    def __init__(self) -> None:
        self.cells: List[int] = [0] * END_CPOS
        self.cursorpos = 0

    def clear(self) -> None:
        """Blank every cell and move the cursor to the top left."""
        self.cells = [ord(" ") | COLOR_NORMAL] * END_CPOS
        self.cursorpos = 0

    def puts(self, cpos: int, color: int, text: Union[str, bytes]) -> int:
        """Write ``text`` at ``cpos`` (the cursor if negative); return the end position."""
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("latin-1")
        cp = ConsolePrinter(self, cpos, cpos < 0, color)
        for ch in text:
            cp.putc(ch)
        if cpos < 0:
            cp.move_cursor()
        return cp.cell

    def printf(self, cpos: int, color: int, fmt: str, *args: Any) -> int:
        """Format onto the console at ``cpos`` (the cursor if negative); return the end position."""
        cp = ConsolePrinter(self, cpos, cpos < 0, color)
        cp.printf(fmt, *args)
        if cpos < 0:
            cp.move_cursor()
        return cp.cell

    def row_text(self, row: int) -> str:
        """Characters of one row; empty cells read as spaces."""
        if not 0 <= row < CONSOLE_ROWS:
            raise IndexError(f"row {row} out of range")
        start = row * CONSOLE_COLUMNS
        return "".join(
            chr(cell & 0xFF) if cell & 0xFF else " "
            for cell in self.cells[start:start + CONSOLE_COLUMNS]
        )


class ConsolePrinter(Printer):
    """Printer writing into a Console, scrolling or wrapping at the bottom."""

    def __init__(self, console: Console, cpos: int, scroll: bool,
                 color: int = COLOR_NORMAL) -> None:
        self.console = console
        self.scrolling = scroll
        self.color = color
        if cpos < 0:
            self.cell = console.cursorpos
        elif cpos <= END_CPOS:
            self.cell = cpos
        else:
            self.cell = 0

    def scroll(self) -> None:
        """Move up one row, or wrap to the top when scrolling is off."""
        if self.cell < END_CPOS:
            raise RuntimeError("scroll called before the end of the console")
        if self.scrolling:
            cells = self.console.cells
            del cells[:CONSOLE_COLUMNS]
            cells.extend([0] * CONSOLE_COLUMNS)
            self.cell -= CONSOLE_COLUMNS
        else:
            self.cell = 0

    def move_cursor(self) -> None:
        """Put the console cursor where the next character would go."""
        self.console.cursorpos = self.cell

    def putc(self, c: str) -> None:
        while self.cell >= END_CPOS:
            self.scroll()
        cells = self.console.cells
        color = self.color & 0xFFFF
        if c == "\n":
            end = self.cell - ccol(self.cell) + CONSOLE_COLUMNS
            for pos in range(self.cell, end):
                cells[pos] = ord(" ") | color
            self.cell = end
        else:
            cells[self.cell] = (ord(c) & 0xFF) | color
            self.cell += 1