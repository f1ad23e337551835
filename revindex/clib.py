"""Small C-library style helpers: number parsing, string comparison,
character classes, bit arithmetic and a deterministic random generator."""

from __future__ import annotations

from itertools import islice, zip_longest
from typing import Optional, Tuple, Union

RAND_MAX = 0x7FFFFFFF
ULONG_MAX = (1 << 64) - 1
LONG_MAX = (1 << 63) - 1
LONG_MIN = -(1 << 63)

E_AGAIN = -11
E_NOMEM = -12
E_INVAL = -22
E_RANGE = -34
E_MINERROR = -100

PID_MAX = 16

_SPACE_CHARS = "\t\n\v\f\r "
_RAND_MULTIPLIER = 6364136223846793005

Text = Union[str, bytes, bytearray]
Char = Union[int, str]


# ---------------------------------------------------------------------------
# Pseudorandom numbers


class Rand:
    """Linear congruential generator producing values in ``[0, RAND_MAX]``."""

    DEFAULT_SEED = 819234718

    def __init__(self, seed: Optional[int] = None) -> None:
        self._state = 0
        self.seed(self.DEFAULT_SEED if seed is None else seed)

    def seed(self, seed: int) -> None:
        """Reset the generator from a 32-bit seed."""
        s = seed & 0xFFFFFFFF
        self._state = (s << 32) | s

    def next(self) -> int:
        """Return the next value in ``[0, RAND_MAX]``."""
        self._state = (self._state * _RAND_MULTIPLIER + 1) & ULONG_MAX
        return (self._state >> 33) & RAND_MAX

    def randint(self, low: int, high: int) -> int:
        """Return a value evenly distributed in ``[low, high]`` inclusive."""
        if low > high:
            raise ValueError(f"empty range: {low} > {high}")
        if high - low > RAND_MAX:
            raise ValueError("range wider than RAND_MAX")
        span = high - low + 1
        div = (RAND_MAX + 1) // span
        top = div * span
        while True:
            r = self.next()
            if r < top:
                return low + r // div


# ---------------------------------------------------------------------------
# Number parsing


def _digit(ch: str, base: int) -> Optional[int]:
    o = ord(ch)
    if 48 <= o < 48 + base:
        return o - 48
    if 97 <= o < 97 + base - 10:
        return o - 97 + 10
    if 65 <= o < 65 + base - 10:
        return o - 65 + 10
    return None


def _scan(text: str, start: int, base: int) -> Tuple[int, int, bool]:
    """Read digits from ``start``; return (value, end position, overflowed)."""
    if base < 2:
        raise ValueError(f"invalid base {base}")
    value = 0
    overflow = False
    pos = start
    for ch in text[start:]:
        d = _digit(ch, base)
        if d is None:
            break
        if value > (ULONG_MAX - d) // base:
            overflow = True
        else:
            value = value * base + d
        pos += 1
    return value, pos, overflow


def from_chars(text: str, base: int = 10) -> Tuple[int, int]:
    """Parse an unsigned 64-bit number at the start of ``text``.

    Returns ``(value, end)``. Raises ValueError if no digits are present and
    OverflowError if the number does not fit in 64 bits.
    """
    value, end, overflow = _scan(text, 0, base)
    if end == 0:
        raise ValueError(f"no digits in {text!r}")
    if overflow:
        raise OverflowError(f"number out of range in {text!r}")
    return value, end


def from_chars_signed(text: str, base: int = 10) -> Tuple[int, int]:
    """Parse a signed 64-bit number (optional leading '-') at the start of ``text``."""
    negative = text.startswith("-")
    start = int(negative)
    value, end, overflow = _scan(text, start, base)
    if end == start:
        raise ValueError(f"no digits in {text!r}")
    if overflow or value > (1 << 63) - (not negative):
        raise OverflowError(f"number out of range in {text!r}")
    return (-value if negative else value), end


def _prepare(text: str, base: int) -> Tuple[int, bool, int]:
    pos = len(text) - len(text.lstrip(_SPACE_CHARS))
    sign = text[pos:pos + 1]
    negative = sign == "-"
    if sign in ("-", "+"):
        pos += 1
    if base == 0:
        if text[pos:pos + 1] == "0":
            marker = text[pos + 1:pos + 2]
            if marker in ("x", "X"):
                base, pos = 16, pos + 2
            elif marker in ("o", "O"):
                base, pos = 8, pos + 2
            elif marker in ("b", "B"):
                base, pos = 2, pos + 2
            else:
                base = 8
        else:
            base = 10
    elif base == 16 and text[pos:pos + 2] in ("0x", "0X"):
        pos += 2
    return pos, negative, base


def strtoul(text: str, base: int = 0) -> Tuple[int, int]:
    """Parse an unsigned long; return ``(value, end)``.

    With no digits the result is ``(0, 0)``. Overflow yields ULONG_MAX, and a
    leading '-' negates the value modulo 2**64.
    """
    pos, negative, base = _prepare(text, base)
    value, end, overflow = _scan(text, pos, base)
    if end == pos:
        return 0, 0
    if overflow:
        value = ULONG_MAX
    if negative:
        value = (-value) & ULONG_MAX
    return value, end


def strtol(text: str, base: int = 0) -> Tuple[int, int]:
    """Parse a signed long; return ``(value, end)``, clamping on overflow."""
    pos, negative, base = _prepare(text, base)
    value, end, overflow = _scan(text, pos, base)
    if end == pos:
        return 0, 0
    bound = (1 << 63) - (not negative)
    if overflow or value > bound:
        value = bound
    return (-value if negative else value), end


# ---------------------------------------------------------------------------
# Strings and memory


def _cstr(s: Text) -> Text:
    """Cut a string at its first NUL."""
    if isinstance(s, str):
        return s.split("\0", 1)[0]
    return bytes(s).split(b"\0", 1)[0]


def _codes(s: Text) -> list:
    s = _cstr(s)
    if isinstance(s, str):
        return [ord(c) for c in s]
    return list(s)


def _lower_code(c: int) -> int:
    return c + 32 if 65 <= c <= 90 else c


def _compare(a: Text, b: Text, n: Optional[int], fold: bool) -> int:
    pairs = zip_longest(_codes(a) + [0], _codes(b) + [0], fillvalue=0)
    if n is not None:
        pairs = islice(pairs, max(n, 0))
    for x, y in pairs:
        if fold:
            x, y = _lower_code(x), _lower_code(y)
        if x == 0 or y == 0 or x != y:
            return (x > y) - (x < y)
    return 0


def strcmp(a: Text, b: Text) -> int:
    """Compare two strings; return -1, 0 or 1."""
    return _compare(a, b, None, False)


def strncmp(a: Text, b: Text, n: int) -> int:
    """Compare at most ``n`` characters of two strings."""
    return _compare(a, b, n, False)


def strcasecmp(a: Text, b: Text) -> int:
    """Compare two strings ignoring ASCII case."""
    return _compare(a, b, None, True)


def strncasecmp(a: Text, b: Text, n: int) -> int:
    """Compare at most ``n`` characters ignoring ASCII case."""
    return _compare(a, b, n, True)


def strstr(haystack: Text, needle: Text) -> Optional[int]:
    """Return the offset of ``needle`` in ``haystack``, or None."""
    pos = _cstr(haystack).find(_cstr(needle))
    return pos if pos >= 0 else None


def strlcpy(src: Text, maxlen: int) -> Tuple[Text, int]:
    """Return the copy that fits in a ``maxlen`` buffer and the source length."""
    s = _cstr(src)
    return s[:max(maxlen - 1, 0)], len(s)


def memcmp(a: bytes, b: bytes) -> int:
    """Compare two equally sized byte buffers as unsigned bytes."""
    a, b = bytes(a), bytes(b)
    if len(a) != len(b):
        raise ValueError("buffers differ in size")
    for x, y in zip(a, b):
        if x != y:
            return (x > y) - (x < y)
    return 0


# ---------------------------------------------------------------------------
# Character classes


def _code(c: Char) -> int:
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        return ord(c)
    return c


def isspace(c: Char) -> bool:
    code = _code(c)
    return 9 <= code <= 13 or code == 32


def isdigit(c: Char) -> bool:
    return 48 <= _code(c) <= 57


def islower(c: Char) -> bool:
    return 97 <= _code(c) <= 122


def isupper(c: Char) -> bool:
    return 65 <= _code(c) <= 90


def isalpha(c: Char) -> bool:
    code = _code(c)
    return code >= 0 and 97 <= (code | 0x20) <= 122


def isalnum(c: Char) -> bool:
    return isalpha(c) or isdigit(c)


def tolower(c: Char) -> Char:
    code = _code(c)
    result = code + 32 if isupper(code) else code
    return chr(result) if isinstance(c, str) else result


def toupper(c: Char) -> Char:
    code = _code(c)
    result = code - 32 if islower(code) else code
    return chr(result) if isinstance(c, str) else result


# ---------------------------------------------------------------------------
# Arithmetic


def msb(x: int) -> int:
    """Index of the most significant one bit plus one; 0 for 0."""
    if x < 0:
        raise ValueError("msb requires a non-negative value")
    return x.bit_length()


def lsb(x: int) -> int:
    """Index of the least significant one bit plus one; 0 for 0."""
    return (x & -x).bit_length()


def _check_unsigned(x: int, m: int) -> None:
    if x < 0:
        raise ValueError("value must be non-negative")
    if m <= 0:
        raise ValueError("multiple must be positive")


def round_down(x: int, m: int) -> int:
    """Largest multiple of ``m`` not above ``x``."""
    _check_unsigned(x, m)
    return x - x % m


def round_up(x: int, m: int) -> int:
    """Smallest multiple of ``m`` not below ``x``."""
    _check_unsigned(x, m)
    return round_down(x + m - 1, m)


def round_down_pow2(x: int) -> int:
    """Largest power of two not above ``x``; 0 for 0."""
    return 1 << (msb(x) - 1) if x else 0


def round_up_pow2(x: int) -> int:
    """Smallest power of two not below ``x``; 0 for 0."""
    return 1 << msb(x - 1) if x else 0


def is_error(r: int) -> bool:
    """True if ``r``, viewed as an unsigned 64-bit word, is an error code."""
    return (r & ULONG_MAX) >= (E_MINERROR & ULONG_MAX)