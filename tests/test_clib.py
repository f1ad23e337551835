import pytest

from revindex import clib


# --- arithmetic (values fixed by the source's static checks) ---------------

@pytest.mark.parametrize(
    "x, expected",
    [(0, 0), (1, 1), (2, 2), (3, 2), (0x1FABC, 17), (0x1FFFF, 17)],
)
def test_msb_static_values(x, expected):
    assert clib.msb(x) == expected


@pytest.mark.parametrize(
    "x, expected", [(0, 0), (1, 1), (2, 2), (3, 2), (0x1FABC, 0x10000)]
)
def test_round_down_pow2_static_values(x, expected):
    assert clib.round_down_pow2(x) == expected


@pytest.mark.parametrize(
    "x, expected",
    [(0, 0), (1, 1), (2, 2), (3, 4), (0x1FABC, 0x20000), (0x1FFFF, 0x20000)],
)
def test_round_up_pow2_static_values(x, expected):
    assert clib.round_up_pow2(x) == expected


def test_msb_negative_rejected():
    with pytest.raises(ValueError):
        clib.msb(-1)


def test_lsb_zero():
    assert clib.lsb(0) == 0


@pytest.mark.parametrize("k", [0, 1, 5, 31, 63])
def test_lsb_of_power_of_two(k):
    assert clib.lsb(1 << k) == k + 1


@pytest.mark.parametrize("x", [6, 40, 0x1FABC, 12345, 1 << 40 | 1 << 50])
def test_lsb_invariant(x):
    n = clib.lsb(x)
    assert x % (1 << (n - 1)) == 0
    assert (x >> (n - 1)) % 2 == 1


@pytest.mark.parametrize("x", [0, 1, 7, 4096, 4097, 123456])
@pytest.mark.parametrize("m", [1, 3, 4096])
def test_round_down_and_up(x, m):
    down = clib.round_down(x, m)
    up = clib.round_up(x, m)
    assert down % m == 0 and down <= x < down + m
    assert up % m == 0 and x <= up < x + m


def test_round_errors():
    with pytest.raises(ValueError):
        clib.round_down(-1, 4)
    with pytest.raises(ValueError):
        clib.round_up(5, 0)


def test_round_pow2_invariants():
    for x in range(1, 300):
        d = clib.round_down_pow2(x)
        u = clib.round_up_pow2(x)
        assert d & (d - 1) == 0 and u & (u - 1) == 0
        assert d <= x <= u


# --- error codes -----------------------------------------------------------

def test_is_error():
    assert clib.is_error(clib.E_NOMEM)
    assert clib.is_error(clib.E_INVAL)
    assert clib.is_error(clib.E_MINERROR)
    assert not clib.is_error(clib.E_MINERROR - 1)
    assert not clib.is_error(0)


# --- random numbers --------------------------------------------------------

def test_rand_default_seed_matches_explicit():
    a = clib.Rand()
    b = clib.Rand(819234718)
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]


def test_rand_reseed_repeats_sequence():
    r = clib.Rand(42)
    first = [r.next() for _ in range(10)]
    r.seed(42)
    assert [r.next() for _ in range(10)] == first


def test_rand_range():
    r = clib.Rand(7)
    assert all(0 <= r.next() <= clib.RAND_MAX for _ in range(1000))


def test_randint_bounds():
    r = clib.Rand(3)
    values = [r.randint(-5, 5) for _ in range(2000)]
    assert all(-5 <= v <= 5 for v in values)
    assert set(values) == set(range(-5, 6))


def test_randint_single_value():
    r = clib.Rand(1)
    assert {r.randint(3, 3) for _ in range(50)} == {3}


def test_randint_full_span():
    r = clib.Rand(9)
    assert all(0 <= r.randint(0, clib.RAND_MAX) <= clib.RAND_MAX for _ in range(100))


def test_randint_errors():
    r = clib.Rand(1)
    with pytest.raises(ValueError):
        r.randint(5, 4)
    with pytest.raises(ValueError):
        r.randint(-1, clib.RAND_MAX)


# --- from_chars ------------------------------------------------------------

def test_from_chars_stops_at_non_digit():
    assert clib.from_chars("123abc", 10) == (123, 3)


def test_from_chars_hex_roundtrip():
    n = 0xDEADBEEF
    text = format(n, "x")
    assert clib.from_chars(text, 16) == (n, len(text))


def test_from_chars_invalid():
    with pytest.raises(ValueError):
        clib.from_chars("xyz", 10)


def test_from_chars_overflow():
    with pytest.raises(OverflowError):
        clib.from_chars(str(clib.ULONG_MAX + 1), 10)
    assert clib.from_chars(str(clib.ULONG_MAX), 10)[0] == clib.ULONG_MAX


def test_from_chars_signed():
    assert clib.from_chars_signed("-42", 10) == (-42, 3)
    text = str(clib.LONG_MIN)
    assert clib.from_chars_signed(text, 10) == (clib.LONG_MIN, len(text))
    with pytest.raises(OverflowError):
        clib.from_chars_signed(str(clib.LONG_MAX + 1), 10)
    with pytest.raises(ValueError):
        clib.from_chars_signed("-", 10)


# --- strtoul / strtol ------------------------------------------------------

@pytest.mark.parametrize("n", [0, 1, 42, 4096, 987654321, clib.ULONG_MAX])
def test_strtoul_roundtrips(n):
    assert clib.strtoul(str(n)) == (n, len(str(n)))
    assert clib.strtoul(hex(n)) == (n, len(hex(n)))
    assert clib.strtoul(oct(n)) == (n, len(oct(n)))
    assert clib.strtoul(bin(n)) == (n, len(bin(n)))
    assert clib.strtoul(hex(n), 16) == (n, len(hex(n)))


@pytest.mark.parametrize("n", [1, 8, 511])
def test_strtoul_leading_zero_is_octal(n):
    text = "0" + format(n, "o")
    assert clib.strtoul(text) == (n, len(text))


def test_strtoul_whitespace_and_sign():
    text = "  +123"
    assert clib.strtoul(text) == (123, len(text))
    assert clib.strtoul("-1") == (clib.ULONG_MAX, 2)


def test_strtoul_invalid():
    assert clib.strtoul("hello") == (0, 0)
    assert clib.strtoul("0x") == (0, 0)


def test_strtoul_overflow():
    text = "9" * 30
    assert clib.strtoul(text) == (clib.ULONG_MAX, len(text))


def test_strtol_clamps():
    text = "9" * 30
    assert clib.strtol(text) == (clib.LONG_MAX, len(text))
    assert clib.strtol("-" + text) == (clib.LONG_MIN, len(text) + 1)
    big = str(clib.LONG_MAX + 1)
    assert clib.strtol(big) == (clib.LONG_MAX, len(big))
    low = str(clib.LONG_MIN)
    assert clib.strtol(low) == (clib.LONG_MIN, len(low))


@pytest.mark.parametrize("n", [-300, -1, 0, 77, 65535])
def test_strtol_roundtrip(n):
    assert clib.strtol(str(n), 10) == (n, len(str(n)))


def test_strtol_partial():
    assert clib.strtol("12abc", 10) == (12, 2)


# --- string comparison ----------------------------------------------------

def test_strcmp_ordering():
    assert clib.strcmp("abc", "abc") == 0
    assert clib.strcmp("abc", "abd") < 0
    assert clib.strcmp("abd", "abc") == -clib.strcmp("abc", "abd")
    assert clib.strcmp("ab", "abc") < 0


def test_strcmp_unsigned_bytes():
    assert clib.strcmp(b"\xff", b"\x01") > 0


def test_strcmp_stops_at_nul():
    assert clib.strcmp("ab\0c", "ab\0d") == 0


def test_strncmp():
    assert clib.strncmp("abcX", "abcY", 3) == 0
    assert clib.strncmp("abcX", "abcY", 4) < 0
    assert clib.strncmp("x", "y", 0) == 0


def test_strcasecmp():
    assert clib.strcasecmp("Hello", "hELLO") == 0
    assert clib.strcasecmp("apple", "BANANA") < 0
    assert clib.strncasecmp("HELLOx", "helloy", 5) == 0
    assert clib.strncasecmp("HELLOx", "helloy", 6) < 0


def test_strstr():
    hay = "hello world"
    pos = clib.strstr(hay, "world")
    assert hay[pos:].startswith("world")
    assert clib.strstr("abc", "") == 0
    assert clib.strstr("abc", "d") is None


def test_strlcpy():
    assert clib.strlcpy("hello", 3) == ("he", len("hello"))
    assert clib.strlcpy("hi", 10) == ("hi", 2)
    assert clib.strlcpy("hi", 0) == ("", 2)


def test_memcmp():
    assert clib.memcmp(b"abc", b"abc") == 0
    assert clib.memcmp(b"abc", b"abd") < 0
    assert clib.memcmp(b"\xff", b"\x01") > 0
    with pytest.raises(ValueError):
        clib.memcmp(b"a", b"ab")


# --- character classes -----------------------------------------------------

def test_isspace():
    assert all(clib.isspace(c) for c in "\t\n\v\f\r ")
    assert not clib.isspace("a")
    assert not clib.isspace(0)


def test_char_classes():
    assert all(clib.isdigit(c) for c in "0123456789")
    assert not clib.isdigit("a")
    assert clib.isalpha("q") and clib.isalpha("Q")
    assert not clib.isalpha("@") and not clib.isalpha("[")
    assert clib.isalnum("7") and clib.isalnum("z")
    assert not clib.isalnum("-")


def test_case_conversion():
    assert clib.tolower("A") == "a"
    assert clib.toupper("z") == "Z"
    assert clib.tolower(ord("A")) == ord("a")
    assert clib.tolower("1") == "1"
    assert clib.toupper("!") == "!"
    with pytest.raises(ValueError):
        clib.tolower("ab")