# revindex

A library for finding every place a word occurs in a set of plain-text
files, with a few words of surrounding context, along with some small
self-contained helpers: C-style string and number routines, a printf-style
formatter with an 80x25 text console, and x86-64 paging, PCI and ELF64
utilities.

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Searching for a word

    from revindex.wordindex import find_word, get_files, print_occurrences

    results = [find_word(path, "peace") for path in get_files("books")]
    print_occurrences("peace", results)

`get_files(dirname)` lists the entries of a directory whose names do not
start with `.`, as `dirname/name` paths; it raises `OSError` if the
directory cannot be read.

`find_word(filename, target)` returns a `WordIndex` with `filename`,
`indexes` (1-based word positions), `phrases` and `count`. Words are split
on whitespace; each word is lower-cased and stripped of trailing
punctuation (apostrophes are kept) before it is compared with the target.
Each phrase holds up to five words, ending two words after the match (or
at the end of the file). A file that cannot be opened gives an empty
result.

`format_occurrences(term, indexes)` returns the report as text and
`print_occurrences(term, indexes, out=None)` writes it to `out` or to
standard output:

    Found 2 instances of peace.
    peace found in books/war.txt at locations:
    Index 17: and then there was peace in the
    ...

    peace not found in books/other.txt

`clean_word` and `join_string` are available on their own as well.

## Helper modules

- `revindex.clib`: `strcmp`, `strncmp`, `strcasecmp`, `strncasecmp`,
  `strstr`, `strlcpy`, `memcmp`; number parsing with `from_chars`,
  `from_chars_signed`, `strtol` and `strtoul`; character classes
  (`isspace`, `isdigit`, `isalpha`, `isalnum`, `tolower`, `toupper`); bit
  arithmetic (`msb`, `lsb`, `round_down`, `round_up`, `round_down_pow2`,
  `round_up_pow2`); `is_error`; and `Rand`, a deterministic pseudo-random
  generator with `seed`, `next` and `randint`.
- `revindex.printer`: `format_string` and `snprintf` for printf-style
  formatting (flags `#0- +'`, width, precision, `%d %i %u %x %X %p %s %c`,
  and `%C` to change colour); the `Printer` base class and
  `StringPrinter`; and `Console`, an 80x25 grid of coloured cells with
  `clear`, `puts`, `printf` and `row_text`, written through
  `ConsolePrinter`, which scrolls or wraps at the bottom. `cpos`, `crow`
  and `ccol` convert between cursor positions and rows and columns.
- `revindex.paging`: `pageindex`, `pageoffmask`, `pageoffset` and
  `va_is_canonical`, with the page-table entry and address constants.
- `revindex.pci`: `pci_make_addr`, `pci_addr_bus`, `pci_addr_slot` and
  `pci_addr_func` for configuration addresses.
- `revindex.elf`: `ElfHeader`, `ElfProgram`, `ElfSection` and `ElfSymbol`,
  each with `from_bytes` and `to_bytes`, plus `program_headers` to read
  every program header an `ElfHeader` describes.

## What this package does not do

There is no command-line program: searches are run by calling the
functions above from Python. The package searches files one call at a time
and has no built-in parallel search with worker threads or processes, and
it has no interactive shell.