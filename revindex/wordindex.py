"""Search text files for a term and record where it occurs, with the
surrounding words as context."""

from __future__ import annotations

import os
import string
import sys
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, TextIO

from revindex.clib import tolower

CONTEXT_WORDS = 5
TRAILING_CONTEXT = 2

_TRAILING_PUNCT = frozenset(string.punctuation) - {"'"}


@dataclass
class WordIndex:
    """Occurrences of a search term in one file."""

    filename: str = ""
    indexes: List[int] = field(default_factory=list)
    phrases: List[str] = field(default_factory=list)
    count: int = 0


def clean_word(word: str) -> str:
    """Lower-case ``word`` and strip trailing punctuation other than apostrophes."""
    lowered = "".join(tolower(ch) for ch in word)
    end = len(lowered)
    while end > 0 and lowered[end - 1] in _TRAILING_PUNCT:
        end -= 1
    return lowered[:end]


def join_string(words: Iterable[str]) -> str:
    """Join words into a phrase separated by single spaces."""
    return " ".join(words)


def _words(filename: str) -> Iterator[str]:
    """Yield the whitespace-separated words of a file."""
    with open(filename, "rb") as fh:
        data = fh.read()
    for token in data.split():
        yield token.decode("utf-8", errors="replace")


def find_word(filename: str, target: str) -> WordIndex:
    """Find every occurrence of ``target`` in ``filename``.

    Each occurrence is recorded with its 1-based word position and a phrase
    of up to five words ending two words after it. A file that cannot be
    opened yields an index with no occurrences.
    """
    index = WordIndex(filename=filename)
    try:
        words = list(_words(filename))
    except OSError:
        return index

    pending: deque = deque()
    context: deque = deque(maxlen=CONTEXT_WORDS)

    for loc, word in enumerate(words, start=1):
        if clean_word(word) == target:
            pending.append(loc)
        context.append(word)
        if pending and loc == pending[0] + TRAILING_CONTEXT:
            index.phrases.append(join_string(context))
            index.indexes.append(pending.popleft())

    while pending:
        index.phrases.append(join_string(context))
        index.indexes.append(pending.popleft())

    index.count = len(index.indexes)
    return index


def format_occurrences(term: str, indexes: Iterable[WordIndex]) -> str:
    """Render a report of the search results for ``term``."""
    indexes = list(indexes)
    total = sum(len(f.indexes) for f in indexes)
    lines = [f"Found {total} instances of {term}.\n"]
    for f in indexes:
        if f.indexes:
            lines.append(f"{term} found in {f.filename} at locations:\n")
            lines.extend(
                f"Index {loc}: {phrase}\n"
                for loc, phrase in zip(f.indexes, f.phrases)
            )
            lines.append("\n")
        else:
            lines.append(f"{term} not found in {f.filename}\n")
    return "".join(lines)


def print_occurrences(term: str, indexes: Iterable[WordIndex],
                      out: Optional[TextIO] = None) -> None:
    """Write the report for ``term`` to ``out`` (standard output by default)."""
    stream = sys.stdout if out is None else out
    stream.write(format_occurrences(term, indexes))


def get_files(dirname: str) -> List[str]:
    """Paths of the entries of ``dirname`` whose names do not start with '.'.

    Raises OSError if the directory cannot be read.
    """
    base = f"{dirname}/"
    return [base + name for name in os.listdir(dirname)
            if not name.startswith(".")]