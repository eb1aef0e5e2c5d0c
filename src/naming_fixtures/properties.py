"""Line-oriented ``key=value`` properties parsing.

Supports the usual properties syntax: ``#``/``!`` comment lines, ``=``, ``:``
or whitespace separators, backslash line continuations and backslash escapes
including ``\\uXXXX``.
"""

import re
import string
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from naming_fixtures.exceptions import FileAccessError, ParseError

NEWLINE_RE = re.compile(r"\r\n|\r|\n")

WHITESPACE = " \t\f"
SEPARATORS = "=:"
COMMENT_CHARS = "#!"

ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class Properties(Mapping[str, str]):
    """Read-only mapping of property names to values.

    Keeps the order in which keys first appeared in the source; a key that
    is repeated keeps its last value.
    """

    def __init__(
        self,
        entries: Mapping[str, str] | Iterable[tuple[str, str]] = (),
        source: str | None = None,
    ) -> None:
        self._data: dict[str, str] = dict(entries)
        self.source = source

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Properties({self._data!r})"

    def names(self) -> list[str]:
        """Return all property names."""
        return list(self._data)


def _continues(line: str) -> bool:
    """A line ending in an odd number of backslashes continues."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield (starting line number, logical line) pairs."""
    buffer: list[str] = []
    start = 0
    for number, raw in enumerate(NEWLINE_RE.split(text), start=1):
        line = raw.lstrip(WHITESPACE)
        if not buffer:
            if not line or line[0] in COMMENT_CHARS:
                continue
            start = number
        if _continues(line):
            buffer.append(line[:-1])
            continue
        buffer.append(line)
        yield start, "".join(buffer)
        buffer = []

    # Continuation on the last line of the input
    if buffer:
        yield start, "".join(buffer)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in SEPARATORS or char in WHITESPACE:
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip(WHITESPACE)
    if rest and rest[0] in SEPARATORS:
        rest = rest[1:].lstrip(WHITESPACE)
    return key, rest


def _unescape(raw: str, source: str, line: int) -> str:
    if "\\" not in raw:
        return raw

    out: list[str] = []
    index = 0
    length = len(raw)
    while index < length:
        char = raw[index]
        if char != "\\":
            out.append(char)
            index += 1
            continue

        index += 1
        if index >= length:
            # Dangling backslash at end of input
            break
        char = raw[index]
        if char == "u":
            digits = raw[index + 1:index + 5]
            if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
                raise ParseError(
                    f"Malformed \\uxxxx escape: \\u{digits}", source=source, line=line
                )
            out.append(chr(int(digits, 16)))
            index += 5
            continue
        out.append(ESCAPES.get(char, char))
        index += 1

    value = "".join(out)
    # Recombine surrogate pairs written as two \u escapes
    if any("\ud800" <= c <= "\udfff" for c in value):
        value = value.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")
    return value


def parse_properties(text: str, source: str = "<string>") -> Properties:
    """Parse properties text.

    Args:
        text: Properties content
        source: Name used in error messages

    Returns:
        Parsed properties

    Raises:
        ParseError: If an escape sequence is malformed
    """
    entries: dict[str, str] = {}
    for number, line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        key = _unescape(raw_key, source, number)
        entries[key] = _unescape(raw_value, source, number)
    return Properties(entries, source=source)


def load_properties(path: str | Path) -> Properties:
    """Load a properties file.

    The file is read as UTF-8; a leading byte order mark is ignored.

    Raises:
        FileAccessError: If the file is missing or unreadable
        ParseError: If the content is not valid UTF-8 or is malformed
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileAccessError(
            path, f"Cannot read properties file {path}: {e.strerror or e}"
        ) from e

    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"Not valid UTF-8: {e}", source=str(path)) from e

    return parse_properties(text, source=str(path))
