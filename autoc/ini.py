"""A small INI parser that reports each name/value pair to a handler.

Sections are written ``[section]``, pairs ``name = value`` or ``name: value``.
Lines starting with ``;`` or ``#`` are comments, and ``;`` after whitespace
starts an inline comment. An indented line continues the previous name's
value and is reported again under that name.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import TextIO

Handler = Callable[[str, str, str], object]

MAX_LINE = 200
MAX_SECTION = 50
MAX_NAME = 50
START_COMMENT_PREFIXES = ";#"
INLINE_COMMENT_PREFIXES = ";"
_WHITESPACE = " \t\n\v\f\r"
_BOM = "\ufeff"


class IniParseError(ValueError):
    """Raised when a line could not be parsed or a handler rejected it."""

    def __init__(self, lineno: int) -> None:
        super().__init__(f"error on line {lineno}")
        self.lineno = lineno


def _find_chars_or_comment(text: str, chars: str | None) -> int:
    """Index of the first char in ``chars`` or inline comment, else ``len(text)``."""
    was_space = False
    for index, char in enumerate(text):
        if chars is not None and char in chars:
            return index
        if was_space and char in INLINE_COMMENT_PREFIXES:
            return index
        was_space = char in _WHITESPACE
    return len(text)


def _chunks(lines: Iterable[str]) -> Iterator[str]:
    """Split over-long lines the way a fixed-size line buffer would."""
    limit = MAX_LINE - 1
    for line in lines:
        while len(line) > limit:
            yield line[:limit]
            line = line[limit:]
        if line:
            yield line


def parse_lines(lines: Iterable[str], handler: Handler) -> None:
    """Parse INI lines, calling ``handler(section, name, value)`` for each pair.

    Parsing continues past errors; afterwards :class:`IniParseError` is raised
    for the first bad line. A falsy handler result counts as an error.
    """
    section = ""
    prev_name = ""
    error = 0

    for lineno, line in enumerate(_chunks(lines), start=1):
        if lineno == 1 and line.startswith(_BOM):
            line = line[len(_BOM) :]
            indented_from = 1
        else:
            indented_from = 0
        stripped = line.rstrip(_WHITESPACE)
        start = stripped.lstrip(_WHITESPACE)
        indented = indented_from + len(stripped) - len(start) > 0

        if not start or start[0] in START_COMMENT_PREFIXES:
            continue

        if prev_name and indented:
            value = start[: _find_chars_or_comment(start, None)].rstrip(_WHITESPACE)
            if not handler(section, prev_name, value) and not error:
                error = lineno
        elif start[0] == "[":
            body = start[1:]
            end = _find_chars_or_comment(body, "]")
            if end < len(body) and body[end] == "]":
                section = body[:end][: MAX_SECTION - 1]
                prev_name = ""
            elif not error:
                error = lineno
        else:
            end = _find_chars_or_comment(start, "=:")
            if end < len(start) and start[end] in "=:":
                name = start[:end].rstrip(_WHITESPACE)
                value = start[end + 1 :]
                value = value[: _find_chars_or_comment(value, None)]
                value = value.strip(_WHITESPACE)
                prev_name = name[: MAX_NAME - 1]
                if not handler(section, name, value) and not error:
                    error = lineno
            elif not error:
                error = lineno

    if error:
        raise IniParseError(error)


def parse_string(text: str, handler: Handler) -> None:
    """Parse INI data held in a string."""
    parse_lines(text.splitlines(keepends=True), handler)


def parse_file(file: TextIO, handler: Handler) -> None:
    """Parse INI data from an open text file; the file is left open."""
    parse_lines(file, handler)


def parse(filename: str | Path, handler: Handler) -> None:
    """Parse the INI file at ``filename``; raises ``OSError`` if it cannot be opened."""
    with open(filename, encoding="utf-8", newline="") as file:
        parse_file(file, handler)