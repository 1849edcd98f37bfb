"""Lexer turning EGG document text into a flat token list."""

from __future__ import annotations

import bisect
import logging
import re

from pandaegg.errors import FormatError
from pandaegg.tokens import EntryClose, EntryContent, EntryName, EntryOpen, FilePath, Token

logger = logging.getLogger(__name__)

# Entry types whose header is followed directly by the content block.
NAMELESS_TYPES: frozenset[str] = frozenset({"coordinatesystem", "comment"})

_WHITESPACE = " \t\n\r"
_CONTENT_END = re.compile(r"[<}]")
_LINE_END = re.compile(r"[\r\n]")


def split_values(raw: str) -> tuple[str, ...]:
    """Split raw block text into scalar values.

    Stray braces are dropped, whitespace runs separate values and empty
    segments are discarded.
    """
    return tuple(raw.replace("{", "").replace("}", "").split())


class Lexer:
    """Single forward pass scanner over one EGG document."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", source)]

    @property
    def source(self) -> str:
        return self._source

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def location(self, offset: int) -> tuple[int, int]:
        """Return the 1-based (line, column) of a character offset."""
        line = bisect.bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1

    def scan(self) -> list[Token]:
        tokens: list[Token] = []
        while not self.is_eof:
            ch = self._source[self._position]
            if ch in _WHITESPACE:
                self._position += 1
            elif ch == "<":
                self._lex_header(tokens)
            elif ch == "{":
                self._lex_content(tokens)
            elif ch == "}":
                tokens.append(EntryClose(*self.location(self._position)))
                self._position += 1
            elif ch == "/":
                self._skip_comment()
            else:
                line, column = self.location(self._position)
                raise FormatError(
                    f"Egg is malformed: unrecognized character {ch!r} "
                    f"at line {line}, column {column}"
                )

        logger.debug("Scanned %d tokens from %d characters", len(tokens), len(self._source))
        return tokens

    def _lex_header(self, tokens: list[Token]) -> None:
        start = self._position
        close = self._source.find(">", start + 1)
        if close == -1:
            line, column = self.location(start)
            raise FormatError(f"Unterminated entry header at line {line}, column {column}")

        type_name = self._source[start + 1 : close]
        tokens.append(EntryOpen(type_name, *self.location(start)))
        self._position = close + 1
        if type_name.lower() in NAMELESS_TYPES:
            return

        brace = self._source.find("{", self._position)
        if brace == -1:
            line, column = self.location(start)
            raise FormatError(
                f"Entry <{type_name}> at line {line}, column {column} has no opening brace"
            )
        # Names never keep embedded whitespace.
        name = "".join(self._source[self._position : brace].split())
        tokens.append(EntryName(name, *self.location(self._position)))
        self._position = brace

    def _lex_content(self, tokens: list[Token]) -> None:
        brace = self._position
        self._position += 1
        self._skip_whitespace()

        if not self.is_eof and self._source[self._position] == '"':
            quote = self._position
            close = self._source.find('"', quote + 1)
            if close == -1:
                line, column = self.location(quote)
                raise FormatError(f"Unterminated quoted string at line {line}, column {column}")
            tokens.append(FilePath(self._source[quote + 1 : close], *self.location(quote)))
            self._position = close + 1

        match = _CONTENT_END.search(self._source, self._position)
        end = match.start() if match else len(self._source)
        raw = self._source[self._position : end]
        tokens.append(EntryContent(split_values(raw), *self.location(brace)))
        self._position = end

    def _skip_whitespace(self) -> None:
        while not self.is_eof and self._source[self._position] in _WHITESPACE:
            self._position += 1

    def _skip_comment(self) -> None:
        match = _LINE_END.search(self._source, self._position)
        self._position = match.start() if match else len(self._source)


def scan(text: str) -> list[Token]:
    """Convert EGG document text into an ordered token list.

    Raises:
        FormatError: On a character that cannot begin any token, or on input
            ending inside a header, name or quoted literal.
    """
    return Lexer(text).scan()
