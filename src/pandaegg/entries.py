"""Generic entry tree built from the lexer's token stream."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from pandaegg.errors import ConversionError, FormatError
from pandaegg.tokens import (
    EntryClose,
    EntryContent,
    EntryName,
    EntryOpen,
    FilePath,
    Token,
    describe,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One ``<Type> [Name] { ... }`` block with its nested blocks."""

    type_name: str
    name: str = ""
    filepath: str = ""
    values: tuple[str, ...] = ()
    children: tuple[Entry, ...] = field(default_factory=tuple)

    def find(self, type_name: str, name: str | None = None) -> Entry | None:
        """Return the first child of the given type (and name, if given)."""
        for child in self.children:
            if child.type_name == type_name and (name is None or child.name == name):
                return child
        return None

    def find_all(self, *type_names: str) -> list[Entry]:
        """Return children whose type is one of ``type_names``, in document order."""
        return [child for child in self.children if child.type_name in type_names]

    def first_value(self, what: str | None = None) -> str:
        """Return the first scalar value, raising ConversionError if there is none."""
        if not self.values:
            label = what or f"<{self.type_name}> {self.name}".rstrip()
            raise ConversionError(f"{label} has no value")
        return self.values[0]


class TokenCursor:
    """Forward-only cursor over a token sequence."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self._index = 0

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._tokens)

    @property
    def current(self) -> Token:
        if self.at_end:
            raise IndexError("token cursor is exhausted")
        return self._tokens[self._index]

    def advance(self) -> None:
        self._index += 1


def build(tokens: Sequence[Token]) -> list[Entry]:
    """Build the top-level entries of a document from its tokens.

    Raises:
        FormatError: On a token that cannot appear where it does, or when the
            stream ends while an entry is still open.
    """
    cursor = TokenCursor(tokens)
    entries: list[Entry] = []
    while not cursor.at_end:
        token = cursor.current
        if not isinstance(token, EntryOpen):
            raise FormatError(f"Unexpected {describe(token)} at document root")
        entries.append(_build_entry(cursor))
        cursor.advance()

    logger.debug("Built %d top-level entries from %d tokens", len(entries), len(tokens))
    return entries


def _build_entry(cursor: TokenCursor) -> Entry:
    """Build the entry opened at the cursor, leaving the cursor on its close."""
    opener = cursor.current
    name = ""
    filepath = ""
    values: tuple[str, ...] = ()
    children: list[Entry] = []

    cursor.advance()
    while not cursor.at_end:
        token = cursor.current
        if isinstance(token, EntryClose):
            return Entry(
                type_name=opener.type_name,
                name=name,
                filepath=filepath,
                values=values,
                children=tuple(children),
            )
        if isinstance(token, EntryName):
            name = token.name
        elif isinstance(token, EntryContent):
            values = token.values
        elif isinstance(token, FilePath):
            filepath = token.path
        elif isinstance(token, EntryOpen):
            children.append(_build_entry(cursor))
        else:
            raise FormatError(f"Unrecognized token {type(token).__name__}")
        cursor.advance()

    raise FormatError(f"Entry {describe(opener)} is never closed")
