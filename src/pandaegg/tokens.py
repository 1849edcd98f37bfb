"""Token variants produced by the EGG lexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class EntryOpen:
    """``<TypeName>`` header."""

    type_name: str
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class EntryName:
    """Name between an entry header and its opening brace (may be empty)."""

    name: str
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class EntryContent:
    """Scalar values of a ``{ ... }`` body, up to the first nested entry or close."""

    values: tuple[str, ...]
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class FilePath:
    """Double-quoted literal opening a content block."""

    path: str
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class EntryClose:
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


Token = Union[EntryOpen, EntryName, EntryContent, FilePath, EntryClose]


def describe(token: Token) -> str:
    """Short human-readable label used in diagnostics."""
    if isinstance(token, EntryOpen):
        text = f"<{token.type_name}>"
    elif isinstance(token, EntryName):
        text = f"name {token.name!r}"
    elif isinstance(token, EntryContent):
        text = f"content ({len(token.values)} values)"
    elif isinstance(token, FilePath):
        text = f"filepath {token.path!r}"
    else:
        text = "'}'"
    return f"{text} at line {token.line}, column {token.column}"
