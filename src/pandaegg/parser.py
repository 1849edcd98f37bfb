"""Document loading entry points composing lexer, tree builder and binder."""

from __future__ import annotations

import logging
from pathlib import Path

from pandaegg.binder import bind_all
from pandaegg.entries import Entry, build
from pandaegg.errors import EggError
from pandaegg.lexer import scan
from pandaegg.models import EggScene
from pandaegg.warning_policy import WarningPolicy

logger = logging.getLogger(__name__)


def _read_source_text(source: str | Path) -> str:
    """Read EGG text from a path or treat input as raw document text."""
    if isinstance(source, Path):
        try:
            return source.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise EggError(f"Cannot read file: {e}") from e
    return source


def parse_entries(source: str | Path) -> list[Entry]:
    """Lex and build the generic entry tree of a document, without binding."""
    text = _read_source_text(source)
    return build(scan(text))


def parse_egg(source: str | Path, *, warning_policy: WarningPolicy | None = None) -> EggScene:
    """Parse an EGG document from a string or file path.

    Args:
        source: EGG document text, or path to a .egg file.
        warning_policy: Optional policy for W-coded binding warnings.

    Returns:
        The bound EggScene.

    Raises:
        FormatError: On malformed document text or entry nesting.
        ConversionError: On unparseable numeric values or missing required values.
        EggError: When the file cannot be read.
    """
    if isinstance(source, Path):
        logger.debug("Parsing %s", source)
    entries = parse_entries(source)
    return bind_all(entries, warning_policy=warning_policy)
