"""Coded binding warnings for EGG constructs that bind only partially."""

from __future__ import annotations

import warnings
from dataclasses import dataclass

from pandaegg.errors import ConversionError

WARNING_CODES: dict[str, str] = {
    "W01": "<Xfm$Anim> per-frame tables are only partially supported",
    "W02": "<Matrix4> without exactly 16 values leaves the transform as zeros",
    "W03": "<Xfm$Anim> values that do not fill a whole frame are dropped",
}

KNOWN_CODES: frozenset[str] = frozenset(WARNING_CODES)


def describe_codes() -> str:
    """One-line listing of every warning code, for CLI help."""
    return "; ".join(f"{code}: {text}" for code, text in sorted(WARNING_CODES.items()))


class EggWarning(UserWarning):
    """Binding warning carrying its code and the code's summary."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.summary = WARNING_CODES[code]
        super().__init__(f"[{code}] {message}")


@dataclass(frozen=True)
class WarningPolicy:
    """Which warning codes are dropped and which abort the parse."""

    warn_as_error: frozenset[str] = frozenset()
    suppress: frozenset[str] = frozenset()

    @classmethod
    def from_options(
        cls, warn_as_error: str | None, suppress: str | None
    ) -> WarningPolicy | None:
        """Build a policy from comma-separated code lists, or None if both are unset.

        Raises ``ValueError`` for unknown codes or a code given in both lists.
        """
        if warn_as_error is None and suppress is None:
            return None
        fatal = parse_code_list(warn_as_error) if warn_as_error else frozenset()
        dropped = parse_code_list(suppress) if suppress else frozenset()
        both = fatal & dropped
        if both:
            raise ValueError(
                f"Warning code(s) {', '.join(sorted(both))} cannot be both errors and suppressed"
            )
        return cls(warn_as_error=fatal, suppress=dropped)


def emit_warning(code: str, message: str, *, policy: WarningPolicy | None = None) -> None:
    """Report a binding warning.

    Suppressed codes are dropped, codes in ``warn_as_error`` raise
    ``ConversionError`` so the whole parse fails, anything else goes
    through ``warnings.warn`` as an ``EggWarning``.
    """
    if code not in WARNING_CODES:
        raise ValueError(f"Unknown warning code: {code!r}")
    if policy is not None:
        if code in policy.suppress:
            return
        if code in policy.warn_as_error:
            raise ConversionError(f"[{code}] {message} ({WARNING_CODES[code]})")

    warnings.warn(EggWarning(code, message), stacklevel=2)


def parse_code_list(raw: str) -> frozenset[str]:
    """Parse a comma-separated list such as ``"W01, W03"``.

    Codes are case-insensitive. Raises ``ValueError`` naming the known codes.
    """
    codes: set[str] = set()
    for token in raw.split(","):
        code = token.strip().upper()
        if not code:
            continue
        if code not in WARNING_CODES:
            raise ValueError(
                f"Unknown warning code: {token.strip()!r} (known: {describe_codes()})"
            )
        codes.add(code)
    return frozenset(codes)
