"""Custom exception hierarchy for the EGG parser."""


class EggError(Exception):
    """Base exception for all pandaegg errors."""


class FormatError(EggError):
    """Raised when the document text or its token stream is malformed."""


class ConversionError(EggError):
    """Raised when a scalar value cannot be converted or a required value is missing."""
