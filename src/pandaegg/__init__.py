"""pandaegg: parse Panda3D EGG documents into a typed scene graph."""

__version__ = "0.3.0"

from pandaegg.errors import ConversionError, EggError, FormatError  # noqa: E402
from pandaegg.parser import parse_egg  # noqa: E402

__all__ = ["ConversionError", "EggError", "FormatError", "parse_egg", "__version__"]
