"""Image ASCII Art - render images as colored ASCII art in the terminal."""

__version__ = "0.1.0"

"""
The command entry point is wrapped lazily so `python -m image_ascii_art`
does not find the cli module already in `sys.modules`.
"""

from .errors import (
    AsciiArtError,
    ImageNotFoundError,
    InvalidConfigurationError,
    ProcessingError,
    UnsupportedFormatError,
)
from .options import CharacterSet, OutputFormat, RenderMode, RenderOptions, character_ramp


def main(*args, **kwargs):
    from .cli import main as _m

    return _m(*args, **kwargs)


__all__ = [
    "AsciiArtError",
    "CharacterSet",
    "ImageNotFoundError",
    "InvalidConfigurationError",
    "OutputFormat",
    "ProcessingError",
    "RenderMode",
    "RenderOptions",
    "UnsupportedFormatError",
    "character_ramp",
    "main",
]
