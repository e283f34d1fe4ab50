from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


# -----------------------------
# Choices
# -----------------------------


class RenderMode(str, Enum):
    CLASSIC = "classic"
    HALFBLOCK = "halfblock"


class CharacterSet(str, Enum):
    STANDARD = "standard"
    EXTENDED = "extended"
    SIMPLE = "simple"
    BLOCKS = "blocks"
    CUSTOM = "custom"


class OutputFormat(str, Enum):
    CONSOLE = "console"
    TEXT = "text"
    HTML = "html"


# -----------------------------
# Character ramps (dense -> sparse)
# -----------------------------

STANDARD_RAMP = "@%#*+=-:. "
EXTENDED_RAMP = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "
SIMPLE_RAMP = "@#:. "
BLOCKS_RAMP = "█▓▒░ "

_PRESETS = {
    CharacterSet.STANDARD: STANDARD_RAMP,
    CharacterSet.EXTENDED: EXTENDED_RAMP,
    CharacterSet.SIMPLE: SIMPLE_RAMP,
    CharacterSet.BLOCKS: BLOCKS_RAMP,
}


def character_ramp(
    charset: CharacterSet, custom_chars: Optional[str] = None, invert: bool = False
) -> str:
    """Return the glyph ramp for a character set, reversed when inverting."""
    if charset == CharacterSet.CUSTOM:
        ramp = custom_chars or STANDARD_RAMP
    else:
        ramp = _PRESETS.get(charset, STANDARD_RAMP)
    return ramp[::-1] if invert else ramp


# -----------------------------
# Configuration snapshot
# -----------------------------


@dataclass(frozen=True)
class RenderOptions:
    image_path: str
    mode: RenderMode = RenderMode.HALFBLOCK
    charset: CharacterSet = CharacterSet.EXTENDED
    custom_chars: Optional[str] = None
    width: Optional[int] = None  # None => terminal width
    height: Optional[int] = None  # None => terminal height
    output_format: OutputFormat = OutputFormat.CONSOLE
    output_path: Optional[str] = None
    no_color: bool = False
    invert: bool = False
    watch: bool = False
    preserve_ansi: bool = False

    def character_ramp(self) -> str:
        return character_ramp(self.charset, self.custom_chars, self.invert)

    def with_size(self, width: int, height: int) -> "RenderOptions":
        """Copy of these options with explicit character dimensions."""
        return replace(self, width=width, height=height)
