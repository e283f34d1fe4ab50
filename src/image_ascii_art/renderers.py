import math
from typing import Dict, Protocol

import numpy as np

from .loader import PixelGrid
from .options import RenderMode, RenderOptions

ESC = "\x1b"
RESET = f"{ESC}[0m"

UPPER_HALF_BLOCK = "▀"
LOWER_HALF_BLOCK = "▄"
FULL_BLOCK = "█"

HALFBLOCK_THRESHOLD = 0.5


def fg(r: int, g: int, b: int) -> str:
    return f"{ESC}[38;2;{r};{g};{b}m"


def bg(r: int, g: int, b: int) -> str:
    return f"{ESC}[48;2;{r};{g};{b}m"


def brightness(r: float, g: float, b: float) -> float:
    """Perceived luminance in [0, 1]."""
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255.0


def brightness_map(pixels: np.ndarray) -> np.ndarray:
    """brightness() over an (H, W, >=3) pixel array."""
    rgb = pixels[..., :3].astype(np.float64)
    return brightness(rgb[..., 0], rgb[..., 1], rgb[..., 2])


def ramp_index(value: float, ramp_length: int) -> int:
    """Round-half-up brightness to a ramp position, clamped to the ramp."""
    idx = math.floor(value * (ramp_length - 1) + 0.5)
    return min(max(idx, 0), ramp_length - 1)


class Renderer(Protocol):
    def render(self, grid: PixelGrid, options: RenderOptions) -> str:
        """Turn a pixel grid into a styled character stream."""
        ...


# -----------------------------
# Classic: one glyph per pixel
# -----------------------------


class ClassicRenderer:
    def render(self, grid: PixelGrid, options: RenderOptions) -> str:
        ramp = options.character_ramp()
        n = len(ramp)
        lum = brightness_map(grid.pixels)
        color = not options.no_color

        out = [RESET] if color else []
        for y in range(grid.height):
            for x in range(grid.width):
                # bright pixels pick from the dense end of the ramp
                ch = ramp[n - 1 - ramp_index(float(lum[y, x]), n)]
                if color:
                    out.append(fg(*grid.rgb(x, y)))
                out.append(ch)
            if color:
                out.append(RESET)
            if y < grid.height - 1:
                out.append("\n")
        if color:
            out.append(RESET)
        return "".join(out)


# -----------------------------
# HalfBlock: two pixel rows per character row
# -----------------------------


def halfblock_glyph(top: float, bottom: float, invert: bool = False) -> str:
    """Monochrome glyph for a top/bottom brightness pair."""
    if invert:
        top, bottom = 1.0 - top, 1.0 - bottom

    top_light = top >= HALFBLOCK_THRESHOLD
    bottom_light = bottom >= HALFBLOCK_THRESHOLD

    if top_light and bottom_light:
        return " "
    if not top_light and not bottom_light:
        return FULL_BLOCK
    if bottom_light:
        return UPPER_HALF_BLOCK
    return LOWER_HALF_BLOCK


class HalfBlockRenderer:
    def render(self, grid: PixelGrid, options: RenderOptions) -> str:
        rows = (grid.height + 1) // 2
        color = not options.no_color
        lum = None if color else brightness_map(grid.pixels)

        out = [RESET] if color else []
        for row in range(rows):
            top_y = row * 2
            # odd heights reuse the top pixel for the missing bottom row
            bottom_y = top_y + 1 if top_y + 1 < grid.height else top_y
            for x in range(grid.width):
                if color:
                    out.append(fg(*grid.rgb(x, top_y)))
                    out.append(bg(*grid.rgb(x, bottom_y)))
                    out.append(UPPER_HALF_BLOCK)
                else:
                    out.append(
                        halfblock_glyph(
                            float(lum[top_y, x]), float(lum[bottom_y, x]), options.invert
                        )
                    )
            if color:
                out.append(RESET)
            if row < rows - 1:
                out.append("\n")
        if color:
            out.append(RESET)
        return "".join(out)


RENDERERS: Dict[RenderMode, Renderer] = {
    RenderMode.CLASSIC: ClassicRenderer(),
    RenderMode.HALFBLOCK: HalfBlockRenderer(),
}


def create_renderer(mode: RenderMode) -> Renderer:
    return RENDERERS[mode]
