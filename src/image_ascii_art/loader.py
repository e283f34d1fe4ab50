import logging
import os
from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ImageNotFoundError, ProcessingError, UnsupportedFormatError
from .options import RenderOptions
from .sizing import pixel_height, target_pixel_size, terminal_size

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".tiff", ".tif")


@dataclass(frozen=True)
class PixelGrid:
    """Read-only RGBA pixels, row-major, shaped (height, width, 4)."""

    width: int
    height: int
    pixels: np.ndarray

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelGrid":
        arr = np.asarray(img.convert("RGBA"), dtype=np.uint8).copy()
        arr.setflags(write=False)
        return cls(width=img.width, height=img.height, pixels=arr)

    def rgb(self, x: int, y: int) -> Tuple[int, int, int]:
        r, g, b, _ = self.pixels[y, x]
        return int(r), int(g), int(b)


def validate_input(options: RenderOptions) -> None:
    """Check the input exists and has a supported extension, without decoding it."""
    path = options.image_path
    if not os.path.isfile(path):
        raise ImageNotFoundError(f"Image file not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(
            f"Unsupported image format: {ext or '(none)'}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )


def open_image(path: str) -> Image.Image:
    """Decode the first frame of an image as RGBA."""
    try:
        with Image.open(path) as img:
            img.seek(0)
            return img.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ProcessingError(f"Could not decode {path}: {e}") from e


def resize_for_mode(
    img: Image.Image,
    options: RenderOptions,
    terminal: Callable[[], Tuple[int, int]] = terminal_size,
) -> Image.Image:
    """Stretch to the exact pixel size the chosen renderer consumes."""
    char_w, char_h = target_pixel_size(img.width, img.height, options, terminal)
    target = (char_w, pixel_height(char_h, options.mode))
    logger.debug("Resizing %dx%d -> %dx%d (%s)", img.width, img.height, *target, options.mode.value)
    return img.resize(target, Image.Resampling.LANCZOS)


def load_pixel_grid(
    options: RenderOptions, terminal: Callable[[], Tuple[int, int]] = terminal_size
) -> PixelGrid:
    img = open_image(options.image_path)
    return PixelGrid.from_image(resize_for_mode(img, options, terminal))
