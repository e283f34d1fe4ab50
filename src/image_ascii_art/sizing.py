import logging
import os
import sys
from typing import Callable, Tuple

from .options import RenderMode, RenderOptions

logger = logging.getLogger(__name__)

DEFAULT_TERMINAL_SIZE = (120, 40)

# Terminal cells are roughly twice as tall as they are wide.
CHAR_ASPECT_RATIO = 2


def terminal_size() -> Tuple[int, int]:
    """Return usable (columns, rows), leaving one of each for the cursor.

    Falls back to 120x40 when no terminal is attached.
    """
    try:
        size = os.get_terminal_size(sys.stdout.fileno())
    except (OSError, ValueError, AttributeError) as e:
        logger.debug("Terminal size unavailable (%s); using %sx%s", e, *DEFAULT_TERMINAL_SIZE)
        return DEFAULT_TERMINAL_SIZE
    # some ptys and containers report 0x0 instead of failing
    if size.columns <= 1 or size.lines <= 1:
        logger.debug("Terminal reported %sx%s; using %sx%s", size.columns, size.lines, *DEFAULT_TERMINAL_SIZE)
        return DEFAULT_TERMINAL_SIZE
    return size.columns - 1, size.lines - 1


def target_dimensions(
    options: RenderOptions, terminal: Callable[[], Tuple[int, int]] = terminal_size
) -> Tuple[int, int]:
    """Maximum (width, height) in characters for this render."""
    if options.width is not None and options.height is not None:
        return options.width, options.height

    term_w, term_h = terminal()
    return (
        options.width if options.width is not None else term_w,
        options.height if options.height is not None else term_h,
    )


def fit_to_bounds(
    image_width: int, image_height: int, max_width: int, max_height: int
) -> Tuple[int, int]:
    """
    Largest character grid inside max_width x max_height that keeps the
    image's visual aspect ratio:

        char_width = char_height * CHAR_ASPECT_RATIO * (image_width / image_height)

    The limiting axis is picked by integer cross-multiplication so both
    branches agree exactly on the boundary.
    """
    # width-limited height would be max_width * ih / (iw * 2)
    if max_width * image_height > max_height * image_width * CHAR_ASPECT_RATIO:
        char_height = max_height
        char_width = (max_height * image_width * CHAR_ASPECT_RATIO) // image_height
    else:
        char_width = max_width
        char_height = (max_width * image_height) // (image_width * CHAR_ASPECT_RATIO)

    return max(1, char_width), max(1, char_height)


def target_pixel_size(
    image_width: int,
    image_height: int,
    options: RenderOptions,
    terminal: Callable[[], Tuple[int, int]] = terminal_size,
) -> Tuple[int, int]:
    """(char_width, char_height) the image should occupy."""
    max_width, max_height = target_dimensions(options, terminal)
    char_w, char_h = fit_to_bounds(image_width, image_height, max_width, max_height)
    logger.debug(
        "Sizing: image=%dx%d bounds=%dx%d -> chars=%dx%d",
        image_width,
        image_height,
        max_width,
        max_height,
        char_w,
        char_h,
    )
    return char_w, char_h


def pixel_height(char_height: int, mode: RenderMode) -> int:
    """Source pixel rows needed for char_height output rows."""
    if mode == RenderMode.HALFBLOCK:
        return char_height * 2
    return char_height
