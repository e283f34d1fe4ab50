import logging
import time
from typing import Callable, Tuple

from .loader import load_pixel_grid, validate_input
from .options import RenderOptions
from .outputs import create_output
from .renderers import create_renderer
from .sizing import terminal_size

logger = logging.getLogger(__name__)


def render(
    options: RenderOptions, terminal: Callable[[], Tuple[int, int]] = terminal_size
) -> str:
    """Validate, decode, resize and render; returns the styled artifact."""
    validate_input(options)

    t0 = time.perf_counter()
    grid = load_pixel_grid(options, terminal)
    logger.debug("Pixel grid %dx%d ready in %.3fs", grid.width, grid.height, time.perf_counter() - t0)

    art = create_renderer(options.mode).render(grid, options)
    logger.debug("Rendered %s art (%d chars)", options.mode.value, len(art))
    return art


def process(
    options: RenderOptions, terminal: Callable[[], Tuple[int, int]] = terminal_size
) -> None:
    """Run one full render cycle and deliver it to the configured output."""
    t0 = time.perf_counter()
    art = render(options, terminal)
    create_output(options.output_format).write(art, options)
    logger.debug("Done in %.3fs", time.perf_counter() - t0)
