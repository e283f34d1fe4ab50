import logging
import sys
import threading
from typing import Callable, Optional, Tuple

from .options import RenderOptions
from .processor import process
from .sizing import terminal_size

logger = logging.getLogger(__name__)

ESC = "\x1b"
HIDE_CURSOR = f"{ESC}[?25l"
SHOW_CURSOR = f"{ESC}[?25h"
CLEAR_SCREEN = f"{ESC}[2J{ESC}[H"

POLL_INTERVAL = 0.1
STARTUP_DELAY = 1.5


def run_watch(
    options: RenderOptions,
    cancel: Optional[threading.Event] = None,
    terminal: Callable[[], Tuple[int, int]] = terminal_size,
    render: Callable[[RenderOptions], None] = process,
    poll_interval: float = POLL_INTERVAL,
    startup_delay: float = STARTUP_DELAY,
) -> int:
    """
    Re-render whenever the terminal size changes until `cancel` is set or
    the user presses Ctrl+C. Returns the number of renders performed.

    The cursor is always restored on the way out.
    """
    if cancel is None:
        cancel = threading.Event()

    out = sys.stdout
    last: Optional[Tuple[int, int]] = None
    renders = 0

    out.write(HIDE_CURSOR + CLEAR_SCREEN)
    out.write("Watch mode: Press Ctrl+C to exit. Resize terminal to re-render.\n")
    out.flush()

    try:
        cancel.wait(startup_delay)
        while not cancel.is_set():
            size = terminal()
            if size != last:
                last = size
                logger.debug("Terminal size now %sx%s; re-rendering", *size)
                out.write(CLEAR_SCREEN)
                out.flush()
                render(options.with_size(*size))
                renders += 1
            cancel.wait(poll_interval)
    except KeyboardInterrupt:
        logger.debug("Watch mode interrupted")
    finally:
        out.write(SHOW_CURSOR + "\nWatch mode ended.\n")
        out.flush()

    return renders
