import argparse
import logging
import signal
import sys
import threading
from typing import List, Optional, Sequence

from .errors import (
    AsciiArtError,
    ImageNotFoundError,
    InvalidConfigurationError,
    UnsupportedFormatError,
)
from .options import CharacterSet, OutputFormat, RenderMode, RenderOptions
from .processor import process
from .watch import run_watch

LOG = logging.getLogger("image_ascii_art")


def setup_logging(level_name: str = "WARNING", log_path: Optional[str] = None) -> None:
    level = getattr(logging, level_name.upper(), logging.WARNING)
    LOG.setLevel(logging.DEBUG if log_path else level)

    handlers: List[logging.Handler] = []

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handlers.append(sh)

    if log_path:
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
        handlers.append(fh)

    LOG.handlers[:] = handlers
    LOG.propagate = False  # prevent double logging via root logger


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="image-ascii-art",
        description="Convert images to colored ASCII art in the terminal",
    )
    ap.add_argument("image", help="Path to the image file to convert")
    ap.add_argument(
        "-m",
        "--mode",
        choices=[m.value for m in RenderMode],
        default=RenderMode.HALFBLOCK.value,
        help="halfblock = two pixels per cell (high quality); classic = ASCII characters",
    )
    ap.add_argument(
        "-c",
        "--charset",
        choices=[c.value for c in CharacterSet if c != CharacterSet.CUSTOM],
        default=CharacterSet.EXTENDED.value,
        help="Character set for classic mode",
    )
    ap.add_argument("--chars", default=None, help="Custom character ramp (dark to light) for classic mode")
    ap.add_argument("-w", "--width", type=int, default=None, help="Override output width in characters")
    ap.add_argument("--height", type=int, default=None, help="Override output height in characters")
    ap.add_argument("-o", "--output", default=None, help="Output to file instead of console")
    ap.add_argument("--html", action="store_true", help="Output as HTML file (requires --output)")
    ap.add_argument("--no-color", action="store_true", help="Disable colors (grayscale output)")
    ap.add_argument("-i", "--invert", action="store_true", help="Invert brightness (for light terminals)")
    ap.add_argument("--watch", action="store_true", help="Live preview mode - re-render on terminal resize")
    ap.add_argument(
        "--preserve-ansi", action="store_true", help="Preserve ANSI codes in text file output"
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING)",
    )
    ap.add_argument("--log", dest="log_path", default=None, help="Also write debug logs to FILE")
    return ap


def options_from_args(args: argparse.Namespace) -> RenderOptions:
    if args.html and not args.output:
        raise InvalidConfigurationError("--html requires --output to specify the output file path.")

    output_format = OutputFormat.CONSOLE
    if args.output:
        output_format = OutputFormat.HTML if args.html else OutputFormat.TEXT

    charset = CharacterSet(args.charset)
    if args.chars:
        charset = CharacterSet.CUSTOM

    return RenderOptions(
        image_path=args.image,
        mode=RenderMode(args.mode),
        charset=charset,
        custom_chars=args.chars,
        width=args.width,
        height=args.height,
        output_format=output_format,
        output_path=args.output,
        no_color=args.no_color,
        invert=args.invert,
        watch=args.watch,
        preserve_ansi=args.preserve_ansi,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_path)

    try:
        options = options_from_args(args)
    except InvalidConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    LOG.debug(
        "Options: mode=%s charset=%s size=%sx%s output=%s",
        options.mode.value,
        options.charset.value,
        options.width,
        options.height,
        options.output_format.value,
    )

    try:
        if options.watch and options.output_format == OutputFormat.CONSOLE:
            watch(options)
        else:
            process(options)
    except KeyboardInterrupt:
        print("Error: interrupted", file=sys.stderr)
        return 1
    except (ImageNotFoundError, UnsupportedFormatError, InvalidConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except AsciiArtError as e:
        print(f"Error processing image: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        LOG.debug("Unexpected failure", exc_info=True)
        print(f"Error processing image: {e}", file=sys.stderr)
        return 1

    return 0


def watch(options: RenderOptions) -> None:
    """Run the resize loop; SIGINT sets the cancel token instead of raising."""
    cancel = threading.Event()
    previous = signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())
    try:
        run_watch(options, cancel)
    finally:
        signal.signal(signal.SIGINT, previous)


if __name__ == "__main__":
    raise SystemExit(main())
