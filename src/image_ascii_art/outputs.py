import logging
import os
import re
import sys
from typing import Dict, List, Optional, Protocol, Tuple

from .errors import InvalidConfigurationError, ProcessingError
from .options import OutputFormat, RenderOptions

logger = logging.getLogger(__name__)

ANSI_SGR = re.compile(r"\x1b\[([0-9;]*)m")

RGB = Tuple[int, int, int]

HTML_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"})


class Output(Protocol):
    def write(self, content: str, options: RenderOptions) -> None:
        """Deliver a rendered artifact to its destination."""
        ...


# -----------------------------
# ANSI helpers
# -----------------------------


def strip_ansi(text: str) -> str:
    """Remove every SGR escape (ESC [ digits/semicolons m)."""
    return ANSI_SGR.sub("", text)


def _parse_rgb(params: List[str]) -> Optional[RGB]:
    if len(params) < 5:
        return None
    try:
        return int(params[2]), int(params[3]), int(params[4])
    except ValueError:
        return None


def ansi_to_html(text: str) -> str:
    """
    Translate true-color SGR sequences into inline-styled spans.

    A span opens lazily before the next visible character and closes on
    reset, on a color change, on a line break and at end of input. Other
    SGR codes are dropped.
    """
    out: List[str] = []
    fg_rgb: Optional[RGB] = None
    bg_rgb: Optional[RGB] = None
    span_open = False

    def close():
        nonlocal span_open
        if span_open:
            out.append("</span>")
            span_open = False

    # split() with one group alternates: text, params, text, params, ..., text
    for i, token in enumerate(ANSI_SGR.split(text)):
        if i % 2:
            params = token.split(";")
            if token in ("", "0"):
                close()
                fg_rgb = bg_rgb = None
            elif params[:2] == ["38", "2"]:
                close()
                fg_rgb = _parse_rgb(params) or fg_rgb
            elif params[:2] == ["48", "2"]:
                close()
                bg_rgb = _parse_rgb(params) or bg_rgb
            continue

        for ch in token:
            if ch in "\r\n":
                close()
                out.append(ch)
                continue
            if not span_open and (fg_rgb or bg_rgb):
                style = ""
                if fg_rgb:
                    style += "color:rgb(%d,%d,%d);" % fg_rgb
                if bg_rgb:
                    style += "background-color:rgb(%d,%d,%d);" % bg_rgb
                out.append(f'<span style="{style}">')
                span_open = True
            out.append(ch.translate(HTML_ESCAPES))

    close()
    return "".join(out)


def build_html_document(content: str, image_path: str) -> str:
    """Self-contained dark page with the art in a <pre> block."""
    title = os.path.basename(image_path).translate(HTML_ESCAPES)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n'
        '  <meta charset="UTF-8">\n'
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"  <title>ASCII Art - {title}</title>\n"
        "  <style>\n"
        "    body {\n"
        "      background-color: #1a1a1a;\n"
        "      margin: 0;\n"
        "      padding: 20px;\n"
        "      display: flex;\n"
        "      justify-content: center;\n"
        "      align-items: flex-start;\n"
        "      min-height: 100vh;\n"
        "    }\n"
        "    .container {\n"
        "      background-color: #0d0d0d;\n"
        "      padding: 20px;\n"
        "      border-radius: 8px;\n"
        "      box-shadow: 0 4px 20px rgba(0, 0, 0, 0.5);\n"
        "      overflow: auto;\n"
        "      max-width: 100%;\n"
        "    }\n"
        "    pre {\n"
        "      margin: 0;\n"
        "      white-space: pre;\n"
        '      font-family: "Consolas", "Monaco", "Courier New", monospace;\n'
        "      font-variant-ligatures: none;\n"
        "      font-size: 10px;\n"
        "      line-height: 1.0;\n"
        "      letter-spacing: 0;\n"
        "    }\n"
        "  </style>\n"
        "</head>\n<body>\n"
        '  <div class="container">\n'
        "    <pre>" + ansi_to_html(content) + "</pre>\n"
        "  </div>\n"
        "</body>\n</html>\n"
    )


# -----------------------------
# Sinks
# -----------------------------


def _require_path(options: RenderOptions, what: str) -> str:
    if not options.output_path:
        raise InvalidConfigurationError(f"Output path is required for {what} output.")
    return options.output_path


def _write_file(path: str, text: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as out:
            out.write(text)
    except OSError as e:
        raise ProcessingError(f"Could not write {path}: {e}") from e


class ConsoleOutput:
    def write(self, content: str, options: RenderOptions) -> None:
        sys.stdout.write(content + "\n")
        sys.stdout.flush()


class TextFileOutput:
    def write(self, content: str, options: RenderOptions) -> None:
        path = _require_path(options, "file")
        text = content if options.preserve_ansi else strip_ansi(content)
        logger.debug("Writing %d chars of text to %s (ansi=%s)", len(text), path, options.preserve_ansi)
        _write_file(path, text)
        print(f"ASCII art saved to: {path}")


class HtmlOutput:
    def write(self, content: str, options: RenderOptions) -> None:
        path = _require_path(options, "HTML")
        doc = build_html_document(content, options.image_path)
        logger.debug("Writing HTML document (%d chars) to %s", len(doc), path)
        _write_file(path, doc)
        print(f"HTML file saved to: {path}")


OUTPUTS: Dict[OutputFormat, Output] = {
    OutputFormat.CONSOLE: ConsoleOutput(),
    OutputFormat.TEXT: TextFileOutput(),
    OutputFormat.HTML: HtmlOutput(),
}


def create_output(output_format: OutputFormat) -> Output:
    return OUTPUTS[output_format]
