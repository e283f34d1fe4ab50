"""Tests for processor module."""

import re
from unittest.mock import patch

import pytest
from image_ascii_art.errors import ImageNotFoundError, UnsupportedFormatError
from image_ascii_art.options import CharacterSet, OutputFormat, RenderMode, RenderOptions
from image_ascii_art.processor import process, render

ESC_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


class TestRender:
    def test_classic_no_color_gradient(self, png_path):
        opt = RenderOptions(
            image_path=str(png_path),
            mode=RenderMode.CLASSIC,
            charset=CharacterSet.SIMPLE,
            width=20,
            height=10,
            no_color=True,
        )
        lines = render(opt).split("\n")
        assert len(lines) == 5
        assert all(len(line) == 20 for line in lines)
        # dark on the left, dense glyphs on the bright right edge
        assert lines[0][0] == " "
        assert lines[0][-1] == "@"

    def test_halfblock_color(self, png_path):
        opt = RenderOptions(image_path=str(png_path), width=20, height=10)
        art = render(opt)
        assert len(art.split("\n")) == 5
        assert "\x1b[48;2;" in art
        assert len(ESC_PATTERN.sub("", art).split("\n")[0]) == 20

    def test_terminal_bounds(self, png_path):
        opt = RenderOptions(image_path=str(png_path), mode=RenderMode.CLASSIC, no_color=True)
        art = render(opt, terminal=lambda: (40, 40))
        assert len(art.split("\n")) == 10

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageNotFoundError):
            render(RenderOptions(image_path=str(tmp_path / "gone.png")))

    def test_unsupported_format_not_decoded(self, tmp_path):
        path = tmp_path / "vector.svg"
        path.write_text("<svg/>")
        with patch("image_ascii_art.loader.Image.open") as mock_open:
            with pytest.raises(UnsupportedFormatError):
                render(RenderOptions(image_path=str(path)))
        mock_open.assert_not_called()


class TestProcess:
    def test_console(self, png_path, capsys):
        process(RenderOptions(image_path=str(png_path), width=10, height=4, no_color=True))
        out = capsys.readouterr().out
        assert out.endswith("\n")
        assert len(out.rstrip("\n").split("\n")) == 2

    def test_text_file(self, png_path, tmp_path):
        target = tmp_path / "out.txt"
        process(
            RenderOptions(
                image_path=str(png_path),
                mode=RenderMode.CLASSIC,
                width=10,
                height=4,
                output_format=OutputFormat.TEXT,
                output_path=str(target),
            )
        )
        text = target.read_text(encoding="utf-8")
        assert not ESC_PATTERN.search(text)
        assert len(text.split("\n")) == 2

    def test_html_file(self, png_path, tmp_path):
        target = tmp_path / "out.html"
        process(
            RenderOptions(
                image_path=str(png_path),
                width=10,
                height=4,
                output_format=OutputFormat.HTML,
                output_path=str(target),
            )
        )
        doc = target.read_text(encoding="utf-8")
        assert "gradient.png" in doc
        assert "background-color:rgb(" in doc
