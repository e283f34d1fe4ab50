"""Tests for watch module."""

import threading
from unittest.mock import Mock

import pytest
from image_ascii_art.errors import ProcessingError
from image_ascii_art.options import RenderOptions
from image_ascii_art.watch import HIDE_CURSOR, SHOW_CURSOR, run_watch

# --- Fixtures ---


@pytest.fixture
def options():
    return RenderOptions(image_path="img.png", watch=True)


def scripted_terminal(sizes, cancel):
    """Return successive sizes, then cancel the loop on the last poll."""
    sizes = list(sizes)

    def terminal():
        if len(sizes) == 1:
            cancel.set()
            return sizes[0]
        return sizes.pop(0)

    return terminal


# --- Tests ---


class TestRunWatch:
    def test_renders_once_per_distinct_size(self, options):
        cancel = threading.Event()
        sizes = [(80, 24), (80, 24), (100, 30), (100, 30), (100, 30), (60, 20), (60, 20)]
        render = Mock()

        count = run_watch(
            options,
            cancel,
            terminal=scripted_terminal(sizes, cancel),
            render=render,
            poll_interval=0,
            startup_delay=0,
        )

        assert count == 3
        rendered = [(c.args[0].width, c.args[0].height) for c in render.call_args_list]
        assert rendered == [(80, 24), (100, 30), (60, 20)]

    def test_each_cycle_gets_fresh_snapshot(self, options):
        cancel = threading.Event()
        render = Mock()
        run_watch(
            options,
            cancel,
            terminal=scripted_terminal([(10, 5), (20, 6), (20, 6)], cancel),
            render=render,
            poll_interval=0,
            startup_delay=0,
        )
        first, second = (c.args[0] for c in render.call_args_list)
        assert first is not second
        assert options.width is None

    def test_already_cancelled_never_renders(self, options, capsys):
        cancel = threading.Event()
        cancel.set()
        render = Mock()
        assert run_watch(options, cancel, terminal=lambda: (80, 24), render=render) == 0
        render.assert_not_called()
        assert SHOW_CURSOR in capsys.readouterr().out

    def test_keyboard_interrupt_is_clean_shutdown(self, options, capsys):
        render = Mock(side_effect=KeyboardInterrupt)
        count = run_watch(
            options, terminal=lambda: (80, 24), render=render, poll_interval=0, startup_delay=0
        )
        assert count == 0
        out = capsys.readouterr().out
        assert out.startswith(HIDE_CURSOR)
        assert SHOW_CURSOR in out
        assert "Watch mode ended." in out

    def test_cursor_restored_on_error(self, options, capsys):
        render = Mock(side_effect=ProcessingError("decode failed"))
        with pytest.raises(ProcessingError):
            run_watch(options, terminal=lambda: (80, 24), render=render, poll_interval=0, startup_delay=0)
        assert SHOW_CURSOR in capsys.readouterr().out

    def test_prints_instructions(self, options, capsys):
        cancel = threading.Event()
        cancel.set()
        run_watch(options, cancel, render=Mock())
        assert "Press Ctrl+C to exit" in capsys.readouterr().out
