"""Tests for the command-line player.

WHY: The CLI is the main entry point for terminal users. Argument
parsing, exit codes and the frame layout are its whole contract.

HOW: main() is called with an explicit argv list; stdout/stderr are
captured with capsys. Playback tests run at the maximum speed over a
three-token file so they finish in a fraction of a second.

RULES:
- Documents are written to tmp_path
- capsys output is not a TTY, so frames are rendered without color
"""

from __future__ import annotations

import io

import pytest

from rsvp_reader.cli import (
    ANCHOR_COLUMN,
    FRAME_WIDTH,
    TerminalDisplay,
    build_parser,
    main,
    render_split,
)
from rsvp_reader.config import DEFAULT_WPM, MAX_WPM
from rsvp_reader.core.orp import FixationSplit, split_at_anchor


def _visible(output: str) -> str:
    """Terminal output with cursor and color escape codes removed."""
    for code in ("\r", "\033[K", "\033[1;31m", "\033[0m"):
        output = output.replace(code, "")
    return output


@pytest.fixture
def short_doc(tmp_path):
    path = tmp_path / "short.txt"
    path.write_text("alpha beta.", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# TestArgumentParsing
# ---------------------------------------------------------------------------


class TestArgumentParsing:
    """build_parser() defaults and options."""

    def test_defaults(self):
        args = build_parser().parse_args(["book.epub"])
        assert args.input_file == "book.epub"
        assert args.wpm == DEFAULT_WPM
        assert args.start_percent == 0.0
        assert args.stats is False
        assert args.no_color is False

    def test_options(self):
        args = build_parser().parse_args(
            ["book.pdf", "--wpm", "500", "--start-percent", "25", "--stats", "--no-color"]
        )
        assert args.wpm == 500
        assert args.start_percent == 25.0
        assert args.stats is True
        assert args.no_color is True

    def test_missing_file_argument(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2

    def test_non_integer_wpm(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["book.pdf", "--wpm", "fast"])


# ---------------------------------------------------------------------------
# TestStats
# ---------------------------------------------------------------------------


class TestStats:
    """--stats prints counts and exits without playing."""

    def test_prints_token_count_and_minutes(self, short_doc, capsys):
        main([str(short_doc), "--stats", "--wpm", "300"])
        out = capsys.readouterr().out
        assert "Tokens: 3" in out
        assert "Estimated reading time: 1 min at 300 WPM" in out

    def test_wpm_is_clamped(self, short_doc, capsys):
        main([str(short_doc), "--stats", "--wpm", "5000"])
        captured = capsys.readouterr()
        assert "at {} WPM".format(MAX_WPM) in captured.out
        assert "clamped" in captured.err


# ---------------------------------------------------------------------------
# TestErrors
# ---------------------------------------------------------------------------


class TestErrors:
    """Ingestion failures exit with code 1 and a message on stderr."""

    def test_unsupported_file(self, tmp_path, capsys):
        path = tmp_path / "photo.png"
        path.write_bytes(b"\x89PNG")
        with pytest.raises(SystemExit) as exc_info:
            main([str(path)])
        assert exc_info.value.code == 1
        assert "Error: Unsupported file type" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "nope.txt")])
        assert exc_info.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_empty_file(self, tmp_path, capsys):
        path = tmp_path / "blank.md"
        path.write_text("\n\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main([str(path)])
        assert exc_info.value.code == 1
        assert "No text content" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# TestRendering
# ---------------------------------------------------------------------------


class TestRendering:
    """Frames pin the anchor to a fixed column."""

    @pytest.mark.parametrize("token", ["a", "cat", "word", "(wow)", "internationalization"])
    def test_anchor_lands_on_column(self, token):
        line = render_split(split_at_anchor(token), color=False)
        assert line.startswith(" " * (ANCHOR_COLUMN - len(split_at_anchor(token).before)))
        assert line[ANCHOR_COLUMN] == split_at_anchor(token).anchor[0]
        assert line.strip() == token

    def test_color_wraps_anchor(self):
        line = render_split(FixationSplit("c", "a", "t"), column=1)
        assert line == "c\033[1;31ma\033[0mt"

    def test_punctuation_is_not_highlighted(self):
        assert render_split(FixationSplit(".", "", ""), column=2) == " ."

    def test_long_prefix_is_not_truncated(self):
        line = render_split(FixationSplit("abcdef", "g", "h"), column=3, color=False)
        assert line == "abcdefgh"

    def test_display_writes_one_line_per_step(self):
        stream = io.StringIO()
        display = TerminalDisplay(stream, color=False)
        display.show_word("cat", 0)
        display.show_progress(1, 4)
        display.finish()

        output = stream.getvalue()
        assert output.startswith("\r\033[K")
        assert "cat" in output
        assert output.rstrip("\n").endswith(" 25%")
        assert output.endswith("\n")

    @pytest.mark.parametrize("color", [True, False])
    def test_percentage_column_is_fixed(self, color):
        widths = set()
        for token in ["a", "cat", "(wow)", "internationalization"]:
            stream = io.StringIO()
            display = TerminalDisplay(stream, color=color)
            display.show_word(token, 0)
            display.show_progress(1, 4)
            visible = _visible(stream.getvalue())
            widths.add(visible.index("%"))
        assert widths == {FRAME_WIDTH + 4}

    def test_completion_shows_full_progress(self):
        stream = io.StringIO()
        display = TerminalDisplay(stream, color=False)
        display.show_word("end", 2)
        display.show_progress(2, 3)
        display.show_complete()
        last_line = stream.getvalue().split("\r\033[K")[-1]
        assert "end" in last_line
        assert last_line.endswith("100%")


# ---------------------------------------------------------------------------
# TestPlayback
# ---------------------------------------------------------------------------


class TestPlayback:
    """main() plays the whole document and returns."""

    def test_plays_every_token(self, short_doc, capsys):
        main([str(short_doc), "--wpm", str(MAX_WPM)])
        captured = capsys.readouterr()
        assert "alpha" in captured.out
        assert "beta" in captured.out
        assert captured.out.rstrip("\n").endswith("100%")
        assert "\033[1;31m" not in captured.out
        assert "Reading 3 tokens at {} WPM".format(MAX_WPM) in captured.err

    def test_start_percent_skips_ahead(self, tmp_path, capsys):
        path = tmp_path / "skip.txt"
        path.write_text("first second third fourth", encoding="utf-8")
        main([str(path), "--wpm", str(MAX_WPM), "--start-percent", "50"])
        out = capsys.readouterr().out
        assert "third" in out
        assert "first" not in out
