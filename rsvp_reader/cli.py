"""Command-line RSVP player.

WHY: The quickest way to read a document with the reader is from the
terminal: point it at a file and watch the words go by. The CLI wires
the whole pipeline, from file validation to fixation rendering, behind
a single command.

HOW: Uses argparse for the file path and playback options. The document
is loaded through rsvp_reader.parsers.load_tokens(), then played by a
TimingController on an AsyncioScheduler inside asyncio.run(). Each
frame is redrawn in place on one terminal line, with the anchor letter
highlighted and pinned to a fixed column so the eye never moves.

RULES:
- Positional argument: input document path
- --wpm is clamped to the supported range, never rejected
- --stats prints token count and estimated minutes to stdout and exits
- Frames go to stdout; status and errors go to stderr
- DocumentError → "Error: ..." on stderr, exit code 1
- Ctrl-C pauses playback and exits with code 130
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional, TextIO

from rsvp_reader.config import DEFAULT_WPM, MAX_WPM, MIN_WPM, clamp_wpm
from rsvp_reader.core.orp import FixationSplit, split_at_anchor
from rsvp_reader.core.schedulers import AsyncioScheduler
from rsvp_reader.core.timing import TimingController
from rsvp_reader.core.tokenizer import estimate_minutes
from rsvp_reader.parsers import DocumentError, load_tokens

ANCHOR_COLUMN = 12
"""Terminal column (0-based) at which every anchor is drawn."""

FRAME_WIDTH = 40
"""Screen columns reserved for a frame before the progress percentage."""

_HIGHLIGHT = "\033[1;31m"
_RESET = "\033[0m"
_CLEAR_LINE = "\r\033[K"


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not interleave with the frames on stdout.
    """
    print(msg, file=sys.stderr, flush=True)


def render_split(
    split: FixationSplit,
    column: int = ANCHOR_COLUMN,
    color: bool = True,
) -> str:
    """Lay out one frame so the anchor lands on ``column``.

    RULES:
    - The before-part is left-padded with spaces up to ``column``
    - A before-part longer than ``column`` is not truncated
    - With color, the anchor is wrapped in bold red ANSI codes
    """
    padding = " " * max(0, column - len(split.before))
    anchor = split.anchor
    if color and anchor:
        anchor = "{}{}{}".format(_HIGHLIGHT, anchor, _RESET)
    return "{}{}{}{}".format(padding, split.before, anchor, split.after)


class TerminalDisplay:
    """Display and progress callbacks that redraw a single terminal line.

    The controller always reports progress right after the word, so the
    word is remembered and the full line is drawn on the progress call.
    Progress reports the index of the word on screen, so the last word
    is redrawn at 100% once playback completes.
    """

    def __init__(self, stream: TextIO, color: bool = True) -> None:
        self._stream = stream
        self._color = color
        self._frame = ""
        self._frame_width = 0

    def show_word(self, token: str, index: int) -> None:
        split = split_at_anchor(token)
        self._frame = render_split(split, color=self._color)
        # Escape codes take no screen columns
        self._frame_width = len(render_split(split, color=False))

    def show_progress(self, current: int, total: int) -> None:
        percent = round(current / total * 100) if total else 0
        self._draw(percent)

    def show_complete(self) -> None:
        self._draw(100)

    def finish(self) -> None:
        self._stream.write("\n")
        self._stream.flush()

    def _draw(self, percent: int) -> None:
        padding = " " * max(0, FRAME_WIDTH - self._frame_width)
        line = "{}{} {:>3d}%".format(self._frame, padding, percent)
        self._stream.write(_CLEAR_LINE + line)
        self._stream.flush()


async def _play(tokens: List[str], args: argparse.Namespace) -> None:
    """Play tokens until completion; pauses the controller on cancellation."""
    done = asyncio.Event()
    color = not args.no_color and sys.stdout.isatty()
    display = TerminalDisplay(sys.stdout, color=color)

    def on_complete() -> None:
        display.show_complete()
        done.set()

    controller = TimingController(
        AsyncioScheduler(asyncio.get_running_loop()),
        wpm=args.wpm,
        on_word=display.show_word,
        on_progress=display.show_progress,
        on_complete=on_complete,
    )
    controller.load(tokens)
    if args.start_percent:
        controller.seek_percent(args.start_percent)

    controller.play()
    try:
        await done.wait()
    finally:
        controller.pause()
        display.finish()


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() lets tests inspect
    the parser without playing anything.
    """
    parser = argparse.ArgumentParser(
        prog="rsvp-reader",
        description="Speed-read a PDF, DOCX, EPUB, Markdown or text file "
                    "one word at a time.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the document to read.",
    )

    parser.add_argument(
        "--wpm",
        type=int,
        default=DEFAULT_WPM,
        help="Reading speed in words per minute, {}-{} (default: %(default)s).".format(
            MIN_WPM, MAX_WPM
        ),
    )

    parser.add_argument(
        "--start-percent",
        type=float,
        default=0.0,
        help="Start reading at this percentage of the document (default: %(default)s).",
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print token count and estimated reading time, then exit.",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Do not highlight the anchor letter with ANSI colors.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    requested = args.wpm
    args.wpm = clamp_wpm(requested)
    if args.wpm != requested:
        _status("Reading speed clamped to {} WPM".format(args.wpm))

    try:
        tokens = load_tokens(args.input_file)
    except DocumentError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    if args.stats:
        minutes = estimate_minutes(len(tokens), args.wpm)
        print("Tokens: {}".format(len(tokens)))
        print("Estimated reading time: {} min at {} WPM".format(minutes, args.wpm))
        return

    _status("Reading {} tokens at {} WPM (Ctrl-C to stop)".format(len(tokens), args.wpm))
    try:
        asyncio.run(_play(tokens, args))
    except KeyboardInterrupt:
        _status("\nStopped by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
