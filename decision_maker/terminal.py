from __future__ import annotations

import contextlib
import logging
import sys
from collections.abc import Iterator
from typing import Protocol, TextIO

from blessed import Terminal
from rich.color import ColorSystem
from rich.segment import Segment

from .clock import InputSource
from .keys import KeyEvent, key_event_from_keystroke

logger = logging.getLogger(__name__)


class TerminalUnavailableError(OSError):
    """Raised when the output stream is not an interactive terminal."""


class Screen(InputSource, Protocol):
    def size(self) -> tuple[int, int]: ...
    def draw(self, lines: list[list[Segment]]) -> None: ...


def segments_to_ansi(line: list[Segment], color_system: ColorSystem = ColorSystem.STANDARD) -> str:
    return "".join(
        seg.style.render(seg.text, color_system=color_system) if seg.style else seg.text
        for seg in line
        if not seg.control
    )


class TerminalScreen:
    """Screen backed by a blessed Terminal already in raw fullscreen mode."""

    def __init__(self, term: Terminal) -> None:
        self._term = term

    def size(self) -> tuple[int, int]:
        return self._term.width, self._term.height

    def draw(self, lines: list[list[Segment]]) -> None:
        # Absolute positioning per row; never emits a newline on the last row.
        term = self._term
        out = [term.move_xy(0, row) + segments_to_ansi(line) for row, line in enumerate(lines)]
        term.stream.write("".join(out) + term.normal)
        term.stream.flush()

    def poll(self, timeout_s: float) -> KeyEvent | None:
        keystroke = self._term.inkey(timeout=max(0.0, float(timeout_s)))
        return key_event_from_keystroke(keystroke)


@contextlib.contextmanager
def open_terminal(stream: TextIO | None = None) -> Iterator[TerminalScreen]:
    """Acquire the terminal in raw, alternate-screen, hidden-cursor mode.

    Modes are released in reverse order on every exit path, including when a
    later setup step or the caller's block raises.
    """

    term = Terminal(stream=stream if stream is not None else sys.stdout)
    if not term.is_a_tty:
        raise TerminalUnavailableError("stdout is not a terminal")

    with contextlib.ExitStack() as stack:
        stack.enter_context(term.fullscreen())
        stack.enter_context(term.hidden_cursor())
        stack.enter_context(term.raw())
        logger.debug("terminal acquired (%dx%d)", term.width, term.height)
        term.stream.write(term.home + term.clear)
        term.stream.flush()
        yield TerminalScreen(term)
        logger.debug("releasing terminal")
