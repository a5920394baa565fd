"""Frame rendering for the decision maker.

``render_frame`` is a pure projection of a ``DecisionSnapshot`` onto a grid of
``width`` x ``height`` terminal cells, returned as lines of rich segments. It
keeps nothing between calls; the terminal driver turns the lines into escape
sequences and the tests read them back as plain text.
"""

from __future__ import annotations

import io

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.padding import Padding
from rich.panel import Panel
from rich.segment import Segment
from rich.style import Style
from rich.text import Text

from .decision_core import Animating, DecisionSnapshot, Showing

TITLE = "EXECUTIVE DECISION MAKER"
INVITATION = "Think of a yes/no question, then press Enter or Space."

OUTER_MARGIN = 2
HEADER_HEIGHT = 6
GRID_MIN_HEIGHT = 7
FOOTER_HEIGHT = 4
COMPACT_HEADER_HEIGHT = 3
COMPACT_FOOTER_HEIGHT = 3
BORDERED_CELL_MIN_HEIGHT = 3
GRID_COLUMNS = 3
COLUMN_RATIOS = (33, 33, 34)

HELP_WIDTH_PCT = 60
HELP_HEIGHT_PCT = 50

ACTIVE_STYLE = Style(color="black", bgcolor="bright_green", bold=True)
INACTIVE_STYLE = Style(color="bright_white", bgcolor="bright_black")
TITLE_STYLE = Style(color="yellow", bold=True)
STATUS_STYLE = Style(color="cyan")
HELP_STYLE = Style(color="yellow")
HELP_BORDER_STYLE = Style(color="white")

HELP_TEXT = "\n".join(
    [
        "EXECUTIVE DECISION MAKER",
        "",
        "How to play:",
        "  - Press Enter or Space to shuffle the lights.",
        "  - The lights settle on one answer after about 2 s.",
        "  - The final answer stays lit for about 1.5 s.",
        "",
        "Controls:",
        "  Enter / Space    Ask (or close this help)",
        "  Ctrl+H / ?       Toggle help",
        "  q / Esc          Quit (Esc closes help first)",
        "  Ctrl+C           Quit immediately",
    ]
)


def context_line(snapshot: DecisionSnapshot) -> str:
    state = snapshot.state
    if isinstance(state, Animating):
        return "Lights are shuffling... hold tight!"
    if isinstance(state, Showing):
        return "Final answer locked in. Ask again any time."
    if snapshot.last_answer is None:
        return "Need instructions? Press Ctrl+H for help."
    return "Ready for another? Press Enter or Space to ask again."


def status_lines(snapshot: DecisionSnapshot) -> tuple[str, str]:
    """Return (status, hint) for the footer."""

    state = snapshot.state
    if isinstance(state, Animating):
        return (
            "Consulting the oracle...",
            "Lights flash in random order before the final answer appears.",
        )
    if isinstance(state, Showing):
        return (
            f"Answer: {snapshot.answers[state.index]}",
            "Highlight stays on briefly so you can see the result.",
        )
    if snapshot.last_answer is not None:
        return (
            f"Final Answer: {snapshot.answers[snapshot.last_answer]}",
            "Press Enter/Space to ask again · Ctrl+H for help · q/Esc to quit",
        )
    return (
        "Ready when you are.",
        "Press Enter/Space to ask · Ctrl+H for help · q/Esc to quit",
    )


def centered_rect(percent_x: int, percent_y: int, width: int, height: int) -> tuple[int, int, int, int]:
    """Return (x, y, w, h) of a rectangle centered in a width x height area."""

    w = width * percent_x // 100
    h = height * percent_y // 100
    return (width - w) // 2, (height - h) // 2, w, h


def render_frame(snapshot: DecisionSnapshot, width: int, height: int) -> list[list[Segment]]:
    width = max(0, int(width))
    height = max(0, int(height))
    if width == 0 or height == 0:
        return [[] for _ in range(height)]

    console = _frame_console(width, height)
    options = console.options.update_dimensions(width, height)
    if width > 2 * OUTER_MARGIN and height > 2 * OUTER_MARGIN:
        base = Padding(_build_layout(snapshot, height - 2 * OUTER_MARGIN), OUTER_MARGIN)
        lines = console.render_lines(base, options, pad=True)
    else:
        lines = [[Segment(" " * width)] for _ in range(height)]

    if snapshot.help_visible:
        x, y, w, h = centered_rect(HELP_WIDTH_PCT, HELP_HEIGHT_PCT, width, height)
        if w >= 3 and h >= 3:
            help_lines = console.render_lines(_help_panel(), options.update_dimensions(w, h), pad=True)
            lines = _overlay(lines, help_lines, x, y, w, width)

    return lines


def plain_lines(lines: list[list[Segment]]) -> list[str]:
    return ["".join(seg.text for seg in line if not seg.control) for line in lines]


def _frame_console(width: int, height: int) -> Console:
    return Console(
        file=io.StringIO(),
        width=width,
        height=height,
        force_terminal=True,
        color_system="standard",
        legacy_windows=False,
    )


def _build_layout(snapshot: DecisionSnapshot, inner_height: int) -> Layout:
    compact = inner_height < HEADER_HEIGHT + GRID_MIN_HEIGHT + FOOTER_HEIGHT
    if compact:
        header_height, footer_height, grid_min = COMPACT_HEADER_HEIGHT, COMPACT_FOOTER_HEIGHT, 1
    else:
        header_height, footer_height, grid_min = HEADER_HEIGHT, FOOTER_HEIGHT, GRID_MIN_HEIGHT

    layout = Layout()
    layout.split_column(
        Layout(_header_panel(snapshot, compact), name="header", size=header_height),
        Layout(name="grid", minimum_size=grid_min),
        Layout(_footer_panel(snapshot, compact), name="footer", size=footer_height),
    )

    row_count = -(-len(snapshot.answers) // GRID_COLUMNS)
    grid_height = max(0, inner_height - header_height - footer_height)
    bordered = grid_height // row_count >= BORDERED_CELL_MIN_HEIGHT

    lit = snapshot.lit_index
    rows: list[Layout] = []
    for row_start in range(0, len(snapshot.answers), GRID_COLUMNS):
        row = Layout(name=f"row{row_start // GRID_COLUMNS}")
        row.split_row(
            *(
                Layout(_button(snapshot.answers[i], i == lit, bordered), name=f"cell{i}", ratio=ratio)
                for i, ratio in zip(range(row_start, row_start + GRID_COLUMNS), COLUMN_RATIOS)
                if i < len(snapshot.answers)
            )
        )
        rows.append(row)
    layout["grid"].split_column(*rows)
    return layout


def _line(text: str, style: Style | str = "") -> Align:
    return Align.center(Text(text, style=style, no_wrap=True, overflow="ellipsis"))


def _header_panel(snapshot: DecisionSnapshot, compact: bool) -> Panel:
    context = _line(context_line(snapshot), STATUS_STYLE)
    if compact:
        return Panel(context, title=Text(TITLE, style=TITLE_STYLE))
    body = Group(
        _line(TITLE, TITLE_STYLE),
        Text(""),
        _line(INVITATION),
        context,
    )
    return Panel(body, title=" Radio Shack ")


def _footer_panel(snapshot: DecisionSnapshot, compact: bool) -> Panel:
    status, hint = status_lines(snapshot)
    if compact:
        return Panel(_line(status, Style(bold=True)), title="Status")
    body = Group(
        _line(status, Style(bold=True)),
        _line(hint, STATUS_STYLE),
    )
    return Panel(body, title="Status")


def _button(label: str, active: bool, bordered: bool = True) -> Panel | Align:
    style = ACTIVE_STYLE if active else INACTIVE_STYLE
    text = Text(f" {label} ", style=style, no_wrap=True, overflow="ellipsis")
    if not bordered:
        return Align.center(text, vertical="middle", style=style)
    return Panel(Align.center(text, vertical="middle"), style=style)


def _help_panel() -> Panel:
    return Panel(
        Text(HELP_TEXT, style=HELP_STYLE),
        title=" Help ",
        border_style=HELP_BORDER_STYLE,
    )


def _overlay(
    base: list[list[Segment]],
    top: list[list[Segment]],
    x: int,
    y: int,
    w: int,
    total_width: int,
) -> list[list[Segment]]:
    # Cut columns [x, x + w) out of each covered base row and splice the overlay row in.
    out = list(base)
    for row, top_line in enumerate(top):
        if y + row >= len(out):
            break
        left, _, right = Segment.divide(out[y + row], [x, x + w, total_width])
        out[y + row] = [*left, *top_line, *right]
    return out
