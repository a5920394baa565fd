from __future__ import annotations

from rich.segment import Segment

from decision_maker.decision_core import ANSWERS, Animating, DecisionSnapshot, Idle, Showing
from decision_maker.render import centered_rect, plain_lines, render_frame, status_lines


def _text(snapshot: DecisionSnapshot, width: int = 100, height: int = 30) -> str:
    return "\n".join(plain_lines(render_frame(snapshot, width, height)))


def _lit_answers(lines: list[list[Segment]]) -> set[str]:
    lit: set[str] = set()
    for line in lines:
        for seg in line:
            style = seg.style
            if style is None or style.bgcolor is None or style.bgcolor.name != "bright_green":
                continue
            for answer in ANSWERS:
                if answer in seg.text:
                    assert style.bold
                    lit.add(answer)
    return lit


def test_fresh_frame_shows_ready_status_and_no_lit_cell() -> None:
    snap = DecisionSnapshot(state=Idle(), help_visible=False, last_answer=None)
    lines = render_frame(snap, 100, 30)
    text = "\n".join(plain_lines(lines))
    assert "EXECUTIVE DECISION MAKER" in text
    assert "Radio Shack" in text
    assert "Ready when you are." in text
    assert "Need instructions? Press Ctrl+H for help." in text
    assert "Press Enter/Space to ask · Ctrl+H for help · q/Esc to quit" in text
    for answer in ANSWERS:
        assert answer in text
    assert _lit_answers(lines) == set()


def test_frame_has_exact_dimensions() -> None:
    snap = DecisionSnapshot(state=Idle(), help_visible=True, last_answer=2)
    for width, height in ((100, 30), (80, 24), (40, 12), (7, 3)):
        lines = render_frame(snap, width, height)
        assert len(lines) == height
        for line in lines:
            assert Segment.get_line_length(line) == width
    assert render_frame(snap, 0, 0) == []


def test_showing_lights_final_cell_and_reports_answer() -> None:
    snap = DecisionSnapshot(state=Showing(index=3, until_s=3.5), help_visible=False, last_answer=3)
    lines = render_frame(snap, 100, 30)
    text = "\n".join(plain_lines(lines))
    assert "Answer: NEVER" in text
    assert "Final answer locked in. Ask again any time." in text
    assert "Highlight stays on briefly so you can see the result." in text
    assert _lit_answers(lines) == {"NEVER"}


def test_animating_lights_current_not_final_cell() -> None:
    state = Animating(final_index=0, current_index=5, end_at_s=2.0, next_switch_s=0.12)
    snap = DecisionSnapshot(state=state, help_visible=False, last_answer=None)
    lines = render_frame(snap, 100, 30)
    text = "\n".join(plain_lines(lines))
    assert "Consulting the oracle..." in text
    assert "Lights are shuffling... hold tight!" in text
    assert _lit_answers(lines) == {"WHY NOT"}


def test_idle_after_answer_reports_final_answer() -> None:
    snap = DecisionSnapshot(state=Idle(), help_visible=False, last_answer=3)
    text = _text(snap)
    assert "Final Answer: NEVER" in text
    assert "Ready for another? Press Enter or Space to ask again." in text
    assert "Press Enter/Space to ask again · Ctrl+H for help · q/Esc to quit" in text


def test_status_lines_table() -> None:
    idle = DecisionSnapshot(state=Idle(), help_visible=False, last_answer=None)
    assert status_lines(idle)[0] == "Ready when you are."
    prior = DecisionSnapshot(state=Idle(), help_visible=False, last_answer=0)
    assert status_lines(prior)[0] == "Final Answer: DEFINITELY"
    showing = DecisionSnapshot(state=Showing(index=4, until_s=1.0), help_visible=False, last_answer=4)
    assert status_lines(showing)[0] == "Answer: POSSIBLY"


def test_help_overlay_drawn_over_base_frame() -> None:
    snap = DecisionSnapshot(state=Idle(), help_visible=True, last_answer=None)
    lines = plain_lines(render_frame(snap, 100, 40))
    text = "\n".join(lines)
    assert "Help" in text
    assert "How to play:" in text
    assert "Ctrl+C           Quit immediately" in text

    x, y, w, h = centered_rect(60, 50, 100, 40)
    assert (x, y, w, h) == (20, 10, 60, 20)
    # Footer rows lie outside the overlay and keep rendering.
    assert any("Ready when you are." in line for line in lines[y + h:])
    assert "How to play:" not in _text(DecisionSnapshot(state=Idle(), help_visible=False, last_answer=None), 100, 40)


def test_render_is_stateless() -> None:
    snap = DecisionSnapshot(state=Showing(index=1, until_s=9.0), help_visible=False, last_answer=1)
    other = DecisionSnapshot(state=Idle(), help_visible=True, last_answer=None)
    first = plain_lines(render_frame(snap, 80, 24))
    plain_lines(render_frame(other, 80, 24))
    assert plain_lines(render_frame(snap, 80, 24)) == first


def test_segments_to_ansi_styles_only_styled_text() -> None:
    from decision_maker.render import ACTIVE_STYLE
    from decision_maker.terminal import segments_to_ansi

    out = segments_to_ansi([Segment("NEVER", ACTIVE_STYLE), Segment(" plain")])
    assert out.startswith("\x1b[")
    assert "NEVER" in out
    assert out.endswith(" plain")


def test_minimum_size_frame_keeps_answer_and_lit_cell_visible() -> None:
    snap = DecisionSnapshot(state=Showing(index=3, until_s=3.5), help_visible=False, last_answer=3)
    lines = render_frame(snap, 40, 12)
    text = "\n".join(plain_lines(lines))
    assert "EXECUTIVE DECISION MAKER" in text
    assert "Final answer locked" in text
    assert "Answer: NEVER" in text
    assert _lit_answers(lines) == {"NEVER"}
    for answer in ("FORGET IT", "ASK AGAIN", "NEVER", "WHY NOT"):
        assert answer in text


def test_narrow_header_truncates_instead_of_wrapping() -> None:
    snap = DecisionSnapshot(state=Animating(0, 1, 2.0, 0.12), help_visible=False, last_answer=None)
    text = "\n".join(plain_lines(render_frame(snap, 44, 24)))
    assert "Lights are shuffling" in text
    assert "Consulting the oracle..." in text
    assert "…" in text
