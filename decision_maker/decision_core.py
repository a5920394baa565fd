from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Protocol

from .clock import Clock
from .keys import KeyCode, KeyEvent, KeyEventKind

logger = logging.getLogger(__name__)

# The six answers, exactly as on the original device.
ANSWERS: tuple[str, ...] = (
    "DEFINITELY",
    "FORGET IT",
    "ASK AGAIN",
    "NEVER",
    "POSSIBLY",
    "WHY NOT",
)

ANIMATION_DURATION_S = 2.0
ANIMATION_STEP_S = 0.12
ANSWER_FLASH_S = 1.5


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int:
        """Return a uniform integer in [a, b]."""
        ...


class SeededRng:
    """Simple seeded RNG wrapper to keep deterministic streams explicit."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(int(seed))

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Animating:
    final_index: int
    current_index: int
    end_at_s: float
    next_switch_s: float


@dataclass(frozen=True, slots=True)
class Showing:
    index: int
    until_s: float


PresentationState = Idle | Animating | Showing


def lit_index(state: PresentationState) -> int | None:
    """Index of the cell drawn highlighted for ``state``, if any."""

    if isinstance(state, Animating):
        return state.current_index
    if isinstance(state, Showing):
        return state.index
    return None


@dataclass(frozen=True, slots=True)
class DecisionSnapshot:
    """View model for the renderer (pure data)."""

    state: PresentationState
    help_visible: bool
    last_answer: int | None
    answers: tuple[str, ...] = ANSWERS

    @property
    def lit_index(self) -> int | None:
        return lit_index(self.state)


class DecisionMaker:
    """Idle -> animating -> showing -> idle, driven by ticks and key events.

    - Time is entirely via injected Clock.
    - Randomness is entirely via injected RandomSource.
    - No I/O; every tick() and on_key() call is total.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        rng: RandomSource,
        answers: tuple[str, ...] = ANSWERS,
        animation_duration_s: float = ANIMATION_DURATION_S,
        animation_step_s: float = ANIMATION_STEP_S,
        answer_flash_s: float = ANSWER_FLASH_S,
    ) -> None:
        if len(answers) < 2:
            raise ValueError("answers must hold at least two entries")
        if animation_duration_s <= 0.0:
            raise ValueError("animation_duration_s must be > 0")
        if animation_step_s <= 0.0:
            raise ValueError("animation_step_s must be > 0")
        if answer_flash_s <= 0.0:
            raise ValueError("answer_flash_s must be > 0")

        self._clock = clock
        self._rng = rng
        self._answers = tuple(answers)
        self._animation_duration_s = float(animation_duration_s)
        self._animation_step_s = float(animation_step_s)
        self._answer_flash_s = float(answer_flash_s)

        self._state: PresentationState = Idle()
        self._help_visible = False
        self._last_answer: int | None = None

    @property
    def state(self) -> PresentationState:
        return self._state

    @property
    def help_visible(self) -> bool:
        return self._help_visible

    @property
    def last_answer(self) -> int | None:
        return self._last_answer

    @property
    def answers(self) -> tuple[str, ...]:
        return self._answers

    def ask(self) -> None:
        """Start a new shuffle, replacing whatever phase is current."""

        final_index = self._rng.randint(0, len(self._answers) - 1)
        current_index = self._draw_other_than(final_index)
        self._last_answer = None

        now = self._clock.now()
        self._state = Animating(
            final_index=final_index,
            current_index=current_index,
            end_at_s=now + self._animation_duration_s,
            # Due immediately so the very next tick shuffles.
            next_switch_s=now,
        )
        logger.debug("ask: final=%d start=%d at %.3f", final_index, current_index, now)

    def tick(self) -> None:
        state = self._state
        if isinstance(state, Idle):
            return

        now = self._clock.now()

        if isinstance(state, Showing):
            if now >= state.until_s:
                self._state = Idle()
                logger.debug("flash over at %.3f", now)
            return

        if now >= state.end_at_s:
            self._last_answer = state.final_index
            self._state = Showing(index=state.final_index, until_s=now + self._answer_flash_s)
            logger.debug("settled on %d at %.3f", state.final_index, now)
            return

        if now >= state.next_switch_s:
            self._state = Animating(
                final_index=state.final_index,
                current_index=self._draw_other_than(state.current_index),
                end_at_s=state.end_at_s,
                next_switch_s=min(now + self._animation_step_s, state.end_at_s),
            )

    def toggle_help(self) -> None:
        self._help_visible = not self._help_visible

    def on_key(self, event: KeyEvent) -> bool:
        """Apply a key event. Returns True if the app should terminate."""

        if event.kind is KeyEventKind.RELEASE:
            return False

        if event.ctrl and event.code is KeyCode.CHAR:
            ch = event.char.lower()
            if ch == "c":
                return True
            if ch == "h":
                self.toggle_help()
                return False

        if event.code is KeyCode.ESC or (event.code is KeyCode.CHAR and event.char in ("q", "Q")):
            if self._help_visible:
                self._help_visible = False
                return False
            return True

        if event.code in (KeyCode.ENTER, KeyCode.SPACE):
            if self._help_visible:
                self._help_visible = False
            else:
                self.ask()
            return False

        # "?" mirrors Ctrl+H for terminals that swallow Ctrl+H as backspace.
        if event.code is KeyCode.CHAR and event.char == "?" and not event.ctrl:
            self.toggle_help()

        return False

    def snapshot(self) -> DecisionSnapshot:
        return DecisionSnapshot(
            state=self._state,
            help_visible=self._help_visible,
            last_answer=self._last_answer,
            answers=self._answers,
        )

    def _draw_other_than(self, index: int) -> int:
        # Remap a draw over N-1 slots around ``index`` so the result always differs.
        pick = self._rng.randint(0, len(self._answers) - 2)
        return pick + 1 if pick >= index else pick
