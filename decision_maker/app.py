"""Event loop for the Executive Decision Maker.

Each iteration advances the engine clock, draws the current snapshot, then
waits up to one tick for a key. The key is applied only after the frame that
showed the state it was pressed against.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from .clock import RealClock
from .decision_core import DecisionMaker, SeededRng
from .keys import KeyEvent
from .render import render_frame
from .terminal import Screen, open_terminal

logger = logging.getLogger(__name__)

TICK_S = 0.05


def _new_seed() -> int:
    return random.SystemRandom().randint(1, 2**31 - 1)


def run_loop(
    engine: DecisionMaker,
    screen: Screen,
    *,
    tick_s: float = TICK_S,
    max_frames: int | None = None,
    event_injector: Callable[[int], KeyEvent | None] | None = None,
) -> int:
    """Drive ``engine`` against ``screen`` until a key requests termination.

    Returns the number of frames drawn.
    """

    frame = 0
    while True:
        engine.tick()
        width, height = screen.size()
        screen.draw(render_frame(engine.snapshot(), width, height))
        frame += 1

        key = event_injector(frame) if event_injector is not None else None
        if key is None:
            key = screen.poll(tick_s)
        if key is not None and engine.on_key(key):
            logger.debug("quit requested after %d frames", frame)
            return frame

        if max_frames is not None and frame >= max_frames:
            return frame


def run(*, max_frames: int | None = None, event_injector: Callable[[int], KeyEvent | None] | None = None) -> int:
    engine = DecisionMaker(clock=RealClock(), rng=SeededRng(_new_seed()))
    with open_terminal() as screen:
        run_loop(engine, screen, max_frames=max_frames, event_injector=event_injector)
    return 0
