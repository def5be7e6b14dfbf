from __future__ import annotations

import random
import time
from typing import Callable, Optional

from snake_state import GameConfig, GameState, Phase, StepOutcome, new_game, step

TimeSource = Callable[[], int]
SpeedSource = Callable[[], int]
DrawHook = Callable[[GameState], None]


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class GameLoop:
    """Drive a game with one recurring tick timer and one resume timer.

    ``poll`` is meant to be called once per frame. Timers are plain deadlines
    compared against ``clock()``, so tests can hand in a fake clock and step
    time forward explicitly.
    """

    def __init__(
        self,
        config: GameConfig,
        speed_source: SpeedSource,
        *,
        clock: TimeSource = monotonic_ms,
        rng: Optional[random.Random] = None,
        on_draw: Optional[DrawHook] = None,
    ) -> None:
        self.config = config
        self.speed_source = speed_source
        self.clock = clock
        self.rng = rng or random.Random()
        self.on_draw = on_draw
        self.state: Optional[GameState] = None
        self.interval_ms = 0
        self.next_tick_at: Optional[int] = None
        self.resume_at: Optional[int] = None

    @property
    def phase(self) -> Phase:
        return self.state.phase if self.state is not None else Phase.IDLE

    def _read_speed(self) -> int:
        interval = int(self.speed_source())
        if interval <= 0:
            raise ValueError(f"tick interval must be positive, got {interval}")
        return interval

    def stop(self) -> None:
        self.next_tick_at = None
        self.resume_at = None

    def start(self) -> GameState:
        """Discard any running game and begin a fresh one."""
        self.stop()
        self.state = new_game(self.config, self.rng)
        self.interval_ms = self._read_speed()
        self.next_tick_at = self.clock() + self.interval_ms
        if self.on_draw is not None:
            self.on_draw(self.state)
        return self.state

    def poll(self) -> Optional[StepOutcome]:
        """Fire whatever timer is due. Returns the tick outcome, if a tick ran."""
        state = self.state
        if state is None:
            return None
        now = self.clock()

        if state.phase is Phase.PAUSED:
            if self.resume_at is not None and now >= self.resume_at:
                self.resume_at = None
                state.phase = Phase.RUNNING
                # 재개할 때 선택된 속도를 다시 적용한다.
                self.interval_ms = self._read_speed()
                self.next_tick_at = now + self.interval_ms
            return None

        if state.phase is not Phase.RUNNING or self.next_tick_at is None:
            return None
        if now < self.next_tick_at:
            return None

        outcome = self.tick()
        if outcome in (StepOutcome.MOVED, StepOutcome.ATE):
            self.next_tick_at += self.interval_ms
            if self.next_tick_at <= now:
                # 프레임이 밀렸으면 몰아서 움직이지 않고 한 칸만 진행한다.
                self.next_tick_at = now + self.interval_ms
        return outcome

    def tick(self) -> StepOutcome:
        """Run one game tick right now, independent of the timers."""
        state = self.state
        if state is None:
            raise RuntimeError("game has not been started")
        outcome = step(state, self.config, self.rng)
        if outcome is StepOutcome.MISTAKE:
            self.next_tick_at = None
            self.resume_at = self.clock() + self.config.pause_ms
        elif outcome is StepOutcome.GAME_OVER:
            self.stop()
        elif self.on_draw is not None:
            self.on_draw(state)
        return outcome
