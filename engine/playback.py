"""
playback.py - VCR-style Playback Controller
=============================================
Walks the recorded steps of one AlgorithmResult.  Unlike a live generator
stepper, every step already exists, so going backwards is just moving an
index.

State machine:
    READY    --play()-->            PLAYING
    PLAYING  --pause()-->           PAUSED
    PAUSED   --play()-->            PLAYING
    PLAYING  --tick at last step--> FINISHED
    any      --step_forward() onto the last step--> FINISHED
    FINISHED --step_backward()-->   PAUSED
    any      --reset() / load()-->  READY

Timing:
    While PLAYING exactly one TimerHandle is registered with the
    TickScheduler, period = 1 / speed seconds.  It is cancelled on pause,
    completion, reset, reload and close(); a new handle is only ever
    registered after the old one is gone.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Union

from algorithms.step import AlgorithmResult, Step
from engine.timer import TickScheduler, TimerHandle

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    READY    = "ready"
    PLAYING  = "playing"
    PAUSED   = "paused"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (multipliers; 1.0 = one step per second)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, float] = {
    "slow":   0.5,    # teaching mode
    "normal": 1.0,
    "fast":   2.0,
    "turbo":  3.0,
}


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state : Current PlaybackState.
        speed : Steps per second.
        index : Index of the displayed step.
    """

    def __init__(
        self,
        scheduler: TickScheduler,
        default_speed: float = 1.0,
        min_speed: float = 0.25,
        max_speed: float = 3.0,
    ):
        self.scheduler = scheduler
        self.min_speed = min_speed
        self.max_speed = max_speed
        self.speed:  float         = self._clamp(default_speed)
        self.state:  PlaybackState = PlaybackState.READY
        self.index:  int           = 0
        self._steps: Sequence[Step] = ()
        self._timer: Optional[TimerHandle] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, result: Optional[AlgorithmResult]) -> None:
        """Show a new result (or nothing) from its first step."""
        self._cancel_timer()
        self._steps = result.steps if result is not None else ()
        self.index = 0
        self.state = PlaybackState.READY
        logger.debug("playback loaded %d steps", len(self._steps))

    def reset(self) -> None:
        self._cancel_timer()
        self.index = 0
        self.state = PlaybackState.READY

    def close(self) -> None:
        self._cancel_timer()

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if not self._steps:
            return
        if self.state not in (PlaybackState.READY, PlaybackState.PAUSED):
            return
        self.state = PlaybackState.PLAYING
        self._start_timer()
        logger.debug("playback playing at %.2fx from step %d", self.speed, self.index)

    def pause(self) -> None:
        if self.state != PlaybackState.PLAYING:
            return
        self._cancel_timer()
        self.state = PlaybackState.PAUSED
        logger.debug("playback paused at step %d", self.index)

    def tick(self) -> None:
        """Timer callback: advance one step, finishing on the last one."""
        if self.state != PlaybackState.PLAYING:
            return
        if self.index < self._last:
            self.index += 1
        if self.index >= self._last:
            self._finish()

    # ------------------------------------------------------------------
    # Manual navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> None:
        if not self._steps:
            return
        self.index = min(self.index + 1, self._last)
        if self.index == self._last:
            self._finish()

    def step_backward(self) -> None:
        if not self._steps:
            return
        self.index = max(self.index - 1, 0)
        if self.state == PlaybackState.FINISHED:
            self.state = PlaybackState.PAUSED

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: Union[float, str]) -> float:
        """Accepts a multiplier or a SPEED_PRESETS name; returns the clamped speed."""
        if isinstance(speed, str):
            if speed not in SPEED_PRESETS:
                raise ValueError(f"Unknown speed preset: {speed}")
            speed = SPEED_PRESETS[speed]
        self.speed = self._clamp(float(speed))
        if self.state == PlaybackState.PLAYING:
            self._start_timer()
        return self.speed

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.index < len(self._steps):
            return self._steps[self.index]
        return None

    @property
    def total_steps(self) -> int:
        return len(self._steps)

    @property
    def is_finished(self) -> bool:
        return self.state == PlaybackState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    @property
    def period(self) -> float:
        return 1.0 / self.speed

    def snapshot(self) -> Dict[str, Any]:
        return {
            "state":       self.state.value,
            "index":       self.index,
            "total_steps": self.total_steps,
            "speed":       self.speed,
            "is_playing":  self.is_playing,
            "is_finished": self.is_finished,
            "presets":     dict(SPEED_PRESETS),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @property
    def _last(self) -> int:
        return len(self._steps) - 1

    def _clamp(self, speed: float) -> float:
        return max(self.min_speed, min(self.max_speed, speed))

    def _finish(self) -> None:
        self._cancel_timer()
        if self.state != PlaybackState.FINISHED:
            logger.debug("playback finished after %d steps", self.total_steps)
        self.state = PlaybackState.FINISHED

    def _start_timer(self) -> None:
        self._cancel_timer()
        self._timer = self.scheduler.call_every(self.period, self.tick)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
