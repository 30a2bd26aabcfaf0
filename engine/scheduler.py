"""
scheduler.py — Playback Scheduler
===================================
Drives an already-recorded Trace forward one Step per tick on an asyncio
event loop.  The Scheduler is the ONLY thing that hands Steps to the
view; it never looks inside them.

State machine:
    IDLE / CANCELLED  →  start()          →  RUNNING
    RUNNING           →  last Step done   →  IDLE      (on_complete fires)
    RUNNING           →  cancel()         →  CANCELLED (no completion signal)
    RUNNING           →  on_step raises   →  CANCELLED (exception re-raised)
    RUNNING           →  start()          →  ignored, returns False

Timing:
    delay = MAX_DELAY − speed + MIN_DELAY   (ms, speed ∈ [MIN_DELAY, MAX_DELAY])
  so a higher speed means a shorter delay.  The first Step is emitted on
  the next loop iteration; completion is signalled one delay after the
  last Step.  set_speed() only affects the next delay that is scheduled,
  never the one already pending.

Cancellation:
  cancel() cancels the pending TimerHandle AND bumps a run token.  A tick
  that still fires from an older run sees a stale token and does nothing,
  so no orphaned tick can emit after cancel() or a restart.

Thread safety:
  None needed.  Everything runs on the loop's thread; start() must be
  called from inside a running loop.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Tuple

from algorithms.step import Step

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Speed range (ms)
# ---------------------------------------------------------------------------
MIN_DELAY     = 10
MAX_DELAY     = 3000
DEFAULT_SPEED = 500


def clamp_speed(speed: float) -> float:
    return max(MIN_DELAY, min(MAX_DELAY, speed))


def delay_for(speed: float) -> float:
    """Milliseconds to wait before the next Step at slider value `speed`."""
    return MAX_DELAY - clamp_speed(speed) + MIN_DELAY


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class SchedulerState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------
class PlaybackScheduler:
    """
    Attributes:
        state       : Current SchedulerState.
        speed       : Slider value in [MIN_DELAY, MAX_DELAY].
        on_step     : callback(Step), fired once per emitted Step.
        on_complete : Optional callback(artifact), fired when a run ends naturally.
        emitted     : Steps emitted in the current / last run.
    """

    def __init__(
        self,
        on_step: Callable[[Step], None],
        on_complete: Optional[Callable[[Any], None]] = None,
        speed: float = DEFAULT_SPEED,
    ):
        self.on_step     = on_step
        self.on_complete = on_complete
        self.state:  SchedulerState = SchedulerState.IDLE
        self.speed:  float          = clamp_speed(speed)
        self.emitted: int           = 0

        self._steps:    Tuple[Step, ...]                = ()
        self._artifact: Any                             = None
        self._handle:   Optional[asyncio.Handle]        = None
        self._loop:     Optional[asyncio.AbstractEventLoop] = None
        self._token:    int                             = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, trace: Iterable[Step], speed: Optional[float] = None, artifact: Any = None) -> bool:
        """Begin playback.  Returns False (and changes nothing) while RUNNING."""
        if self.is_running:
            log.warning("start() ignored: playback already running")
            return False
        if speed is not None:
            self.set_speed(speed)

        self._loop     = asyncio.get_running_loop()
        self._steps    = tuple(trace)
        self._artifact = artifact
        self.emitted   = 0
        self._token   += 1
        self.state     = SchedulerState.RUNNING
        self._handle   = self._loop.call_soon(self._tick, self._token)
        log.debug("playback started: %d steps, delay %d ms", len(self._steps), self.delay)
        return True

    def cancel(self) -> bool:
        """Stop a running playback without a completion signal."""
        if self.state is not SchedulerState.RUNNING:
            return False
        self._token += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.state = SchedulerState.CANCELLED
        log.debug("playback cancelled after %d of %d steps", self.emitted, len(self._steps))
        return True

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: float) -> None:
        self.speed = clamp_speed(speed)

    @property
    def delay(self) -> float:
        return delay_for(self.speed)

    @property
    def is_running(self) -> bool:
        return self.state is SchedulerState.RUNNING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _tick(self, token: int) -> None:
        if token != self._token or self.state is not SchedulerState.RUNNING:
            return
        self._handle = None

        if self.emitted >= len(self._steps):
            self.state = SchedulerState.IDLE
            log.debug("playback complete: %d steps", self.emitted)
            if self.on_complete is not None:
                self.on_complete(self._artifact)
            return

        current = self._steps[self.emitted]
        self.emitted += 1
        try:
            self.on_step(current)
        except Exception:
            # a failing view must not leave a RUNNING scheduler with no timer
            self._token += 1
            self.state = SchedulerState.CANCELLED
            log.exception("on_step failed at step %d; playback cancelled", self.emitted)
            raise

        # on_step may have cancelled or restarted playback
        if token != self._token:
            return
        self._handle = self._loop.call_later(self.delay / 1000, self._tick, token)
