"""
engine/
-------
Recording & playback layer.

    from engine import Recorder, PlaybackScheduler, replay_array
"""

from engine.recorder  import Recorder, RunMetrics, compute_metrics
from engine.replay    import replay_array, replay_cells
from engine.scheduler import (
    DEFAULT_SPEED, MAX_DELAY, MIN_DELAY, PlaybackScheduler, SchedulerState, delay_for,
)

__all__ = [
    "Recorder",
    "RunMetrics",
    "compute_metrics",
    "replay_array",
    "replay_cells",
    "PlaybackScheduler",
    "SchedulerState",
    "delay_for",
    "MIN_DELAY",
    "MAX_DELAY",
    "DEFAULT_SPEED",
]
