"""
engine/
-------
History, playback & recording layer.

    from engine import EditorSession, History, PlaybackController, Recorder
"""

from engine.history  import History
from engine.timer    import TickScheduler, TimerHandle
from engine.playback import PlaybackController, PlaybackState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics
from engine.session  import EditorSession

__all__ = [
    "History",
    "TickScheduler",
    "TimerHandle",
    "PlaybackController",
    "PlaybackState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "EditorSession",
]
