"""
engine/
-------
Drivers that sit on top of the stepper: playback, highlighting, recording.

    from engine import Playback, Highlighter, Recorder
"""

from engine.playback    import Playback, PlaybackState
from engine.highlighter import Highlighter, Highlight
from engine.recorder    import Recorder, RunMetrics

__all__ = [
    "Playback",
    "PlaybackState",
    "Highlighter",
    "Highlight",
    "Recorder",
    "RunMetrics",
]
