"""
playback.py — Step-by-Step Playback Driver
===========================================
Playback is the object a UI holds during a run.  It pulls events from a
ShortestPathStepper only when asked to move past what it has already seen,
and keeps every pulled event so the run can be walked backwards.

State machine:
    IDLE      →  start()                →  PAUSED
    PAUSED    →  RunFinished displayed  →  FINISHED
    FINISHED  →  prev_step() / rewind() →  PAUSED
    any       →  reset()                →  IDLE

Once RunFinished has been pulled the stepper is never advanced again, so
a driver built on Playback cannot trigger StepperExhausted.

Thread safety:
  This class is NOT thread-safe.  The UI must drive it from one thread.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from algorithms import RunFinished, ShortestPathStepper, StepEvent

logger = logging.getLogger(__name__)


class PlaybackState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    FINISHED = "finished"


class Playback:
    """
    Attributes:
        state       : Current PlaybackState.
        events      : Every StepEvent pulled so far, in emission order.
        current_idx : Index into `events` of the displayed event (-1: none yet).
        on_event    : Optional callback(StepEvent) fired whenever the displayed
                      event changes.
    """

    def __init__(self, on_event: Optional[Callable[[StepEvent], None]] = None):
        self._stepper:    Optional[ShortestPathStepper] = None
        self.events:      List[StepEvent]  = []
        self.current_idx: int              = -1
        self.state:       PlaybackState    = PlaybackState.IDLE
        self.on_event:    Optional[Callable[[StepEvent], None]] = on_event

    def start(self, stepper: ShortestPathStepper) -> None:
        """Attach a fresh stepper.  Nothing is pulled until a step is requested."""
        self._stepper = stepper
        self._clear(PlaybackState.PAUSED)

    def reset(self) -> None:
        """Detach the stepper; start() must be called again."""
        self._stepper = None
        self._clear(PlaybackState.IDLE)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Show the next event, pulling it if needed.  False at the end."""
        return self.goto_step(self.current_idx + 1)

    def prev_step(self) -> bool:
        """Show the previous event.  False when already on the first one."""
        if self.current_idx <= 0:
            return False
        return self.goto_step(self.current_idx - 1)

    def goto_step(self, idx: int) -> bool:
        """Show event `idx`, pulling forward as far as needed.  False if out of reach."""
        if idx < 0:
            return False
        while idx >= len(self.events) and self._pull():
            pass
        if idx >= len(self.events):
            return False
        self._show(idx)
        return True

    def rewind(self) -> None:
        """Back to the first event."""
        if self.events:
            self._show(0)

    def jump_to_end(self) -> None:
        """Drain the stepper and show RunFinished."""
        while self._pull():
            pass
        if self.events:
            self._show(len(self.events) - 1)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_event(self) -> Optional[StepEvent]:
        if self.current_idx >= 0:
            return self.events[self.current_idx]
        return None

    @property
    def stepper(self) -> Optional[ShortestPathStepper]:
        return self._stepper

    @property
    def total_events_fetched(self) -> int:
        return len(self.events)

    @property
    def is_finished(self) -> bool:
        return self.state is PlaybackState.FINISHED

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _pull(self) -> bool:
        if self._stepper is None or self._stepper.is_finished:
            return False
        self.events.append(self._stepper.advance())
        return True

    def _show(self, idx: int) -> None:
        self.current_idx = idx
        event = self.events[idx]
        if isinstance(event, RunFinished):
            self.state = PlaybackState.FINISHED
        else:
            self.state = PlaybackState.PAUSED
        logger.debug("playback at %d: %r", idx, event)
        if self.on_event is not None:
            self.on_event(event)

    def _clear(self, state: PlaybackState) -> None:
        self.events      = []
        self.current_idx = -1
        self.state       = state
