"""
Event log and step-through playback for an already computed schedule.

Nothing here re-runs the simulation: playback only walks the slice list.
"""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Sequence

from .models import Number, ScheduledSlice

DEFAULT_PREVIEW = 5


def describe_slice(sl: ScheduledSlice) -> str:
    return f"{sl.pid} runs from {sl.start_time} to {sl.end_time}"


def build_event_log(
    slices: Sequence[ScheduledSlice],
    quantum: Number,
    limit: int = DEFAULT_PREVIEW,
) -> List[str]:
    """
    Summarize a freshly built schedule: the quantum, the first ``limit``
    slices and a count of the rest.
    """
    if not slices:
        return ["No segments produced (check bursts)."]

    limit = max(0, limit)
    lines = [f"Schedule built with quantum = {quantum}."]
    lines.extend(describe_slice(sl) for sl in slices[:limit])
    hidden = len(slices) - limit
    if hidden > 0:
        lines.append(f"... {hidden} more segments")
    return lines


class Playback:
    """
    Cursor over a schedule that can be stepped, played and reset.
    """

    def __init__(self, slices: Sequence[ScheduledSlice]) -> None:
        self._slices = list(slices)
        self._index = 0

    @property
    def position(self) -> int:
        return self._index

    @property
    def finished(self) -> bool:
        return self._index >= len(self._slices)

    @property
    def current(self) -> Optional[ScheduledSlice]:
        if self._index == 0:
            return None
        return self._slices[self._index - 1]

    def step(self) -> Optional[ScheduledSlice]:
        if self.finished:
            return None
        sl = self._slices[self._index]
        self._index += 1
        return sl

    def reset(self) -> None:
        self._index = 0

    def play(
        self,
        callback: Callable[[ScheduledSlice], None],
        delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """
        Show every remaining slice through ``callback``, pausing ``delay``
        seconds between them. Returns the number of slices shown.
        """
        shown = 0
        while not self.finished:
            if shown and delay > 0:
                sleep(delay)
            callback(self.step())
            shown += 1
        return shown

    def __len__(self) -> int:
        return len(self._slices)
