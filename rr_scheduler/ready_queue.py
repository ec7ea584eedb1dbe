from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator, List

from .models import RuntimeProcess


class ReadyQueue:
    """
    FIFO queue of processes that are eligible for the CPU.

    Backed by a deque so both ends are O(1).
    """

    def __init__(self, items: Iterable[RuntimeProcess] = ()) -> None:
        self._items: Deque[RuntimeProcess] = deque(items)

    def push(self, proc: RuntimeProcess) -> None:
        self._items.append(proc)

    def extend(self, procs: Iterable[RuntimeProcess]) -> None:
        self._items.extend(procs)

    def pop(self) -> RuntimeProcess:
        if not self._items:
            raise IndexError("pop from empty ready queue")
        return self._items.popleft()

    def pids(self) -> List[str]:
        return [p.pid for p in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[RuntimeProcess]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"ReadyQueue({self.pids()!r})"
