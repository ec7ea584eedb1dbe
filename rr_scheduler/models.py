from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Process:
    """
    Immutable input record. ``burst_time`` is the original service time and
    never changes during simulation.
    """

    pid: str
    arrival_time: Number
    burst_time: Number
    priority: Optional[Number] = None


@dataclass
class RuntimeProcess:
    """
    Mutable simulation view of a Process: only ``remaining`` evolves.
    """

    process: Process
    remaining: Number

    @classmethod
    def from_process(cls, process: Process) -> "RuntimeProcess":
        return cls(process=process, remaining=process.burst_time)

    @property
    def pid(self) -> str:
        return self.process.pid

    @property
    def arrival_time(self) -> Number:
        return self.process.arrival_time

    @property
    def is_complete(self) -> bool:
        return self.remaining <= 0

    def run(self, quantum: Number) -> Number:
        """
        Consume up to one quantum of CPU time and return the slice length.
        """
        run_time = min(quantum, self.remaining)
        self.remaining -= run_time
        return run_time


@dataclass(frozen=True)
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: Number
    end_time: Number

    @property
    def duration(self) -> Number:
        return self.end_time - self.start_time


@dataclass
class ProcessStats:
    pid: str
    arrival_time: Number
    burst_time: Number
    start_time: Number
    completion_time: Number
    turnaround_time: Number
    waiting_time: Number
    response_time: Number
    priority: Optional[Number] = None


@dataclass
class ScheduleSummary:
    processes: List[ProcessStats] = field(default_factory=list)
    avg_waiting: float = 0.0
    avg_turnaround: float = 0.0
    avg_response: float = 0.0


@dataclass
class SystemMetrics:
    cpu_busy_time: Number
    makespan: Number
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    quantum: Number
    timeline: List[ScheduledSlice] = field(default_factory=list)
    summary: ScheduleSummary = field(default_factory=ScheduleSummary)
    system: Optional[SystemMetrics] = None
    algorithm: str = "Round Robin"

    @property
    def processes(self) -> List[ProcessStats]:
        return self.summary.processes
