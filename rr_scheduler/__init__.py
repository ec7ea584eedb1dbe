"""
Round Robin scheduler package.

Simulates Round Robin CPU scheduling for a set of processes and derives
completion, turnaround and waiting statistics from the resulting timeline.
"""

from .algorithms import clamp_quantum, schedule_rr, simulate
from .errors import InvalidParameter
from .metrics import compute_stats
from .models import Process, ScheduledSlice
from .workload_io import normalize_processes

__all__ = [
    "InvalidParameter",
    "Process",
    "ScheduledSlice",
    "clamp_quantum",
    "compute_stats",
    "normalize_processes",
    "schedule_rr",
    "simulate",
]
