from __future__ import annotations

import logging
from typing import List, Sequence

from .errors import InvalidParameter
from .metrics import compute_stats, compute_system_metrics
from .models import Number, Process, RuntimeProcess, ScheduleResult, ScheduledSlice
from .ready_queue import ReadyQueue
from .workload_io import coerce_number

logger = logging.getLogger(__name__)

MIN_QUANTUM = 1


def clamp_quantum(value, minimum: Number = MIN_QUANTUM) -> Number:
    """
    Turn user input into a usable quantum: blank, non-numeric and values
    below ``minimum`` all become ``minimum``.
    """
    quantum = coerce_number(value)
    if quantum < minimum:
        return minimum
    return quantum


def _check_quantum(quantum) -> None:
    try:
        positive = quantum > 0
    except TypeError:
        positive = False
    if isinstance(quantum, bool) or not positive:
        raise InvalidParameter(f"Round Robin requires a positive quantum, got {quantum!r}")


def simulate(quantum: Number, processes: Sequence[Process]) -> List[ScheduledSlice]:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes are admitted in ``(arrival_time, pid)`` order. When a slice
    ends, processes that arrived up to that instant join the ready queue
    before the preempted process goes back to the tail.
    """
    _check_quantum(quantum)

    runnable = [p for p in processes if p.burst_time > 0]
    if len(runnable) != len(processes):
        logger.debug("Ignoring %d process(es) with no burst time", len(processes) - len(runnable))

    procs = [
        RuntimeProcess.from_process(p)
        for p in sorted(runnable, key=lambda p: (p.arrival_time, p.pid))
    ]
    timeline: List[ScheduledSlice] = []
    if not procs:
        return timeline

    ready = ReadyQueue()
    next_idx = 0  # first process not yet admitted
    time = procs[0].arrival_time

    def enqueue_new_arrivals(current_time: Number) -> None:
        nonlocal next_idx
        while next_idx < len(procs) and procs[next_idx].arrival_time <= current_time:
            ready.push(procs[next_idx])
            next_idx += 1

    enqueue_new_arrivals(time)

    while ready or next_idx < len(procs):
        if not ready:
            # Jump to next arrival if CPU is idle
            time = max(time, procs[next_idx].arrival_time)
            logger.debug("CPU idle, advancing clock to %s", time)
            enqueue_new_arrivals(time)
            continue

        proc = ready.pop()
        slice_start = max(time, proc.arrival_time)
        slice_end = slice_start + proc.run(quantum)
        timeline.append(ScheduledSlice(pid=proc.pid, start_time=slice_start, end_time=slice_end))
        logger.debug("%s runs %s-%s (remaining %s)", proc.pid, slice_start, slice_end, proc.remaining)

        time = slice_end

        # Arrivals during this slice go ahead of the preempted process
        enqueue_new_arrivals(time)

        if not proc.is_complete:
            ready.push(proc)

    return timeline


def schedule_rr(processes: Sequence[Process], quantum: Number) -> ScheduleResult:
    """
    Simulate Round Robin and derive the statistics for the resulting timeline.
    """
    timeline = simulate(quantum, processes)
    summary = compute_stats(timeline, processes)
    result = ScheduleResult(quantum=quantum, timeline=timeline, summary=summary)
    result.system = compute_system_metrics(timeline, summary)
    logger.info(
        "Round Robin (q=%s): %d slices for %d processes",
        quantum,
        len(timeline),
        len(summary.processes),
    )
    return result
