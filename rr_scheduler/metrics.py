from __future__ import annotations

from typing import Dict, List, Sequence

from .models import Number, Process, ProcessStats, ScheduledSlice, ScheduleSummary, SystemMetrics


def _mean(values: List[Number]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_stats(segments: Sequence[ScheduledSlice], processes: Sequence[Process]) -> ScheduleSummary:
    """
    Derive completion, turnaround and waiting time for every process.

    Slices are joined to processes by pid. A process that never ran
    completes at its arrival time. If two processes share a pid, the later
    record replaces the earlier one but keeps its position.
    """
    by_pid: Dict[str, Process] = {}
    for p in processes:
        by_pid[p.pid] = p

    completion: Dict[str, Number] = {}
    first_start: Dict[str, Number] = {}
    for sl in segments:
        if sl.pid not in completion or sl.end_time > completion[sl.pid]:
            completion[sl.pid] = sl.end_time
        if sl.pid not in first_start or sl.start_time < first_start[sl.pid]:
            first_start[sl.pid] = sl.start_time

    stats: List[ProcessStats] = []
    for pid, p in by_pid.items():
        completion_time = completion.get(pid, p.arrival_time)
        start_time = first_start.get(pid, p.arrival_time)
        turnaround_time = completion_time - p.arrival_time
        stats.append(
            ProcessStats(
                pid=pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=start_time,
                completion_time=completion_time,
                turnaround_time=turnaround_time,
                # Negative only if the slices do not belong to these processes
                waiting_time=turnaround_time - p.burst_time,
                response_time=start_time - p.arrival_time,
                priority=p.priority,
            )
        )

    return ScheduleSummary(processes=stats, **summarize_process_metrics(stats))


def compute_system_metrics(timeline: Sequence[ScheduledSlice], summary: ScheduleSummary) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given populated per-process metrics
    and timeline slices.
    """
    if not summary.processes:
        return SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(p.completion_time for p in summary.processes)
    cpu_busy_time = sum(slice_.duration for slice_ in timeline)

    throughput = len(summary.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )


def summarize_process_metrics(processes: Sequence[ProcessStats]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    return {
        "avg_waiting": _mean([p.waiting_time for p in processes]),
        "avg_turnaround": _mean([p.turnaround_time for p in processes]),
        "avg_response": _mean([p.response_time for p in processes]),
    }
