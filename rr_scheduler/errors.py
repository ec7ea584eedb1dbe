from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for errors raised by the scheduler package."""


class InvalidParameter(SchedulerError):
    """A simulation parameter (such as the quantum) is out of range."""


class DuplicateProcessId(SchedulerError):
    def __init__(self, pid: str) -> None:
        super().__init__(f"Duplicate process id: {pid!r}")
        self.pid = pid


class WorkloadError(SchedulerError):
    """A workload file could not be read into process rows."""
