from __future__ import annotations

import csv
import json
import logging
import math
import uuid
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Set

from .errors import DuplicateProcessId, WorkloadError
from .models import Number, Process

logger = logging.getLogger(__name__)

# Starter rows of the interactive tool: (pid, arrival, burst, priority)
DEFAULT_WORKLOAD = [
    {"pid": "P1", "arrival_time": 0, "burst_time": 1, "priority": 3},
    {"pid": "P2", "arrival_time": 1, "burst_time": 4, "priority": 1},
    {"pid": "P3", "arrival_time": 2, "burst_time": 6, "priority": 4},
]


def _parse_number(value) -> Optional[Number]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number


def coerce_number(value, default: Number = 0) -> Number:
    """
    Read a numeric cell leniently: blank or non-numeric input gives ``default``.
    """
    number = _parse_number(value)
    return default if number is None else number


def _generate_pid() -> str:
    return f"P{uuid.uuid4().hex[:3]}"


def _first_present(mapping: Mapping, *keys):
    for key in keys:
        if key in mapping:
            return mapping[key]
    return None


def normalize_processes(rows: Iterable[Mapping]) -> List[Process]:
    """
    Build Process records from raw rows.

    Rows with a non-positive burst are skipped. A blank pid is replaced by a
    generated one; explicit pids must be unique.
    """
    processes: List[Process] = []
    seen: Set[str] = set()

    for row in rows:
        if not isinstance(row, Mapping):
            raise WorkloadError(f"Invalid process entry: {row!r}")

        raw_pid = _first_present(row, "pid", "id")
        pid = "" if raw_pid is None else str(raw_pid).strip()
        arrival_time = coerce_number(_first_present(row, "arrival_time", "arrival"))
        burst_time = coerce_number(_first_present(row, "burst_time", "burst"))
        priority = _parse_number(row.get("priority"))

        if burst_time <= 0:
            logger.debug("Skipping %r: burst time %s is not positive", pid or row, burst_time)
            continue

        if pid:
            if pid in seen:
                raise DuplicateProcessId(pid)
            seen.add(pid)
        else:
            pid = _generate_pid()
            logger.debug("Assigned generated pid %s", pid)

        processes.append(
            Process(
                pid=pid,
                arrival_time=arrival_time,
                burst_time=burst_time,
                priority=priority,
            )
        )

    return processes


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        rows = _load_json(path)
    elif suffix == ".csv":
        rows = _load_csv(path)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    processes = normalize_processes(rows)
    logger.info("Loaded %d process(es) from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Mapping]:
    with path.open("r", encoding="utf-8-sig") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"Invalid JSON workload {path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"Cannot read workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return raw


def _load_csv(path: Path) -> List[Mapping]:
    # utf-8-sig drops the BOM that spreadsheet exports put before the header
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        try:
            return list(csv.DictReader(f))
        except (UnicodeDecodeError, csv.Error) as exc:
            raise WorkloadError(f"Cannot read workload {path}: {exc}") from exc
