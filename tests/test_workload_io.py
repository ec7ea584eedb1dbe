from pathlib import Path

import pytest

from rr_scheduler.errors import DuplicateProcessId, WorkloadError
from rr_scheduler.models import Process
from rr_scheduler.workload_io import DEFAULT_WORKLOAD, coerce_number, load_workload, normalize_processes


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].priority is None
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\nC,2,0,\n")
    procs = load_workload(p)
    assert [proc.pid for proc in procs] == ["A", "B"]
    assert procs[0].burst_time == 3
    assert procs[1].priority is None


def test_load_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("A 0 3")
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_load_json_must_be_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid": "A"}')
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_load_json_syntax_error(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text("[{")
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_blank_and_bad_numbers_become_zero():
    procs = normalize_processes([
        {"pid": "A", "arrival_time": "", "burst_time": "4"},
        {"pid": "B", "arrival_time": "soon", "burst_time": 2},
    ])
    assert [(p.arrival_time, p.burst_time) for p in procs] == [(0, 4), (0, 2)]


def test_non_positive_burst_rows_are_dropped():
    procs = normalize_processes([
        {"pid": "A", "arrival_time": 0, "burst_time": 0},
        {"pid": "B", "arrival_time": 0, "burst_time": -2},
        {"pid": "C", "arrival_time": 0, "burst_time": ""},
        {"pid": "D", "arrival_time": 0, "burst_time": "x"},
        {"pid": "E", "arrival_time": 0, "burst_time": 1},
    ])
    assert [p.pid for p in procs] == ["E"]


def test_blank_pid_gets_generated():
    procs = normalize_processes([
        {"pid": "  ", "arrival_time": 0, "burst_time": 1},
        {"arrival_time": 0, "burst_time": 1},
    ])
    for p in procs:
        assert p.pid.startswith("P")
        assert len(p.pid) == 4


def test_short_keys_are_accepted():
    procs = normalize_processes([{"id": "X", "arrival": "2", "burst": "3.5", "priority": "7"}])
    assert procs == [Process("X", arrival_time=2, burst_time=3.5, priority=7)]


def test_priority_is_optional():
    procs = normalize_processes([
        {"pid": "A", "arrival_time": 0, "burst_time": 1, "priority": ""},
        {"pid": "B", "arrival_time": 0, "burst_time": 1, "priority": "high"},
    ])
    assert [p.priority for p in procs] == [None, None]


def test_duplicate_pid_rejected():
    with pytest.raises(DuplicateProcessId) as excinfo:
        normalize_processes([
            {"pid": "A", "arrival_time": 0, "burst_time": 1},
            {"pid": "A", "arrival_time": 2, "burst_time": 1},
        ])
    assert excinfo.value.pid == "A"


def test_duplicate_of_dropped_row_is_allowed():
    procs = normalize_processes([
        {"pid": "A", "arrival_time": 0, "burst_time": 0},
        {"pid": "A", "arrival_time": 2, "burst_time": 1},
    ])
    assert procs == [Process("A", arrival_time=2, burst_time=1)]


def test_non_mapping_row_rejected():
    with pytest.raises(WorkloadError):
        normalize_processes([["A", 0, 1]])


@pytest.mark.parametrize(
    "raw, expected",
    [("3", 3), (" 2.5 ", 2.5), ("", 0), (None, 0), ("nan", 0), ("inf", 0), (True, 0), (4, 4)],
)
def test_coerce_number(raw, expected):
    value = coerce_number(raw)
    assert value == expected
    assert type(value) is type(expected)


def test_default_workload():
    procs = normalize_processes(DEFAULT_WORKLOAD)
    assert [(p.pid, p.arrival_time, p.burst_time) for p in procs] == [
        ("P1", 0, 1),
        ("P2", 1, 4),
        ("P3", 2, 6),
    ]


def test_load_csv_with_bom(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_bytes(b"\xef\xbb\xbfpid,arrival_time,burst_time\nA,0,3\n")
    procs = load_workload(p)
    assert [proc.pid for proc in procs] == ["A"]


def test_load_json_invalid_utf8(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_bytes(b'[{"pid": "\xff", "arrival_time": 0, "burst_time": 1}]')
    with pytest.raises(WorkloadError):
        load_workload(p)
