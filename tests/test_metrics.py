import pytest

from process_scheduler.algorithms import ALGORITHMS, run_algorithm, schedule_rr
from process_scheduler.errors import EmptyProcessSetError, InvalidInputError, SchedulerError
from process_scheduler.metrics import build_result, make_row, summarize_results
from process_scheduler.models import Process
from process_scheduler.validation import validate_processes


def _mixed():
    return [
        Process(12, arrival_time=3, burst_time=7, priority=2),
        Process(4, arrival_time=0, burst_time=2, priority=5),
        Process(31, arrival_time=20, burst_time=5, priority=0),
        Process(8, arrival_time=3, burst_time=1, priority=1),
        Process(2, arrival_time=4, burst_time=9, priority=2),
    ]


@pytest.mark.parametrize("name", list(ALGORITHMS))
def test_row_invariants(name):
    procs = _mixed()
    res = run_algorithm(name, procs, quantum=3)

    assert [r.pid for r in res.rows] == [p.pid for p in procs]
    for r in res.rows:
        assert r.waiting_time >= 0
        assert r.turnaround_time == r.waiting_time + r.burst_time
        assert r.turnaround_time == r.completion_time - r.arrival_time
        assert r.completion_time >= r.arrival_time + r.burst_time


@pytest.mark.parametrize("name", list(ALGORITHMS))
def test_timeline_conserves_burst_and_never_overlaps(name):
    procs = _mixed()
    res = run_algorithm(name, procs, quantum=3)

    assert res.cpu_busy_time == sum(p.burst_time for p in procs)
    for prev, cur in zip(res.timeline, res.timeline[1:]):
        assert prev.start_time <= cur.start_time
        assert prev.stop_time <= cur.start_time
    assert all(s.start_time < s.stop_time for s in res.timeline)

    last_stop = res.timeline[-1].stop_time
    assert res.makespan == last_stop
    assert res.throughput * last_stop == pytest.approx(len(procs))


@pytest.mark.parametrize("name", list(ALGORITHMS))
def test_no_segment_before_arrival(name):
    procs = _mixed()
    arrival = {p.pid: p.arrival_time for p in procs}
    res = run_algorithm(name, procs, quantum=3)
    assert all(s.start_time >= arrival[s.pid] for s in res.timeline)


def test_averages():
    res = run_algorithm("fcfs", _mixed())
    n = len(res.rows)
    assert res.average_wait == pytest.approx(sum(r.waiting_time for r in res.rows) / n)
    assert res.average_turnaround == pytest.approx(sum(r.turnaround_time for r in res.rows) / n)


def test_cpu_utilization_with_idle_gap():
    procs = [
        Process(1, arrival_time=0, burst_time=2),
        Process(2, arrival_time=6, burst_time=2),
    ]
    res = run_algorithm("fcfs", procs)
    assert res.makespan == 8
    assert res.cpu_utilization == pytest.approx(0.5)


def test_make_row():
    row = make_row(Process(3, arrival_time=2, burst_time=4, priority=7), completion_time=10)
    assert row.turnaround_time == 8
    assert row.waiting_time == 4
    assert row.priority == 7


def test_build_result_rejects_empty():
    with pytest.raises(EmptyProcessSetError):
        build_result("FCFS", None, [], [], {})


def test_summarize_results():
    results = [run_algorithm(name, _mixed(), quantum=4) for name in ("fcfs", "rr")]
    summary = summarize_results(results)
    assert [s["algorithm"] for s in summary] == ["First-come, first-serve", "Round-robin"]
    assert summary[0]["quantum"] is None
    assert summary[1]["quantum"] == 4
    assert summary[1]["avg_waiting"] == results[1].average_wait


def test_validate_returns_index_by_pid():
    assert validate_processes(_mixed()) == {12: 0, 4: 1, 31: 2, 8: 3, 2: 4}


@pytest.mark.parametrize("name", list(ALGORITHMS))
def test_empty_process_set_rejected(name):
    with pytest.raises(EmptyProcessSetError):
        run_algorithm(name, [], quantum=2)


@pytest.mark.parametrize(
    "procs",
    [
        [Process(1, arrival_time=0, burst_time=0)],
        [Process(1, arrival_time=0, burst_time=-3)],
        [Process(1, arrival_time=-1, burst_time=3)],
        [Process(0, arrival_time=0, burst_time=3)],
        [Process(1, arrival_time=0, burst_time=3), Process(1, arrival_time=2, burst_time=1)],
        [Process(1, arrival_time=0, burst_time=2.5)],
        [Process("1", arrival_time=0, burst_time=2)],
    ],
)
@pytest.mark.parametrize("name", list(ALGORITHMS))
def test_invalid_input_rejected(name, procs):
    with pytest.raises(InvalidInputError):
        run_algorithm(name, procs, quantum=2)


@pytest.mark.parametrize("quantum", [0, -2, 1.5, True, "2"])
def test_rr_rejects_invalid_quantum(quantum):
    with pytest.raises(InvalidInputError):
        schedule_rr([Process(1, arrival_time=0, burst_time=3)], quantum=quantum)


def test_unknown_algorithm():
    with pytest.raises(InvalidInputError, match="Unknown algorithm"):
        run_algorithm("lottery", [Process(1, arrival_time=0, burst_time=1)])


def test_errors_are_value_errors():
    assert issubclass(SchedulerError, ValueError)
    assert issubclass(EmptyProcessSetError, SchedulerError)


def test_result_is_read_only():
    res = run_algorithm("rr", _mixed(), quantum=3)
    assert isinstance(res.rows, tuple)
    assert isinstance(res.timeline, tuple)
    with pytest.raises(AttributeError):
        res.rows.append(res.rows[0])
    with pytest.raises(TypeError):
        res.index_by_pid[99] = 0


def test_row_lookup_uses_validated_index():
    procs = _mixed()
    res = run_algorithm("priority", procs)
    assert dict(res.index_by_pid) == validate_processes(procs)
    for p in procs:
        assert res.row(p.pid).pid == p.pid
    with pytest.raises(KeyError, match="No process with id 99"):
        res.row(99)
