import functools
import threading

import pytest

from openflow.runner import MultiRoutineRunner, OnDemandRunner, SequentialRunner


def _append(store, item):
    store.append(item)


def test_sequential_runner_runs_in_order():
    calls = []
    runner = SequentialRunner()
    for item in ["a", "b", "c"]:
        runner.run(functools.partial(_append, calls, item))
    assert calls == ["a", "b", "c"]


def test_sequential_runner_runs_in_caller_thread():
    seen = []
    SequentialRunner().run(functools.partial(_append, seen, threading.get_ident()))
    assert seen == [threading.get_ident()]


def test_on_demand_runner_uses_another_thread():
    done = threading.Event()
    seen = []
    caller = threading.get_ident()

    def task(store):
        store.append(("ran", threading.get_ident() == caller))
        done.set()

    OnDemandRunner().run(functools.partial(task, seen))
    assert done.wait(5) is True
    assert seen == [("ran", False)]


@pytest.mark.parametrize("num", [0, -1])
def test_multi_routine_runner_rejects_non_positive(num):
    with pytest.raises(ValueError):
        MultiRoutineRunner(num)


def test_multi_routine_runner_runs_all_tasks():
    results = []
    submitted = 25

    with MultiRoutineRunner(3) as runner:
        for i in range(submitted):
            runner.run(functools.partial(_append, results, i))

    assert len(results) == submitted
    assert sorted(results) == list(range(submitted))


def test_multi_routine_runner_bounds_worker_threads():
    threads = []
    workers = 2

    def record(store):
        store.append(threading.get_ident())

    runner = MultiRoutineRunner(workers)
    for _ in range(20):
        runner.run(functools.partial(record, threads))
    runner.close()
    assert len(threads) == 20
    assert 1 <= len(set(threads)) <= workers


def test_multi_routine_runner_rejects_run_after_close():
    runner = MultiRoutineRunner(1)
    runner.run(lambda: None)
    runner.close()
    with pytest.raises(RuntimeError):
        runner.run(lambda: None)