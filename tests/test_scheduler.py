import io

import pytest

from coopkernel.scheduler import Scheduler
from coopkernel.thread import ThreadStatus
from coopkernel.utility import Debug


class FakeThread:
    def __init__(self, name):
        self.name = name
        self.status = None


def test_ready_list_is_fifo():
    sched = Scheduler()
    a, b, c = FakeThread("a"), FakeThread("b"), FakeThread("c")
    for t in (a, b, c):
        sched.ready_to_run(t)
    assert len(sched) == 3
    assert [sched.find_next_to_run() for _ in range(3)] == [a, b, c]
    assert sched.find_next_to_run() is None


def test_ready_to_run_sets_ready_status():
    sched = Scheduler()
    t = FakeThread("worker")
    sched.ready_to_run(t)
    assert t.status == ThreadStatus.READY


def test_run_switches_current_thread():
    calls = []
    sched = Scheduler(switch=lambda old, new: calls.append((old.name, new.name)))
    main, other = FakeThread("main"), FakeThread("other")
    sched.current_thread = main
    sched.run(other)
    assert sched.current_thread is other
    assert other.status == ThreadStatus.RUNNING
    assert calls == [("main", "other")]


def test_run_without_current_thread_raises():
    sched = Scheduler()
    with pytest.raises(RuntimeError):
        sched.run(FakeThread("x"))


def test_run_discards_finished_thread():
    sched = Scheduler()
    main, other = FakeThread("main"), FakeThread("other")
    sched.current_thread = main
    sched.thread_to_be_destroyed = main
    sched.run(other)
    assert sched.thread_to_be_destroyed is None


def test_format_lists_ready_threads():
    sched = Scheduler()
    sched.ready_to_run(FakeThread("one"))
    sched.ready_to_run(FakeThread("two"))
    assert sched.format() == "Ready list contents:\none, two, "


def test_format_empty():
    assert Scheduler().format() == "Ready list contents:\n"


def test_debug_messages_when_enabled():
    out = io.StringIO()
    sched = Scheduler(debug=Debug("t", out))
    main, other = FakeThread("main"), FakeThread("other")
    sched.current_thread = main
    sched.ready_to_run(other)
    sched.run(sched.find_next_to_run())
    text = out.getvalue()
    assert "Putting thread other on ready list.\n" in text
    assert 'Switching from thread "main" to thread "other"\n' in text


def test_no_debug_output_by_default():
    out = io.StringIO()
    sched = Scheduler(debug=Debug(None, out))
    sched.ready_to_run(FakeThread("quiet"))
    assert out.getvalue() == ""