import pytest

from coopkernel.thread import IDLE_REASON, Kernel, KernelHalted, ThreadStatus
from coopkernel.threadtest import LOOPS, simple_thread, thread_test
from coopkernel.utility import Debug


def _looped_lines(text):
    return [line for line in text.splitlines() if line.startswith("*** thread")]


def test_thread_test_alternates_between_threads(capsys):
    with Kernel() as kernel:
        thread_test(kernel)
    lines = _looped_lines(capsys.readouterr().out)
    assert len(lines) == 2 * LOOPS
    assert lines[0] == "*** thread 0 looped 0 times"
    ids = [line.split()[2] for line in lines]
    assert ids[0::2] == ["0"] * LOOPS
    assert ids[1::2] == ["1"] * LOOPS


def test_each_thread_counts_in_order(capsys):
    with Kernel() as kernel:
        thread_test(kernel)
    lines = _looped_lines(capsys.readouterr().out)
    for which in ("0", "1"):
        counts = [int(line.split()[4]) for line in lines if line.split()[2] == which]
        assert counts == list(range(LOOPS))


def test_simple_thread_alone_never_switches(capsys):
    with Kernel() as kernel:
        simple_thread(kernel, 3)
        assert kernel.current_thread is kernel.main_thread
    lines = _looped_lines(capsys.readouterr().out)
    assert len(lines) == LOOPS
    assert all(line.split()[2] == "3" for line in lines)


def test_forked_thread_left_ready_then_kernel_idles(capsys):
    with Kernel() as kernel:
        forked = thread_test(kernel)
        assert forked.status is ThreadStatus.READY
        assert "forked thread" in kernel.scheduler.format()
        with pytest.raises(KernelHalted):
            kernel.main_thread.finish()
        assert kernel.halt_reason == IDLE_REASON
        assert kernel.error is None


def test_debug_flag_logs_entry(capsys):
    with Kernel(debug=Debug("t")) as kernel:
        thread_test(kernel)
    out = capsys.readouterr().out
    assert "Entering SimpleTest" in out
    assert 'Forking thread "forked thread"' in out