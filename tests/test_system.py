import pytest

from coopkernel.system import Options, initialize, main, parse_args
from coopkernel.thread import ThreadStatus


def test_parse_args_defaults():
    assert parse_args([]) == Options()
    assert parse_args([]).debug_flags == ""
    assert parse_args([]).random_yield is False


def test_debug_flag_without_value_enables_everything():
    assert parse_args(["-d"]).debug_flags == "+"


def test_debug_flag_with_value():
    assert parse_args(["-d", "ts"]).debug_flags == "ts"


def test_later_debug_flag_wins():
    assert parse_args(["-d", "a", "-d", "b"]).debug_flags == "b"


def test_random_seed():
    options = parse_args(["-rs", "7"])
    assert options.random_yield is True
    assert options.random_seed == 7


def test_random_seed_reads_leading_digits():
    assert parse_args(["-rs", "12xyz"]).random_seed == 12
    assert parse_args(["-rs", "abc"]).random_seed == 0


def test_random_seed_missing_value():
    with pytest.raises(ValueError):
        parse_args(["-rs"])


def test_unknown_arguments_are_ignored():
    assert parse_args(["-z", "-x", "prog"]) == Options()


def test_initialize_builds_kernel_with_debug_flags():
    options, kernel = initialize(["-d", "t"])
    with kernel:
        assert options.debug_flags == "t"
        assert kernel.debug.is_enabled("t")
        assert not kernel.debug.is_enabled("s")
        assert kernel.current_thread.name == "main"
        assert kernel.current_thread.status is ThreadStatus.RUNNING


def test_main_runs_thread_test_and_cleans_up(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    looped = [line for line in out.splitlines() if line.startswith("*** thread")]
    assert len(looped) == 10
    assert "Cleaning up..." in out
    assert out.index("Cleaning up...") > out.index(looped[-1])


def test_main_with_debug_output(capsys):
    assert main(["-d", "t"]) == 0
    out = capsys.readouterr().out
    assert 'Forking thread "forked thread"' in out
    assert 'Finishing thread "main"' in out


def test_main_reports_bad_arguments(capsys):
    assert main(["-rs"]) == 2
    captured = capsys.readouterr()
    assert "-rs" in captured.err
    assert "looped" not in captured.out