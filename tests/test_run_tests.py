import os, sys
import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
import run_tests

@pytest.mark.parametrize("suite, marker", [("fast", "not performance"), ("edge", "edge_case"), ("performance", "performance")])
def test_marker_suites(suite, marker):
    cmd = run_tests.build_command(suite)
    assert cmd[:3] == [sys.executable, "-m", "pytest"]
    assert cmd[3:] == ["-m", marker]

def test_coverage_and_passthrough_args():
    cmd = run_tests.build_command("all", coverage=True, extra=["-x"])
    assert "--cov=regression" in cmd
    assert "--cov-report=term-missing" in cmd
    assert cmd[-1] == "-x"

def test_main_returns_pytest_exit_code(monkeypatch):
    seen = {}

    class _Done:
        returncode = 3

    def fake_run(cmd):
        seen["cmd"] = cmd
        return _Done()

    monkeypatch.setattr(run_tests.subprocess, "run", fake_run)
    assert run_tests.main(["edge"]) == 3
    assert seen["cmd"][-2:] == ["-m", "edge_case"]
