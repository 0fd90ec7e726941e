import io
import signal
import subprocess
import sys

from minishell.reaper import ChildReaper, sigint_handler


def _spawn(code):
    return subprocess.Popen([sys.executable, "-c", code])


def test_reap_reports_normal_exit():
    out = io.StringIO()
    reaper = ChildReaper(out)
    proc = _spawn("raise SystemExit(3)")
    reaper.track(proc)
    proc.wait()
    messages = reaper.reap()
    assert messages == [f"[reaped pid {proc.pid} exit 3]"]
    assert out.getvalue() == f"[reaped pid {proc.pid} exit 3]\n"


def test_reap_reports_signal():
    reaper = ChildReaper(io.StringIO())
    proc = _spawn("import os, signal; os.kill(os.getpid(), signal.SIGKILL)")
    reaper.track(proc)
    proc.wait()
    assert reaper.reap() == [f"[reaped pid {proc.pid} signal {int(signal.SIGKILL)}]"]


def test_running_child_is_kept_until_finished():
    reaper = ChildReaper(io.StringIO())
    proc = _spawn("import time; time.sleep(30)")
    reaper.track(proc)
    try:
        assert reaper.reap() == []
    finally:
        proc.kill()
        proc.wait()
    assert reaper.reap() == [f"[reaped pid {proc.pid} signal {int(signal.SIGKILL)}]"]


def test_child_is_reported_once():
    reaper = ChildReaper(io.StringIO())
    proc = _spawn("pass")
    reaper.track(proc)
    proc.wait()
    assert reaper.reap() == [f"[reaped pid {proc.pid} exit 0]"]
    assert reaper.reap() == []


def test_notify_sets_pending_and_reap_clears_it():
    reaper = ChildReaper(io.StringIO())
    assert reaper.pending is False
    reaper.notify(signal.SIGCHLD, None)
    assert reaper.pending is True
    reaper.reap()
    assert reaper.pending is False


def test_sigint_handler_writes_newline(capfd):
    sigint_handler(signal.SIGINT, None)
    captured = capfd.readouterr()
    assert captured.out == "\n"