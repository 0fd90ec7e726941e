"""Tracking and collecting background child processes."""

from __future__ import annotations

import os
import subprocess
import sys
import threading
from typing import Optional, TextIO


class ChildReaper:
    """Collects finished background processes without blocking."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self._out = out
        self._lock = threading.Lock()
        self._children: list[subprocess.Popen] = []
        self.pending = False

    def track(self, process: subprocess.Popen) -> None:
        """Remember a background process so it can be reaped later."""
        with self._lock:
            self._children.append(process)

    def notify(self, signum, frame) -> None:
        """Signal handler for SIGCHLD: mark that children may have finished."""
        self.pending = True

    def reap(self) -> list[str]:
        """Collect every finished tracked child, report and return the messages."""
        messages: list[str] = []
        with self._lock:
            still_running = []
            for process in self._children:
                code = process.poll()
                if code is None:
                    still_running.append(process)
                elif code >= 0:
                    messages.append(f"[reaped pid {process.pid} exit {code}]")
                else:
                    messages.append(f"[reaped pid {process.pid} signal {-code}]")
            self._children = still_running
        out = self._out if self._out is not None else sys.stdout
        for message in messages:
            out.write(message + "\n")
        out.flush()
        self.pending = False
        return messages


def sigint_handler(signum, frame) -> None:
    """Handle Ctrl+C in the shell by emitting a newline instead of exiting."""
    os.write(sys.stdout.fileno() if hasattr(sys.stdout, "fileno") else 1, b"\n")