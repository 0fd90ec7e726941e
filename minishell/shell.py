"""The interactive read-eval loop of the shell."""

from __future__ import annotations

import argparse
import signal
import sys
import threading
from typing import Optional, Sequence

from minishell.builtins import BuiltinError, ShellState, handle_builtin, is_builtin
from minishell.executor import (
    CommandError,
    execute_command_simple,
    execute_with_pipe,
    run_parallel_from_line,
)
from minishell.parser import tokenize, trim
from minishell.reaper import ChildReaper, sigint_handler

PROMPT = "mini-shell$ "
_PARALLEL_PREFIX = "parallel "


def split_background(line: str) -> tuple[str, bool]:
    """Strip a trailing ``&`` and report whether it was present."""
    if line.endswith("&"):
        return trim(line[:-1]), True
    return line, False


def split_pipe(tokens: Sequence[str]) -> Optional[tuple[list[str], list[str]]]:
    """Split tokens at the first ``|``, or return None when there is none."""
    try:
        index = list(tokens).index("|")
    except ValueError:
        return None
    return list(tokens[:index]), list(tokens[index + 1:])


def process_line(
    state: ShellState, line: str, reaper: Optional[ChildReaper] = None
) -> None:
    """Record and run one input line."""
    line = trim(line)
    if not line:
        return
    state.add_history(line)

    if line.startswith(_PARALLEL_PREFIX):
        run_parallel_from_line(state, trim(line[len(_PARALLEL_PREFIX):]), reaper)
        return

    line, background = split_background(line)
    tokens = tokenize(line)
    if not tokens:
        return
    if is_builtin(tokens[0]):
        handle_builtin(state, tokens)
        return

    halves = split_pipe(tokens)
    if halves is not None:
        execute_with_pipe(state, halves[0], halves[1], background, reaper)
    else:
        execute_command_simple(state, tokens, background, reaper)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the interactive shell until end of input."""
    parser = argparse.ArgumentParser(
        prog="minishell", description="A small interactive command shell."
    )
    parser.parse_args(argv)

    state = ShellState()
    reaper = ChildReaper()
    previous: dict[int, object] = {}
    if threading.current_thread() is threading.main_thread():
        sigchld = getattr(signal, "SIGCHLD", None)
        if sigchld is not None:
            previous[sigchld] = signal.signal(sigchld, reaper.notify)
        previous[signal.SIGINT] = signal.signal(signal.SIGINT, sigint_handler)

    try:
        while True:
            if reaper.pending:
                reaper.reap()
            sys.stdout.write(PROMPT)
            sys.stdout.flush()
            line = sys.stdin.readline()
            if not line:
                break
            try:
                process_line(state, line, reaper)
            except (CommandError, BuiltinError) as exc:
                sys.stdout.flush()
                print(exc, file=sys.stderr, flush=True)
        sys.stdout.write("\nSaliendo de mini-shell...\n")
        sys.stdout.flush()
        return 0
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


if __name__ == "__main__":
    sys.exit(main())