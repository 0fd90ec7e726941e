"""Running external commands, pipelines and parallel command lists."""

from __future__ import annotations

import os
import subprocess
import sys
import threading
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import BinaryIO, Optional, Sequence

from minishell.builtins import (
    BuiltinError,
    ShellState,
    handle_builtin,
    is_builtin,
    resolve_alias,
    split_parallel,
)
from minishell.parser import tokenize
from minishell.reaper import ChildReaper

_SEARCH_DIRS = ("/bin/", "/usr/bin/")
_REDIRECT_OPS = frozenset({"<", ">", ">>"})


class CommandError(Exception):
    """A command could not be started; the message is meant for stderr."""


@dataclass
class Redirection:
    """A command's arguments with its input and output redirections removed."""

    argv: list[str] = field(default_factory=list)
    infile: Optional[str] = None
    outfile: Optional[str] = None
    append: bool = False


def file_exists_and_executable(path: str) -> bool:
    """Whether the path exists and may be executed."""
    return os.access(path, os.X_OK)


def resolve_command_path(cmd: str) -> str:
    """Find a bare command name in /bin or /usr/bin, else return it unchanged."""
    if "/" in cmd:
        return cmd
    for directory in _SEARCH_DIRS:
        candidate = directory + cmd
        if file_exists_and_executable(candidate):
            return candidate
    return cmd


def parse_redirections(tokens: Sequence[str]) -> Redirection:
    """Split ``<``, ``>`` and ``>>`` redirections from the command arguments."""
    result = Redirection()
    it = iter(tokens)
    for token in it:
        if token not in _REDIRECT_OPS:
            result.argv.append(token)
            continue
        target = next(it, None)
        if target is None:
            raise CommandError(f"Error: '{token}' sin archivo")
        if token == "<":
            result.infile = target
        else:
            result.outfile = target
            result.append = token == ">>"
    return result


def _error_text(exc: OSError) -> str:
    return exc.strerror or str(exc)


def _create_0644(path: str, flags: int) -> int:
    return os.open(path, flags, 0o644)


def _open_redirect(stack: ExitStack, path: str, mode: str) -> BinaryIO:
    try:
        if mode == "rb":
            return stack.enter_context(open(path, mode))
        return stack.enter_context(open(path, mode, opener=_create_0644))
    except OSError as exc:
        raise CommandError(f"open {path}: {_error_text(exc)}") from exc


def _spawn(argv: list[str], label: Optional[str] = None, **kwargs) -> subprocess.Popen:
    path = resolve_command_path(argv[0])
    explicit = "/" in path
    if label is None:
        label = f"execv {path}" if explicit else f"execvp {argv[0]}"
    sys.stdout.flush()
    try:
        if explicit:
            return subprocess.Popen(argv, executable=path, **kwargs)
        return subprocess.Popen(argv, **kwargs)
    except OSError as exc:
        raise CommandError(f"{label}: {_error_text(exc)}") from exc


def _expand(state: ShellState, tokens: Sequence[str]) -> list[str]:
    with state.lock:
        return resolve_alias(state.aliases, tokens)


def execute_command_simple(
    state: ShellState,
    tokens: Sequence[str],
    background: bool = False,
    reaper: Optional[ChildReaper] = None,
) -> Optional[subprocess.Popen]:
    """Run one command with aliases, built-ins and redirections.

    Returns the started process, or None when nothing was spawned.
    """
    tokens = _expand(state, tokens)
    if not tokens:
        return None
    if is_builtin(tokens[0]):
        handle_builtin(state, tokens)
        return None

    redirection = parse_redirections(tokens)
    if not redirection.argv:
        raise CommandError("Error: falta el comando")

    with ExitStack() as stack:
        stdin = (
            _open_redirect(stack, redirection.infile, "rb")
            if redirection.infile is not None
            else None
        )
        stdout = (
            _open_redirect(stack, redirection.outfile, "ab" if redirection.append else "wb")
            if redirection.outfile is not None
            else None
        )
        process = _spawn(redirection.argv, stdin=stdin, stdout=stdout)

    if background:
        print(f"[background pid {process.pid}]", flush=True)
        if reaper is not None:
            reaper.track(process)
    else:
        process.wait()
    return process


def execute_with_pipe(
    state: ShellState,
    left_tokens: Sequence[str],
    right_tokens: Sequence[str],
    background: bool = False,
    reaper: Optional[ChildReaper] = None,
) -> tuple[subprocess.Popen, subprocess.Popen]:
    """Run two commands with the first one's output feeding the second."""
    left = _expand(state, left_tokens)
    right = _expand(state, right_tokens)
    if not left or not right:
        raise CommandError("Error: pipe sin comando")

    writer = _spawn(left, f"exec left {left[0]}", stdout=subprocess.PIPE)
    try:
        reader = _spawn(right, f"exec right {right[0]}", stdin=writer.stdout)
    except CommandError:
        writer.stdout.close()
        if background and reaper is not None:
            reaper.track(writer)
        elif not background:
            writer.wait()
        raise
    writer.stdout.close()

    if background:
        print(f"[background pids {writer.pid} {reader.pid}]", flush=True)
        if reaper is not None:
            reaper.track(writer)
            reaper.track(reader)
    else:
        writer.wait()
        reader.wait()
    return writer, reader


def run_parallel_from_line(
    state: ShellState, rest: str, reaper: Optional[ChildReaper] = None
) -> None:
    """Run the ``;;``-separated commands concurrently and wait for all of them."""
    commands = split_parallel(rest)
    if not commands:
        raise CommandError("parallel: no hay comandos")

    exits: list[SystemExit] = []

    def worker(cmdline: str) -> None:
        tokens = tokenize(cmdline)
        if not tokens:
            return
        try:
            execute_command_simple(state, tokens, False, reaper)
        except (CommandError, BuiltinError) as exc:
            print(exc, file=sys.stderr, flush=True)
        except SystemExit as exc:
            exits.append(exc)

    threads = [threading.Thread(target=worker, args=(cmd,)) for cmd in commands]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    if exits:
        raise exits[0]