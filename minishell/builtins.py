"""Commands run inside the shell process itself."""

from __future__ import annotations

import os
import sys
import threading
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence, TextIO

from minishell.parser import tokenize, trim

BUILTINS = frozenset(
    {"salir", "cd", "pwd", "help", "history", "alias", "parallel", "meminfo"}
)

PARALLEL_SEPARATOR = ";;"
MEMINFO_PATH = "/proc/self/status"
_MEMINFO_KEYS = ("VmSize:", "VmRSS:", "VmData:")

_HELP_TEXT = (
    "Mini-shell - comandos soportados (built-ins):\n"
    "  salir            : salir de la shell\n"
    "  cd <dir>         : cambiar directorio\n"
    "  pwd              : mostrar directorio actual\n"
    "  history          : lista comandos ejecutados en la sesión\n"
    "  alias name='cmd' : crear alias simple (sin persistencia)\n"
    "  parallel cmd1 ;; cmd2 ;; ... : ejecutar comandos en paralelo (separador ';;')\n"
    "  meminfo          : muestra uso aproximado de memoria (VmSize, VmRSS, VmData)\n"
    "  help             : esta ayuda\n"
)


class BuiltinError(Exception):
    """A built-in command failed; the message is meant for stderr."""


@dataclass
class ShellState:
    """Session history and aliases, shared between threads."""

    history: list[str] = field(default_factory=list)
    aliases: dict[str, str] = field(default_factory=dict)
    lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def add_history(self, line: str) -> None:
        with self.lock:
            self.history.append(line)


def is_builtin(cmd: str) -> bool:
    """Whether the command name is handled by the shell itself."""
    return cmd in BUILTINS


def print_help(out: Optional[TextIO] = None) -> None:
    """Write the list of built-in commands."""
    (out if out is not None else sys.stdout).write(_HELP_TEXT)


def parse_alias_definition(tokens: Sequence[str]) -> tuple[str, str]:
    """Parse the arguments of ``alias`` (``name='cmd args'``) into name and value."""
    rest = " ".join(tokens)
    name_part, eq, value = rest.partition("=")
    if not eq:
        raise BuiltinError("alias: formato inválido")
    name = trim(name_part)
    if value.startswith("'"):
        value = value[1:]
    if value.endswith("'"):
        value = value[:-1]
    if not name or not value:
        raise BuiltinError("alias: formato inválido")
    return name, value


def resolve_alias(aliases: Mapping[str, str], tokens: Sequence[str]) -> list[str]:
    """Replace the first token by its alias expansion, keeping the arguments."""
    if not tokens:
        return []
    expansion = aliases.get(tokens[0])
    if expansion is None:
        return list(tokens)
    return tokenize(expansion) + list(tokens[1:])


def read_meminfo(path: str = MEMINFO_PATH) -> list[str]:
    """Return the VmSize, VmRSS and VmData lines of a process status file."""
    with open(path, encoding="utf-8", errors="replace") as status:
        return [
            line.rstrip("\n")
            for line in status
            if line.startswith(_MEMINFO_KEYS)
        ]


def split_parallel(rest: str) -> list[str]:
    """Split the text after ``parallel`` into non-empty commands at ``;;``."""
    return [part for part in map(trim, rest.split(PARALLEL_SEPARATOR)) if part]


def handle_builtin(
    state: ShellState, tokens: Sequence[str], out: Optional[TextIO] = None
) -> None:
    """Run a built-in command; raises BuiltinError on failure, SystemExit on salir."""
    if not tokens:
        return
    out = out if out is not None else sys.stdout
    cmd = tokens[0]
    if cmd == "salir":
        raise SystemExit(0)
    if cmd == "pwd":
        try:
            out.write(os.getcwd() + "\n")
        except OSError as exc:
            raise BuiltinError(f"pwd: {exc.strerror}") from exc
    elif cmd == "cd":
        directory = tokens[1] if len(tokens) >= 2 else os.environ.get("HOME", "/")
        try:
            os.chdir(directory)
        except OSError as exc:
            raise BuiltinError(f"cd: {directory}: {exc.strerror}") from exc
    elif cmd == "help":
        print_help(out)
    elif cmd == "history":
        with state.lock:
            for number, line in enumerate(state.history, start=1):
                out.write(f"{number:>4}  {line}\n")
    elif cmd == "alias":
        if len(tokens) == 1:
            with state.lock:
                for name, value in sorted(state.aliases.items()):
                    out.write(f"{name}='{value}'\n")
        else:
            name, value = parse_alias_definition(tokens[1:])
            with state.lock:
                state.aliases[name] = value
    elif cmd == "meminfo":
        try:
            lines = read_meminfo()
        except OSError as exc:
            raise BuiltinError(f"meminfo: {MEMINFO_PATH}: {exc.strerror}") from exc
        for line in lines:
            out.write(line + "\n")
    elif cmd == "parallel":
        raise BuiltinError("Uso: parallel cmd1 ;; cmd2 ;; cmd3 ...")