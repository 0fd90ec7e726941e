"""A small interactive shell with built-ins, aliases, history, redirection, a pipe, background and parallel commands."""

__version__ = "0.1.0"

__all__ = ["builtins", "executor", "parser", "reaper", "shell"]