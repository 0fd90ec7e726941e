# minishell

A small interactive shell for POSIX systems. It reads one line at a time at
the prompt `mini-shell$ `, keeps a history for the session and runs external
programs, with redirections, a single pipe, background execution, or several
commands run at the same time.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
minishell
```

Press Ctrl+D (end of input) to leave; the shell then prints
`Saliendo de mini-shell...`. Ctrl+C at the prompt prints a new line and does
not stop the shell; programs started by the shell are interrupted as usual.

### Built-in commands

| Command                         | Effect                                                      |
|---------------------------------|-------------------------------------------------------------|
| `salir`                         | leave the shell with exit status 0                          |
| `cd <dir>`                      | change directory (`$HOME`, or `/`, if no directory given)   |
| `pwd`                           | print the current directory                                 |
| `history`                       | list the lines entered in this session, numbered from 1     |
| `alias name='cmd'`              | define an alias; `alias` alone lists them sorted by name    |
| `parallel cmd1 ;; cmd2 ;; ...`  | run commands at the same time and wait for all of them      |
| `meminfo`                       | show the VmSize, VmRSS and VmData lines of `/proc/self/status` |
| `help`                          | show the help text                                          |

The help text and the error messages are in Spanish.

### External commands

```
mini-shell$ ls -l > listing.txt
mini-shell$ sort < listing.txt >> sorted.txt
mini-shell$ ls | wc -l
mini-shell$ sleep 5 &
[background pid 12345]
mini-shell$ parallel sleep 1 ;; echo hola ;; ll
```

- `<`, `>` and `>>` redirect input, output (truncating) and appended output
  of a single command. Files are created with mode 0644.
- One `|` joins two commands; the line is split at the first `|`.
  Redirections are not interpreted on either side of a pipe.
- A trailing `&` runs the command or pipe in the background. When a
  background process has finished, the shell reports it before a later
  prompt, for example `[reaped pid 12345 exit 0]` or
  `[reaped pid 12345 signal 9]`.
- Aliases are expanded on the first word of a command, also on each side of a
  pipe and in each command of `parallel`.
- Commands without a `/` are looked up in `/bin`, then `/usr/bin`, then `PATH`.

Errors (a missing file after a redirection, a command that cannot be
started, a bad `alias` definition, a failed `cd`) are printed on standard
error and the shell goes on.

### What it does not do

Words are split on whitespace only: there is no quoting, escaping, globbing
or variable expansion. There is no job control (`fg`, `bg`, `jobs`), no
pipeline of more than two commands, no `;` or `&&` sequencing, no scripts or
command-line options to run a file, no line editing, and history and aliases
are not saved between sessions. `meminfo` needs a `/proc` filesystem.

### Using it from Python

The modules can also be used directly:

```python
from minishell.parser import tokenize, trim
from minishell.builtins import ShellState, resolve_alias, split_parallel
from minishell.executor import parse_redirections
from minishell.shell import process_line, split_background

tokenize("  ls   -l  ")             # ['ls', '-l']
split_parallel("echo a ;; echo b")  # ['echo a', 'echo b']
split_background("sleep 5 &")       # ('sleep 5', True)

state = ShellState()
state.aliases["ll"] = "ls -l"
resolve_alias(state.aliases, ["ll", "/tmp"])   # ['ls', '-l', '/tmp']

r = parse_redirections(["sort", "<", "in.txt", ">>", "out.txt"])
# Redirection(argv=['sort'], infile='in.txt', outfile='out.txt', append=True)

process_line(state, "echo hola", None)
```

- `minishell.parser`: `trim`, `tokenize`.
- `minishell.builtins`: `ShellState` (history, aliases and a lock),
  `is_builtin`, `handle_builtin`, `parse_alias_definition`, `resolve_alias`,
  `read_meminfo`, `split_parallel`, `print_help`; failures raise
  `BuiltinError`, and `salir` raises `SystemExit(0)`.
- `minishell.executor`: `execute_command_simple`, `execute_with_pipe`,
  `run_parallel_from_line`, `parse_redirections`, `resolve_command_path`,
  `file_exists_and_executable`; failures raise `CommandError`.
- `minishell.reaper`: `ChildReaper` tracks background processes and
  `reap()` reports and returns the messages for those that have finished.
- `minishell.shell`: `process_line` runs one line the way the interactive
  loop does; `main` is the interactive loop itself.