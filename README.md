# reborners

`reborners` is a Python library holding the building blocks of a small
POSIX-style shell: a tokenizer, command-tree types, argument and quote
handling, an environment table, the usual builtins, and an executor that runs
pipelines with redirections. It also has a few text helpers and a
printf-style formatter.

Python 3.10 or later is needed. There are no runtime dependencies. Running
pipelines uses `os.fork`, so the executor needs a POSIX system.

## Modules

- `reborners.tokens`: `tokenize(line)` splits a line into `Token`s of a
  `TokenType`: words (`ALPHANUMERIC`, quotes kept inside the word) and the
  operators `<`, `>`, `<<`, `>>` and `|`. A `&` is also read as `PIPE`. An
  unmatched quote raises `UnclosedQuoteError`, whose `status` is 258.
  `is_quote`, `is_separator` and `skip_quotes` are the helpers it uses.
- `reborners.nodes`: the tree types. A `Node` is either `NodeType.PIPE`
  with `left` and `right` children, or `NodeType.CMD` with its argument text
  in `args` and a list of `Redirection`s (`IoType.IN`, `OUT`, `HEREDOC`,
  `APPEND`). `io_type_for` maps a redirection token type to its `IoType`,
  `syntax_error_message(token)` builds the "syntax error near unexpected
  token" message, `join_with` joins two strings with a separator, and
  `format_tree` renders a tree as indented text.
- `reborners.expansion`: `solve_args(text)` splits a command's argument text
  on spaces and strips the quotes, so `'a  b'` stays one argument. `$` is
  taken literally. `expand_quotes`, `split_args`, `remove_quotes` and
  `is_valid_char` are available on their own.
- `reborners.environment`: `Environment` keeps variables (a variable may
  have no value) and lists them sorted by name. `from_strings`, `get`,
  `update`, `remove`, `format_env`, `format_export` and `to_environ` cover
  what the builtins and the executor need. `split_entry` splits `KEY=VALUE`.
  `ShellState` carries the environment, the last exit status and whether the
  shell is running a child.
- `reborners.builtins`: `echo`, `cd`, `pwd`, `export`, `unset`,
  `env_command` and `exit_command`. `is_builtin(name)` says whether a name is
  one of them and `run_builtin(args, state, stdout, stderr)` runs it. Leaving
  the shell raises `ShellExit` with the status.
- `reborners.executor`: `prepare_tree(node, read_line)` splits every
  command's arguments and reads its here-document, `run_tree(node, state)`
  runs pipes and commands, `run_command` runs one command with its
  redirections, `run_external` starts a program directly or through `PATH`
  (status 127 when not found), and `install_signals` sets the interrupt
  handling. `read_heredoc` reads lines up to a delimiter.
- `reborners.textutils`: ASCII character classes (`is_alpha`, `is_digit`,
  `is_space`, ...), `to_upper`/`to_lower`, and string helpers such as
  `strchr`, `strcmp`, `strncmp`, `strnstr`, `substr`, `strtrim` and `split`.
- `reborners.numbers`: `atoi`, `itoa`, `put_number` and `put_line`.
- `reborners.linereader`: `LineReader(stream, buffer_size)` reads a text or
  binary stream one line at a time, through `read_line()` or iteration.
- `reborners.printf` and `reborners.fmtflags`: `sprintf` and `printf` for
  `%c %s %d %i %u %x %X %p %%` with the `-0.*# +` flags, width and precision;
  `Flags` and the number renderers live in `fmtflags`.

## Examples

```python
from reborners.tokens import tokenize

for token in tokenize("cat < notes.txt | grep 'two words' >> out.txt"):
    print(token.type, token.value)
```

```python
from reborners.expansion import solve_args

solve_args("echo 'a  b' c")   # ['echo', 'a  b', 'c']
```

```python
from reborners.environment import Environment

env = Environment.from_strings(["HOME=/home/user", "PATH=/usr/bin:/bin"])
env.update("EDITOR", "vi", True)
print(env.get("HOME"))
print(env.format_export())
```

Run `echo hello | tr a-z A-Z > out.txt` from a tree built by hand:

```python
import os

from reborners.environment import Environment, ShellState
from reborners.executor import prepare_tree, run_tree
from reborners.nodes import IoType, Node, NodeType, Redirection

tree = Node(
    NodeType.PIPE,
    left=Node(NodeType.CMD, args="echo hello"),
    right=Node(
        NodeType.CMD,
        args="tr a-z A-Z",
        redirections=[Redirection(IoType.OUT, "out.txt")],
    ),
)
state = ShellState(env=Environment.from_strings(f"{k}={v}" for k, v in os.environ.items()))
prepare_tree(tree)
run_tree(tree, state)
print(state.exit_status)
```

```python
from reborners.printf import sprintf

sprintf("%5d|%-4s|%x", 42, "ab", 255)   # '   42|ab  |ff'
```

## Behaviour worth knowing

- `exit_command` with a non-numeric argument raises `ShellExit(255)`. With
  more than one argument it writes `too many arguments`, sets the status to 1
  and does not raise.
- `export` and `unset` report invalid identifiers, carry on with the
  remaining arguments and still return 0.
- `echo` accepts any number of `-n`, `-nn`, ... options before its first
  argument.
- Only a here-document that is a command's first redirection is read by
  `prepare_tree`.

## What the package does not do

- There is no parser that turns the token list into a `Node` tree; trees are
  built by hand as above.
- There is no interactive prompt loop and no command to start: the package is
  a library, and reading lines, parsing them and calling `run_tree` is left to
  the caller.
- Variables are not expanded: `$NAME` stays as written.

## Running the tests

Install the `test` extra, then run `pytest` from the project root.