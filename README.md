# autoc

`autoc` is a small incremental build tool. It reads `autoc.ini` from the
current directory and runs a compile command for every regular file in the
source directory whose extension has one. A file is recompiled only when the
file itself or `autoc.ini` is newer than its object file (or when `-f` is
given). After the compile step it links all object files in the binary
directory into the target.

Commands are run through the shell, and the tool is meant for POSIX systems.

## Installation

```
pip install .
```

## Getting started

Run `autoc` in your project directory:

```
autoc
```

When `autoc.ini` cannot be opened, `autoc` writes a default one and exits
with status 0:

```ini
[general]
src = ./src
bin = ./bin
target = 
ldflags =  

[.c]
command = gcc -Wall -c %s -o %o

[.cpp]
command = g++ -Wall -c %s -o %o
```

Fill in `target`, then run `autoc` again.

## Configuration

- `[general]` sets `src` (the source directory), `bin` (where object files
  go), `target` (the linked output) and `ldflags`. `src`, `bin` and `target`
  must be present, otherwise `autoc` reports each missing one and exits with
  status 1. Unknown names in `[general]` are reported as errors but do not
  stop the build.
- A section named after an extension, such as `[.c]`, gives the compile
  `command` for files with that extension. In the command, `%s` is replaced
  by the source file, `%o` by the object file (`<bin>/<file name>.o`), and
  `%%` by a literal `%`. Files with no matching section are skipped.
- `[link]` may give a custom link `command`. In it, `%l` is replaced by the
  ldflags, `%t` by the target and `%o` by `<bin>/*.o`; any other `%`
  sequence is warned about and dropped. Without it the link command is
  `g++ <ldflags> <bin>/*.o -o <target>`.

Pairs may be written `name = value` or `name: value`. Lines starting with
`;` or `#` are comments, and a `;` that follows whitespace starts an inline
comment. An indented line continues the previous name and is read as a new
value for it. A line that cannot be parsed makes `autoc` exit with status 1,
naming the first bad line.

## Flags

```
autoc -h
```

| Flag | Meaning |
|------|---------|
| `-f` | force compile all modules |
| `-r` | run the target after linking |
| `-q` | quiet: only errors are printed |
| `-c` | clear the binary directory (`rm <bin>/*`) before compiling |
| `-C` | clear the binary directory after linking |
| `-t` | run the compile step twice (helps with precompiled headers) |
| `-h` | show usage |

Flags can be combined, as in `autoc -rf`. Unknown letters are ignored;
arguments that do not start with `-` are reported and ignored. The
configuration is read before the flags, so `-h` only shows usage once
`autoc.ini` is valid.

If a compile or link command fails, `autoc` prints a `FATAL:` message and
exits with status 1. The exit status of `rm` and of the target run with
`-r` is not checked.

## Using it from Python

```python
from autoc.cli import build, parse_flags
from autoc.config import load_config

config = load_config("autoc.ini")
if config is not None:
    build(config, parse_flags(["-f"]), "autoc.ini")
```

`load_config` returns `None` after writing a default file in place of a
missing one. Failures raise `autoc.compile.BuildError` or
`autoc.config.ConfigError`. The INI reader is available on its own as
`autoc.ini.parse`, `parse_file`, `parse_string` and `parse_lines`, each
calling a `handler(section, name, value)` for every pair.

## Limitations

Only modification times of the source file and `autoc.ini` are compared with
the object file. Included headers and other dependencies are not tracked, so
a change to a header alone does not trigger a rebuild; use `-f` for that.
Only the one source directory is scanned, without descending into
subdirectories.