"""Command line entry point: compile changed sources, link, and optionally run."""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .compile import (
    BuildError,
    binary_path,
    compile_source,
    file_mod_time,
    link_to_target,
    list_directory,
)
from .config import CONFIG_FILE, Config, ConfigError, load_config
from .log import LogLevel, flog, only_errors

PROGRAM = "autoc"

HELP_LINES = (
    "-f: force compile all modules",
    "-r: run target after compiling",
    "-q: quiet (no stdout output (unless theres an error))",
    "-c: clear binary path before compiling",
    "-C: clear binary path after compiling",
    "-t: compile each file twice, temporary measure to aid with precompiled headers",
    "-h: show this info",
    "Flags can also be combined such as -rf",
)


@dataclass
class Flags:
    """Switches given on the command line.

    ``clear_bin`` is -1 to clear the binary directory before compiling,
    1 to clear it after linking and 0 to leave it alone.
    """

    force_compile: bool = False
    run_target: bool = False
    quiet: bool = False
    clear_bin: int = 0
    twice: bool = False
    show_help: bool = False
    unknown: list[str] = field(default_factory=list)


def parse_flags(args: Sequence[str]) -> Flags:
    """Read single-letter flags, which may be combined as in ``-rf``.

    Parsing stops at ``h``. Arguments that do not start with '-' are reported
    and collected in ``unknown``; unknown letters are ignored.
    """
    flags = Flags()
    for arg in args:
        if not arg.startswith("-"):
            flog(LogLevel.INFO, f"Unknown flag '{arg}'")
            flog(LogLevel.INFO, "use -h for a list of flags")
            flags.unknown.append(arg)
            continue
        for letter in arg[1:]:
            if letter == "f":
                flags.force_compile = True
            elif letter == "r":
                flags.run_target = True
            elif letter == "q":
                flags.quiet = True
            elif letter == "c":
                flags.clear_bin = -1
            elif letter == "C":
                flags.clear_bin = 1
            elif letter == "t":
                flags.twice = True
            elif letter == "h":
                flags.show_help = True
                return flags
    return flags


def _run_shell(command: str, failure: str) -> None:
    try:
        subprocess.run(command, shell=True)
    except OSError as exc:
        raise BuildError(f"{failure}: {exc.strerror}") from exc


def clear_binaries(bin_dir: str) -> None:
    """Remove every file in ``bin_dir`` with ``rm``; a failing ``rm`` is ignored."""
    command = f"rm {bin_dir}/*"
    flog(LogLevel.INFO, f"Running command '{command}'")
    _run_shell(command, f"Failed to run '{command}'")


def _compile_changed(config: Config, force: bool, config_time: int) -> None:
    for source in list_directory(config.src_dir):
        src_time = file_mod_time(source)
        bin_time = file_mod_time(binary_path(source, config.bin_dir))
        if force or max(src_time, config_time) > bin_time:
            compile_source(config, source, config.bin_dir)


def build(config: Config, flags: Flags, config_path: str | Path = CONFIG_FILE) -> None:
    """Compile out-of-date sources, link the target and apply the flags.

    A source is rebuilt when it or the configuration file is newer than its
    object file. Raises :class:`BuildError` when a step fails.
    """
    config_time = file_mod_time(config_path)
    passes = 2 if flags.twice else 1

    for _ in range(passes):
        if flags.clear_bin == -1:
            clear_binaries(config.bin_dir)
        _compile_changed(config, flags.force_compile, config_time)

    link_to_target(config)

    if flags.clear_bin == 1:
        clear_binaries(config.bin_dir)

    if flags.run_target:
        flog(LogLevel.INFO, f"Running target '{config.target}'")
        _run_shell(config.target, f"Failed to run target '{config.target}'")


def _show_help() -> None:
    flog(LogLevel.INFO, f"Usage: {PROGRAM} <flags>")
    for line in HELP_LINES:
        flog(LogLevel.INFO, line)


def main(argv: Sequence[str] | None = None) -> int:
    """Run a build from ``./autoc.ini``; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)

    try:
        config = load_config(CONFIG_FILE)
    except ConfigError as exc:
        for problem in exc.problems:
            flog(LogLevel.ERROR, problem)
        return 1
    if config is None:
        return 0

    flags = parse_flags(args)
    if flags.show_help:
        _show_help()
        return 0

    config.force_compile = flags.force_compile
    config.run_target = flags.run_target
    config.quiet = flags.quiet
    config.clear_bin = flags.clear_bin
    config.twice = flags.twice

    if flags.quiet:
        only_errors()

    try:
        build(config, flags, CONFIG_FILE)
    except BuildError as exc:
        flog(LogLevel.FATAL, str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())