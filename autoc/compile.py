"""Compiling sources into object files and linking them into the target."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from .config import Config
from .log import LogLevel, flog


class BuildError(Exception):
    """Raised when a build step cannot be carried out or fails."""


def file_mod_time(path: str | Path) -> int:
    """Modification time of ``path`` in whole seconds, or 0 if it does not exist."""
    try:
        return int(os.stat(path).st_mtime)
    except FileNotFoundError:
        return 0
    except OSError as exc:
        raise BuildError(f"Failed to stat '{path}'") from exc


def get_extension(path: str) -> str:
    """The text from the last '.' onwards, or '' if there is none past the start."""
    index = path.rfind(".")
    return path[index:] if index > 0 else ""


def binary_path(source: str, bin_dir: str) -> str:
    """Object file path for ``source``: ``<bin_dir>/<basename>.o``."""
    trimmed = source.rstrip("/")
    if trimmed:
        name = os.path.basename(trimmed)
    else:
        name = "/" if source else "."
    return f"{bin_dir}/{name}.o"


def format_command(fmt: str, source: str, output: str) -> str:
    """Expand ``%s`` to the source, ``%o`` to the output and ``%%`` to '%'.

    Any other character after '%' is dropped together with the '%'.
    """
    parts = []
    chars = iter(fmt)
    for char in chars:
        if char != "%":
            parts.append(char)
            continue
        spec = next(chars, "")
        if spec == "%":
            parts.append("%")
        elif spec == "s":
            parts.append(source)
        elif spec == "o":
            parts.append(output)
    return "".join(parts)


def get_command(config: Config, source: str, bin_dir: str) -> str | None:
    """The compile command for ``source``, or ``None`` if its extension has none."""
    template = config.commands.get(get_extension(source))
    if template is None:
        return None
    return format_command(template, source, binary_path(source, bin_dir))


def _run(command: str) -> bool:
    flog(LogLevel.INFO, f"/bin/sh: {command}")
    return subprocess.run(command, shell=True).returncode == 0


def compile_source(config: Config, source: str, bin_dir: str) -> bool:
    """Compile ``source`` into ``bin_dir``.

    Returns ``False`` if no command is configured for the file, ``True`` once
    it was compiled, and marks the config as needing a link.
    """
    if not bin_dir:
        raise BuildError("No binary directory set")
    command = get_command(config, source, bin_dir)
    if command is None:
        return False
    if not _run(command):
        raise BuildError(f"Failed to compile '{source}'")
    config.link_required = True
    return True


def list_directory(directory: str) -> list[str]:
    """Paths ``<directory>/<name>`` of the regular files directly in ``directory``."""
    try:
        with os.scandir(directory) as entries:
            return [
                f"{directory}/{entry.name}"
                for entry in entries
                if entry.is_file(follow_symlinks=False)
            ]
    except OSError as exc:
        raise BuildError(
            f"failed to open directory '{directory}': {exc.strerror}"
        ) from exc


def build_link_command(config: Config) -> str:
    """The command that links the object files into the target.

    Without a configured link command the default ``g++`` invocation is used.
    Otherwise ``%l`` expands to the ldflags, ``%t`` to the target and ``%o``
    to the object file glob; unknown or stray specifiers are warned about and
    dropped.
    """
    ldflags = config.ldflags or ""
    target = config.target or ""
    objects = f"{config.bin_dir}/*.o"

    if config.link_command is None:
        return f"g++ {ldflags} {objects} -o {target}"

    template = config.link_command
    expansions = {"l": ldflags, "t": target, "o": objects}
    parts = []
    chars = iter(template)
    for char in chars:
        if char != "%":
            parts.append(char)
            continue
        spec = next(chars, None)
        if spec is None:
            flog(LogLevel.WARNING, "Stray '%' at end of linker command")
        elif spec in expansions:
            parts.append(expansions[spec])
        else:
            flog(
                LogLevel.WARNING,
                f"Unrecognized '%{spec}' special charater in linker command",
            )
    return "".join(parts)


def link_to_target(config: Config) -> None:
    """Run the link command, raising :class:`BuildError` if it fails."""
    if not _run(build_link_command(config)):
        raise BuildError(f"Failed to link '{config.target}'")