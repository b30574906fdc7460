"""Build configuration read from an INI file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .ini import IniParseError, parse
from .log import LogLevel, flog

CONFIG_FILE = "./autoc.ini"

DEFAULT_CONFIG = (
    "[general]\n"
    "src = ./src\n"
    "bin = ./bin\n"
    "target = \n"
    "ldflags =  \n"
    "\n"
    "[.c]\n"
    "command = gcc -Wall -c %s -o %o\n"
    "\n"
    "[.cpp]\n"
    "command = g++ -Wall -c %s -o %o\n"
)

_GENERAL_FIELDS = {
    "src": "src_dir",
    "bin": "bin_dir",
    "ldflags": "ldflags",
    "target": "target",
}


class ConfigError(Exception):
    """Raised when the configuration cannot be read, written or is incomplete."""

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        super().__init__(message)
        self.problems = list(problems) if problems else [message]


@dataclass
class Config:
    """Settings for one build, plus the run-time switches given on the command line."""

    bin_dir: str | None = None
    src_dir: str | None = None
    ldflags: str | None = None
    target: str | None = None
    link_command: str | None = None
    commands: dict[str, str] = field(default_factory=dict)
    force_compile: bool = False
    link_required: bool = False
    twice: bool = False
    quiet: bool = False
    run_target: bool = False
    clear_bin: int = 0

    def handle(self, section: str, name: str, value: str) -> bool:
        """Take one name/value pair from the INI parser; always accepts it."""
        if section.startswith("."):
            if name == "command":
                self.commands[section] = value
            return True

        if section == "general":
            attribute = _GENERAL_FIELDS.get(name)
            if attribute is None:
                flog(
                    LogLevel.ERROR,
                    f"Unknown field in config: [{section}] {name} = {value}",
                )
            else:
                setattr(self, attribute, value)
        elif section == "link" and name == "command":
            self.link_command = value
        return True

    def validate(self) -> None:
        """Raise :class:`ConfigError` if target, source or binary directory is missing."""
        problems = []
        if self.target is None:
            problems.append("No target specified in config")
        if self.src_dir is None:
            problems.append("No source directory specified in config")
        if self.bin_dir is None:
            problems.append("No binary directory specified in config")
        if problems:
            raise ConfigError("; ".join(problems), problems)


def create_config(path: str | Path) -> None:
    """Write the default configuration to ``path``."""
    flog(LogLevel.INFO, f"Creating default config '{path}', modify it before rerunning")
    try:
        with open(path, "w", encoding="utf-8", newline="") as file:
            file.write(DEFAULT_CONFIG)
    except OSError as exc:
        raise ConfigError("Failed to create default config") from exc


def load_config(path: str | Path = CONFIG_FILE) -> Config | None:
    """Read and validate the configuration at ``path``.

    If the file cannot be opened, a default one is written in its place and
    ``None`` is returned so the caller can stop and let the user edit it.
    """
    config = Config()
    try:
        parse(path, config.handle)
    except IniParseError as exc:
        raise ConfigError(
            f"Failed to parse {Path(path).name}: ERROR on line {exc.lineno}"
        ) from exc
    except OSError:
        create_config(path)
        return None
    config.validate()
    return config