import os
import sys

import pytest

from autoc.compile import (
    BuildError,
    binary_path,
    build_link_command,
    compile_source,
    file_mod_time,
    format_command,
    get_command,
    get_extension,
    link_to_target,
    list_directory,
)
from autoc.config import Config
from autoc.log import LogLevel, set_level


@pytest.fixture(autouse=True)
def _info_level():
    set_level(LogLevel.INFO)
    yield
    set_level(LogLevel.INFO)


def _copy_command():
    return f'"{sys.executable}" -c "import shutil, sys; shutil.copy(sys.argv[1], sys.argv[2])" %s %o'


def test_file_mod_time_of_existing_file(tmp_path):
    path = tmp_path / "a.c"
    path.write_text("int x;")
    os.utime(path, (1000, 1000))
    assert file_mod_time(path) == 1000


def test_file_mod_time_of_missing_file(tmp_path):
    assert file_mod_time(tmp_path / "missing.c") == 0


@pytest.mark.parametrize(
    "path, expected",
    [
        ("src/main.c", ".c"),
        ("src/main.cpp", ".cpp"),
        ("Makefile", ""),
        (".bashrc", ""),
        ("./src/main", ""),
    ],
)
def test_get_extension(path, expected):
    assert get_extension(path) == expected


def test_binary_path():
    assert binary_path("src/main.c", "bin") == "bin/main.c.o"


def test_binary_path_ignores_trailing_slash():
    assert binary_path("src/util.c/", "out") == binary_path("src/util.c", "out")


def test_format_command_substitutes_source_and_output():
    assert format_command("%s", "a.c", "b.o") == "a.c"
    assert format_command("%o", "a.c", "b.o") == "b.o"
    assert format_command("-c %s -o %o", "x.c", "y.o") == "-c " + "x.c" + " -o " + "y.o"


def test_format_command_escapes_and_drops():
    assert format_command("%%", "a.c", "b.o") == "%"
    assert format_command("%q", "a.c", "b.o") == ""
    assert format_command("abc%", "a.c", "b.o") == "abc"


def test_format_command_without_specifiers_is_unchanged():
    text = "plain text"
    assert format_command(text, "a.c", "b.o") == text


def test_get_command_uses_extension():
    config = Config(commands={".c": "%s|%o"})
    assert get_command(config, "src/a.c", "bin") == "src/a.c|" + binary_path("src/a.c", "bin")
    assert get_command(config, "src/a.h", "bin") is None


def test_compile_source_requires_bin_dir():
    with pytest.raises(BuildError, match="No binary directory set"):
        compile_source(Config(), "a.c", "")


def test_compile_source_skips_unknown_extension(tmp_path):
    config = Config(commands={".c": "exit 1"})
    assert compile_source(config, str(tmp_path / "notes.txt"), str(tmp_path)) is False
    assert config.link_required is False


def test_compile_source_runs_command(tmp_path, capsys):
    source = tmp_path / "main.c"
    source.write_text("int main(void) { return 0; }")
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    config = Config(commands={".c": _copy_command()})

    assert compile_source(config, str(source), str(bin_dir)) is True
    assert config.link_required is True
    output = binary_path(str(source), str(bin_dir))
    with open(output) as handle:
        assert handle.read() == source.read_text()
    assert "/bin/sh: " in capsys.readouterr().out


def test_compile_source_failure(tmp_path):
    config = Config(commands={".c": "exit 1"})
    with pytest.raises(BuildError, match="Failed to compile"):
        compile_source(config, str(tmp_path / "a.c"), str(tmp_path))
    assert config.link_required is False


def test_list_directory_returns_only_regular_files(tmp_path):
    (tmp_path / "a.c").write_text("")
    (tmp_path / "b.cpp").write_text("")
    (tmp_path / "sub").mkdir()
    listed = list_directory(str(tmp_path))
    assert sorted(listed) == sorted([f"{tmp_path}/a.c", f"{tmp_path}/b.cpp"])


def test_list_directory_missing(tmp_path):
    with pytest.raises(BuildError, match="failed to open directory"):
        list_directory(str(tmp_path / "missing"))


def test_default_link_command():
    config = Config(bin_dir="bin", target="app", ldflags="-lm")
    assert build_link_command(config) == "g++ -lm bin/*.o -o app"


def test_default_link_command_without_ldflags():
    with_empty = Config(bin_dir="bin", target="app", ldflags="")
    without = Config(bin_dir="bin", target="app")
    assert build_link_command(without) == build_link_command(with_empty)


def test_custom_link_command():
    config = Config(bin_dir="bin", target="app", ldflags="", link_command="ld %t %o%l")
    assert build_link_command(config) == "ld app bin/*.o"


def test_custom_link_command_warnings(capsys):
    config = Config(bin_dir="bin", target="app", link_command="run %x%")
    assert build_link_command(config) == "run "
    out = capsys.readouterr().out
    assert "Unrecognized '%x' special charater in linker command" in out
    assert "Stray '%' at end of linker command" in out


def test_link_to_target_success(tmp_path, capsys):
    marker = tmp_path / "linked"
    command = f'"{sys.executable}" -c "open(r\'{marker}\', \'w\').close()"'
    link_to_target(Config(bin_dir="bin", target="app", link_command=command))
    assert f"/bin/sh: {command}" in capsys.readouterr().out
    assert marker.exists()


def test_link_to_target_failure():
    config = Config(bin_dir="bin", target="app", link_command="exit 1")
    with pytest.raises(BuildError, match="Failed to link 'app'"):
        link_to_target(config)