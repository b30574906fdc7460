[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "autoc"
version = "0.1.0"
description = "A small incremental build tool that compiles changed sources and links them, driven by an INI file"
requires-python = ">=3.10"
dependencies = []
keywords = ["build", "compile", "make", "incremental", "ini"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
autoc = "autoc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["autoc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
