"""Incremental build tool that compiles changed sources and links them from an INI file."""

__version__ = "0.1.0"
__all__ = ["__version__"]