"""Resolve program counters to source file, line and function from DWARF section data."""

__version__ = "0.1.0"