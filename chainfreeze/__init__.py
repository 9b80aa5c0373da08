"""Parsing of blockchain extraction options: arguments, block specifications, chunks and output settings."""

__version__ = "0.1.0"