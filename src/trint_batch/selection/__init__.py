"""Resolve glob patterns and pattern files into file paths."""

from trint_batch.selection.patterns import expand_patterns, parse_patterns_file

__all__ = ["expand_patterns", "parse_patterns_file"]
