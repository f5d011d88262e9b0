"""Exceptions raised by upclhe.

Every error is fatal for the run; none are recovered locally.
"""

from __future__ import annotations

from typing import Optional


class UpclheError(Exception):
    """Base class for upclhe errors."""


class UsageError(UpclheError, ValueError):
    """Invalid command-line arguments."""


class ResourceError(UpclheError, OSError):
    """An input or output file cannot be opened."""


class FormatError(UpclheError, ValueError):
    """A line of the event listing violates the grammar.

    Attributes:
        stage: Which record failed ("event line", "track line", ...).
        line: Offending line content, stripped.
        line_number: 1-based line number in the input, when known.
    """

    def __init__(self, stage: str, line: Optional[str], line_number: Optional[int] = None):
        self.stage = stage
        self.line = line
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        content = "<end of input>" if line is None else repr(line)
        super().__init__(f"Failed to parse {stage}{where}: {content}")
