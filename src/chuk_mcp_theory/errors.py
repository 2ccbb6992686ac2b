"""
Error taxonomy for the theory engine.

Parse and construction failures are recoverable and subclass ValueError.
InvariantViolation marks an internal defect and must never be converted
into a normal answer.
"""

from __future__ import annotations


class TheoryError(Exception):
    """Base class for every error raised by chuk_mcp_theory."""


class ParseError(TheoryError, ValueError):
    """A user-supplied token could not be parsed."""


class InvalidAccidentalError(ParseError):
    """Unknown accidental token."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid accidental: '{token}'")


class InvalidNoteNameError(ParseError):
    """Unknown note letter or malformed note name."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid note name: '{token}'")


class InvalidIntervalError(ParseError):
    """Impossible quality/size pair or malformed interval designation."""

    def __init__(self, token: str, reason: str = ""):
        self.token = token
        message = f"Invalid interval: '{token}'"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidPitchError(ParseError):
    """Malformed note+octave string."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid pitch: '{token}'")


class InvalidScaleError(ParseError):
    """Scale name not present in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown scale: '{name}'")


class NoteOutOfRangeError(ParseError):
    """A computed note has no spelling with at most two accidentals."""

    def __init__(self, fifths: int):
        self.fifths = fifths
        super().__init__(
            f"No spelling in range for line-of-fifths coordinate {fifths} "
            "(at most two accidentals)"
        )


class InvalidScaleDegreeError(TheoryError, ValueError):
    """Scale degree constructed with a step outside 1-7."""

    def __init__(self, step: int, limit: int = 7):
        self.step = step
        super().__init__(f"Scale degree must be 1-{limit}, got {step}")


class InvariantViolation(TheoryError, RuntimeError):
    """An internal invariant failed. Indicates a defect, not bad input."""
