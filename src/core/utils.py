"""Shared utility functions for ReciteScribe."""

import math


def round_seconds(seconds: float) -> int:
    """Round a non-negative duration to whole seconds, halves rounding up."""
    return max(0, math.floor(seconds + 0.5))


def format_duration(seconds: int) -> str:
    """Render a duration as ``"<minutes>m <seconds>s"`` (e.g. ``"2m 5s"``)."""
    minutes, remaining = divmod(int(seconds), 60)
    return f"{minutes}m {remaining}s"


def format_number(value: float) -> str:
    """Render whole floats without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
