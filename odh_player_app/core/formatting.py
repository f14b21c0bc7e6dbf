# -*- coding: utf-8 -*-
"""
Utilities for formatting playback times.
"""
import math


def format_time(seconds: float) -> str:
    """
    Formats a playback time as ``m:ss``.

    Unknown times (NaN, e.g. a duration that has not resolved yet) and
    negative values render as ``0:00``.

    Args:
        seconds (float): Time in seconds.

    Returns:
        str: The formatted time, e.g. ``"3:05"``. Minutes are not padded and
             keep growing past 59 (``"75:00"``).
    """
    if seconds is None or math.isnan(seconds) or math.isinf(seconds) or seconds < 0:
        return "0:00"

    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def progress_percent(position: float, duration: float) -> float:
    """
    Returns how far ``position`` is through ``duration`` in percent (0-100).

    An unknown or zero duration yields 0.
    """
    if math.isnan(duration) or duration <= 0 or math.isnan(position):
        return 0.0
    return max(0.0, min(100.0, position / duration * 100))
