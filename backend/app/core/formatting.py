"""
Display helpers for timers: MM:SS rendering, progress and status.
"""

from ..models.timer import Timer, TimerView
from .config import get_settings


def format_time(seconds: int) -> str:
    if seconds < 0:
        raise ValueError(f"seconds must be non-negative, got {seconds}")
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"


def progress(timer: Timer) -> float:
    """Elapsed fraction of the timer in [0, 1]."""
    return (timer.duration - timer.remaining) / timer.duration


def timer_status(timer: Timer) -> str:
    if timer.remaining == 0:
        return "finished"
    if timer.remaining <= get_settings().warning_threshold_sec:
        return "warning"
    return "running" if timer.is_running else "paused"


def to_view(timer: Timer) -> TimerView:
    return TimerView(
        **timer.model_dump(),
        display=format_time(timer.remaining),
        progress=progress(timer),
        status=timer_status(timer),
    )
