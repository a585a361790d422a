import pytest
from pydantic import ValidationError

from backend.app.core.formatting import format_time, progress, timer_status, to_view
from backend.app.models.timer import Timer


def test_format_time():
    assert format_time(0) == "00:00"
    assert format_time(65) == "01:05"
    assert format_time(599) == "09:59"
    assert format_time(3600) == "60:00"


def test_format_time_rejects_negative():
    with pytest.raises(ValueError):
        format_time(-1)


def test_progress_fraction():
    t = Timer(name="Rice", duration=200, remaining=200)
    assert progress(t) == 0.0
    t.remaining = 50
    assert progress(t) == 0.75
    t.remaining = 0
    assert progress(t) == 1.0


def test_status():
    t = Timer(name="Rice", duration=60, remaining=60)
    assert timer_status(t) == "paused"
    t.is_running = True
    assert timer_status(t) == "running"
    t.remaining = 10
    assert timer_status(t) == "warning"
    t.remaining = 0
    t.is_running = False
    assert timer_status(t) == "finished"


def test_view_carries_timer_fields():
    t = Timer(name="Pasta", duration=720, remaining=655)
    view = to_view(t)
    assert view.id == t.id
    assert view.display == "10:55"
    assert view.status == "paused"


def test_timer_rejects_remaining_above_duration():
    with pytest.raises(ValidationError):
        Timer(name="x", duration=10, remaining=20)
