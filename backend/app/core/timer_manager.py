import logging
from typing import Awaitable, Callable, Dict, List, Optional

from ..models.timer import PRESETS, Preset, Timer

log = logging.getLogger(__name__)

AlertSink = Callable[[], Awaitable[None]]
NotificationSink = Callable[[str, str], Awaitable[None]]

COMPLETE_TITLE = "Timer Complete!"


class InvalidDurationError(ValueError):
    title = "Invalid Duration"
    description = "Please enter a valid time."

    def __init__(self, seconds: int):
        super().__init__(f"timer duration must be positive, got {seconds}s")
        self.seconds = seconds


class UnknownPresetError(KeyError):
    pass


class TimerManager:
    """
    Ordered, in-memory collection of countdown timers for one page session.

    Every mutation runs to completion without awaiting, so ticks and user
    actions never interleave on the event loop. Completion side effects are
    awaited only after a tick has updated the whole collection.
    """

    def __init__(
        self,
        alert: AlertSink,
        notify: NotificationSink,
        presets: Optional[List[Preset]] = None,
    ):
        self.alert = alert
        self.notify = notify
        self.presets: Dict[str, Preset] = {p.name: p for p in (PRESETS if presets is None else presets)}
        self._timers: List[Timer] = []

    def __len__(self) -> int:
        return len(self._timers)

    @property
    def timers(self) -> List[Timer]:
        return list(self._timers)

    def get(self, timer_id: str) -> Optional[Timer]:
        for timer in self._timers:
            if timer.id == timer_id:
                return timer
        return None

    def create_timer(self, name: str, duration_seconds: int) -> Timer:
        if duration_seconds <= 0:
            raise InvalidDurationError(duration_seconds)
        name = (name or "").strip() or f"Timer {len(self._timers) + 1}"
        timer = Timer(name=name, duration=duration_seconds, remaining=duration_seconds)
        self._timers.append(timer)
        log.info(f"Created timer '{timer.name}' ({duration_seconds}s) id={timer.id}")
        return timer

    def create_timer_from_parts(
        self, name: str, minutes: Optional[int] = None, seconds: Optional[int] = None
    ) -> Timer:
        return self.create_timer(name, (minutes or 0) * 60 + (seconds or 0))

    def create_preset_timer(self, name: str, minutes: int) -> Timer:
        return self.create_timer(name, minutes * 60)

    def create_from_preset(self, preset_name: str) -> Timer:
        try:
            preset = self.presets[preset_name]
        except KeyError:
            raise UnknownPresetError(preset_name) from None
        return self.create_preset_timer(preset.name, preset.minutes)

    def toggle_running(self, timer_id: str) -> Optional[Timer]:
        timer = self.get(timer_id)
        if timer is None:
            return None
        # a finished timer has to be reset before it can run again
        if timer.remaining == 0:
            return timer
        timer.is_running = not timer.is_running
        return timer

    def reset_timer(self, timer_id: str) -> Optional[Timer]:
        timer = self.get(timer_id)
        if timer is not None:
            timer.remaining = timer.duration
            timer.is_running = False
        return timer

    def delete_timer(self, timer_id: str) -> bool:
        before = len(self._timers)
        self._timers = [t for t in self._timers if t.id != timer_id]
        return len(self._timers) != before

    def advance(self) -> List[Timer]:
        """Apply one tick to the collection and return the timers that finished."""
        finished: List[Timer] = []
        for timer in self._timers:
            if not timer.is_running or timer.remaining <= 0:
                continue
            timer.remaining -= 1
            if timer.remaining == 0:
                timer.is_running = False
                finished.append(timer)
        return finished

    async def tick(self) -> List[Timer]:
        finished = self.advance()
        first_error: Optional[Exception] = None
        for timer in finished:
            log.info(f"Timer '{timer.name}' finished")
            try:
                await self._signal_complete(timer)
            except Exception as e:
                log.error(f"Completion signal failed for '{timer.name}': {e}")
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error
        return finished

    async def _signal_complete(self, timer: Timer):
        try:
            await self.alert()
        except Exception as e:
            # autoplay may be blocked on the client
            log.debug(f"Alert playback failed for '{timer.name}': {e}")
        await self.notify(COMPLETE_TITLE, f"{timer.name} is done!")
