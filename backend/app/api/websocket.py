from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, TypeAdapter, ValidationError
from starlette.websockets import WebSocketState
from typing import List
import logging

from ..core.config import get_settings
from ..core.formatting import to_view
from ..core.scheduler import TickScheduler
from ..core.timer_manager import InvalidDurationError, TimerManager, UnknownPresetError
from ..models.timer import (
    PRESETS,
    AlertEvent,
    Command,
    CreateCommand,
    ErrorEvent,
    ListCommand,
    NotificationEvent,
    Preset,
    PresetCommand,
    SnapshotEvent,
)

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1")

command_adapter = TypeAdapter(Command)


@router.get("/timers/presets", response_model=List[Preset])
async def list_presets():
    return PRESETS


class TimerSession:
    """Binds one browser socket to its own timers and tick scheduler."""

    def __init__(self, ws: WebSocket):
        self.ws = ws
        self.manager = TimerManager(alert=self.alert, notify=self.notify)

    async def send(self, event: BaseModel):
        if self.ws.application_state == WebSocketState.CONNECTED:
            await self.ws.send_json(event.model_dump())
        else:
            log.warning(f"WebSocket not connected, {event.type} event dropped")

    async def alert(self):
        await self.send(AlertEvent())

    async def notify(self, title: str, description: str):
        await self.send(NotificationEvent(title=title, description=description))

    async def send_snapshot(self):
        await self.send(SnapshotEvent(timers=[to_view(t) for t in self.manager.timers]))

    async def on_tick(self):
        if not any(t.is_running for t in self.manager.timers):
            return
        try:
            await self.manager.tick()
        finally:
            await self.send_snapshot()

    async def handle(self, raw: str):
        try:
            command = command_adapter.validate_json(raw)
        except ValidationError as e:
            log.warning(f"Rejected client message: {raw[:100]}")
            await self.send(ErrorEvent(message=f"Invalid command: {e.errors()[0]['msg']}"))
            return

        if isinstance(command, CreateCommand):
            try:
                self.manager.create_timer_from_parts(command.name, command.minutes, command.seconds)
            except InvalidDurationError as e:
                await self.send(NotificationEvent(
                    title=e.title,
                    description=e.description,
                    variant="destructive",
                ))
                return
        elif isinstance(command, PresetCommand):
            try:
                self.manager.create_from_preset(command.name)
            except UnknownPresetError:
                await self.send(ErrorEvent(message=f"Unknown preset: {command.name}"))
                return
        elif isinstance(command, ListCommand):
            pass
        elif command.action == "toggle":
            self.manager.toggle_running(command.id)
        elif command.action == "reset":
            self.manager.reset_timer(command.id)
        elif command.action == "delete":
            self.manager.delete_timer(command.id)

        await self.send_snapshot()


@router.websocket("/timers/ws")
async def timers_websocket(ws: WebSocket):
    await ws.accept()
    log.info("⏱️ Timer session opened")

    session = TimerSession(ws)
    settings = get_settings()

    try:
        async with TickScheduler(session.on_tick, settings.tick_interval_sec):
            await session.send_snapshot()
            while True:
                message = await ws.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                if message.get("text") is None:
                    log.warning("Rejected binary frame")
                    await session.send(ErrorEvent(message="Commands must be sent as JSON text frames"))
                    continue
                await session.handle(message["text"])
    except WebSocketDisconnect:
        log.info("👋 Timer session closed")
    except Exception as e:
        log.error(f"💥 Timer session error: {e}", exc_info=True)
        if ws.application_state == WebSocketState.CONNECTED:
            await ws.close(code=1011)
    finally:
        log.info(f"🛑 Dropping {len(session.manager)} timer(s)")
