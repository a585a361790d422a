from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, Field, conint, model_validator


class Timer(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    duration: conint(gt=0)
    remaining: conint(ge=0)
    is_running: bool = False

    @model_validator(mode="after")
    def check_remaining(self):
        if self.remaining > self.duration:
            raise ValueError(f"remaining ({self.remaining}) exceeds duration ({self.duration})")
        return self


class Preset(BaseModel):
    name: str
    minutes: conint(gt=0)


PRESETS: List[Preset] = [
    Preset(name="Boil Eggs", minutes=10),
    Preset(name="Pasta", minutes=12),
    Preset(name="Rice", minutes=20),
    Preset(name="Quick Rest", minutes=5),
]


class TimerView(Timer):
    """Timer plus the derived fields the page renders."""

    display: str
    progress: float
    status: Literal["running", "paused", "warning", "finished"]


# Client -> server commands


class CreateCommand(BaseModel):
    action: Literal["create"]
    name: str = ""
    minutes: Optional[int] = None
    seconds: Optional[int] = None


class PresetCommand(BaseModel):
    action: Literal["preset"]
    name: str


class TimerCommand(BaseModel):
    action: Literal["toggle", "reset", "delete"]
    id: str


class ListCommand(BaseModel):
    action: Literal["list"]


Command = Annotated[
    Union[CreateCommand, PresetCommand, TimerCommand, ListCommand],
    Field(discriminator="action"),
]


# Server -> client events


class SnapshotEvent(BaseModel):
    type: Literal["snapshot"] = "snapshot"
    timers: List[TimerView]


class AlertEvent(BaseModel):
    type: Literal["alert"] = "alert"


class NotificationEvent(BaseModel):
    type: Literal["notification"] = "notification"
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    message: str
