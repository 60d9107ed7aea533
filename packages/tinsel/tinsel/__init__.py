"""tinsel - A frame-driven engine for morphing decorative scenes."""

from tinsel.clock import Clock
from tinsel.engine import Engine
from tinsel.types import (
    DeadEntityError,
    DisposedError,
    DomainError,
    EntityId,
    FrameContext,
    Mode,
    ParameterError,
)
from tinsel.world import World

__all__ = [
    "Engine",
    "World",
    "Clock",
    "FrameContext",
    "Mode",
    "EntityId",
    "DeadEntityError",
    "DisposedError",
    "DomainError",
    "ParameterError",
]
