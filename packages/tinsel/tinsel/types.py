"""Shared types, modes and errors for the tinsel engine."""

from __future__ import annotations

import enum
import random as _random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

EntityId = int


class Mode(enum.Enum):
    """Scene-wide arrangement the population is heading toward."""

    SCATTERED = "scattered"
    FORMATION = "formation"

    def toggled(self) -> Mode:
        if self is Mode.SCATTERED:
            return Mode.FORMATION
        return Mode.SCATTERED


@dataclass(frozen=True, slots=True)
class FrameContext:
    frame_number: int
    dt: float
    elapsed: float
    mode: Mode
    random: _random.Random


class DeadEntityError(KeyError):
    """Raised when operating on an entity that is not alive."""

    def __init__(self, entity_id: int, message: str) -> None:
        self.entity_id = entity_id
        super().__init__(message)


class DomainError(ValueError):
    """Raised when a formula is evaluated outside its domain."""


class ParameterError(ValueError):
    """Raised when a construction parameter is out of range (non-positive rate, duration...)."""


class DisposedError(RuntimeError):
    """Raised when a disposed engine, scene or scheduler is driven again."""


if TYPE_CHECKING:
    from tinsel.world import World

System = Callable[["World", FrameContext], None]
