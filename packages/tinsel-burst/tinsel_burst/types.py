"""Burst state types."""
from __future__ import annotations

import enum
from dataclasses import dataclass


class BurstMode(enum.Enum):
    NORMAL = "normal"
    BURST = "burst"


@dataclass
class BurstState:
    """Current burst phase. ``armed_at`` is the frame time the burst started."""

    mode: BurstMode = BurstMode.NORMAL
    armed_at: float | None = None
    duration: float = 3.0

    @property
    def expiry(self) -> float | None:
        if self.armed_at is None:
            return None
        return self.armed_at + self.duration
