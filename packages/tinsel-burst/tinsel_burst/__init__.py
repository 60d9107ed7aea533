"""tinsel-burst - Timed motion boost after the scene scatters."""
from __future__ import annotations

from tinsel_burst.scheduler import BurstScheduler
from tinsel_burst.systems import make_burst_system
from tinsel_burst.types import BurstMode, BurstState

__all__ = ["BurstMode", "BurstScheduler", "BurstState", "make_burst_system"]
