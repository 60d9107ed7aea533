"""System factory for burst scheduling."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from tinsel_burst.scheduler import BurstScheduler
from tinsel_burst.types import BurstMode

if TYPE_CHECKING:
    from tinsel import EntityId, FrameContext, World


def make_burst_system(
    on_change: Callable[[World, FrameContext, EntityId, BurstMode, BurstMode], None] | None = None,
) -> Callable[[World, FrameContext], None]:
    """Return a system feeding each BurstScheduler the frame's mode and time.

    ``on_change(world, ctx, eid, old, new)`` fires whenever a scheduler
    switches between NORMAL and BURST.
    """

    def burst_system(world: World, ctx: FrameContext) -> None:
        for eid, (scheduler,) in world.query(BurstScheduler):
            old = scheduler.mode
            new = scheduler.observe(ctx.mode, ctx.elapsed)
            if on_change is not None and new is not old:
                on_change(world, ctx, eid, old, new)

    return burst_system
