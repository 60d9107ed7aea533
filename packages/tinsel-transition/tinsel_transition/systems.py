"""System factory for mode-driven transitions."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from tinsel.types import Mode

from tinsel_transition.components import Transition
from tinsel_transition.damping import advance

if TYPE_CHECKING:
    from tinsel import EntityId, FrameContext, World


def make_transition_system(
    on_settle: Callable[[World, FrameContext, EntityId, Transition], None] | None = None,
) -> Callable[[World, FrameContext], None]:
    """Return a system advancing every Transition toward the frame's mode.

    Each Transition is advanced exactly once per frame. ``on_settle`` fires
    on the frame a transition lands on 0.0 or 1.0.
    """

    def transition_system(world: World, ctx: FrameContext) -> None:
        target_on = ctx.mode is Mode.FORMATION
        for eid, (transition,) in world.query(Transition):
            before = transition.progress
            transition.progress = advance(
                before,
                target_on,
                transition.rate_on,
                transition.rate_off,
                ctx.dt,
                max_dt=transition.max_dt,
                epsilon=transition.epsilon,
            )
            if (
                on_settle is not None
                and transition.progress != before
                and transition.settled
            ):
                on_settle(world, ctx, eid, transition)

    return transition_system
