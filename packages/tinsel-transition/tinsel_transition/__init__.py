"""tinsel-transition - Smooth scattered/formation progress for the tinsel engine."""
from __future__ import annotations

from tinsel_transition.components import Transition
from tinsel_transition.damping import advance, damp
from tinsel_transition.systems import make_transition_system

__all__ = ["Transition", "advance", "damp", "make_transition_system"]
