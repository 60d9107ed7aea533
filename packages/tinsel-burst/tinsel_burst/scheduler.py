"""BurstScheduler - a two-state machine timed against frame time."""
from __future__ import annotations

import logging

from tinsel.types import DisposedError, Mode, ParameterError

from tinsel_burst.types import BurstMode, BurstState

logger = logging.getLogger(__name__)


class BurstScheduler:
    """Holds an elevated motion multiplier for ``duration`` seconds.

    NORMAL -> BURST when the mode becomes SCATTERED, BURST -> NORMAL once
    ``duration`` has elapsed or the mode returns to FORMATION. The pending
    reversion is just ``(armed_at, duration)``; nothing is scheduled, so a
    re-trigger restarts the window and a disposed scheduler has nothing left
    to fire.
    """

    def __init__(self, duration: float = 3.0, boost: float = 2.0) -> None:
        if duration <= 0:
            raise ParameterError(f"burst duration must be positive, got {duration}")
        if boost <= 0:
            raise ParameterError(f"burst boost must be positive, got {boost}")
        self._state = BurstState(duration=duration)
        self._boost = boost
        self._last_mode: Mode | None = None
        self._disposed = False

    # --- Queries ---

    @property
    def state(self) -> BurstState:
        return self._state

    @property
    def mode(self) -> BurstMode:
        return self._state.mode

    @property
    def bursting(self) -> bool:
        return self._state.mode is BurstMode.BURST

    @property
    def expiry(self) -> float | None:
        return self._state.expiry

    @property
    def boost(self) -> float:
        return self._boost

    @property
    def multiplier(self) -> float:
        return self._boost if self.bursting else 1.0

    @property
    def disposed(self) -> bool:
        return self._disposed

    # --- Transitions ---

    def trigger(self, now: float) -> None:
        """Enter BURST at ``now``; an active burst restarts its window."""
        if self._disposed:
            raise DisposedError("Cannot trigger a disposed burst scheduler")
        self._state.mode = BurstMode.BURST
        self._state.armed_at = now
        logger.debug("burst armed at %.3f until %.3f", now, self._state.expiry)

    def cancel(self) -> None:
        self._state.mode = BurstMode.NORMAL
        self._state.armed_at = None

    def update(self, now: float) -> bool:
        """Revert to NORMAL if the window has passed. Returns True on reversion."""
        expiry = self._state.expiry
        if self.bursting and expiry is not None and now >= expiry:
            self.cancel()
            logger.debug("burst expired at %.3f", now)
            return True
        return False

    def observe(self, mode: Mode, now: float) -> BurstMode:
        """Feed the frame's mode and time. Returns the resulting burst mode.

        Only a change of mode (or the first observation) arms or cancels a
        burst; holding SCATTERED does not keep re-arming it.
        """
        if self._disposed:
            return self._state.mode
        if mode is not self._last_mode:
            self._last_mode = mode
            if mode is Mode.SCATTERED:
                self.trigger(now)
            else:
                self.cancel()
        self.update(now)
        return self._state.mode

    def dispose(self) -> None:
        """Cancel any pending reversion and refuse further triggers."""
        self.cancel()
        self._disposed = True
