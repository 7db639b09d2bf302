"""
Guarded one-shot actions.

A guarded action is a side effect that must happen at most once per match:
the sixty-minute odds snapshot, the finished-scoreless report. It bundles

    precondition   when the action is due
    guard          the tracker flag recording that it already ran
    effect         the callback doing the work
    failure policy what to do when the callback raises

The default policy is best-effort with no retry: the guard is set before the
effect runs, a failure is logged, and the action is never attempted again for
that match. `retry_on_failure=True` clears the guard on failure so the next
tick tries again.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class GuardedAction:
    """
    A side effect that fires at most once per tracker state.

    Attributes:
        name: Short name used in logs and classification results
        guard: Name of the boolean attribute on the tracker state
        precondition: (state, observation) -> bool, whether the action is due
        effect: Callback receiving the observation; None makes the action a
            pure flag transition
        retry_on_failure: Clear the guard again if the effect raises
    """

    name: str
    guard: str
    precondition: Callable[[Any, Any], bool]
    effect: Optional[Callable[[Any], None]] = None
    retry_on_failure: bool = False

    def fire(self, state: Any, observation: Any) -> bool:
        """
        Run the action if it is due and has not run yet.

        Returns:
            True if the action was attempted on this call
        """
        if getattr(state, self.guard):
            return False
        if not self.precondition(state, observation):
            return False

        setattr(state, self.guard, True)
        if self.effect is None:
            return True
        try:
            self.effect(observation)
        except Exception as e:
            logger.warning(f"Side effect '{self.name}' failed: {e}")
            if self.retry_on_failure:
                setattr(state, self.guard, False)
        return True
