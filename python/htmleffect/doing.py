"""
doing.py - hio scheduling for deferred effects.

EffectDoer is a hio Doer that runs queued effects cooperatively, one per
scheduling cycle, so a long queue of writes is spread over many cycles.

Effects are run exactly as queued. Anything an effect raises leaves the
scheduler unchanged; nothing here catches it.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Optional

from hio.base import doing

from .content import Effect


class EffectDoer(doing.Doer):
    """
    Doer that runs injected effects in FIFO order.

    Each call to recur() runs at most ONE effect, then yields control back to
    the hio scheduler.

    Parameters:
        effects: initial effects to queue.
        persist: when False the doer is done as soon as its queue is empty.
            When True it keeps idling so later push() calls are picked up.
    """

    def __init__(self, effects: Iterable[Effect] = (), persist: bool = False, **kwa):
        super().__init__(**kwa)
        self.effects = deque(effects)
        self.persist = persist
        self.ran = 0

    def push(self, effect: Effect) -> None:
        """Queue an effect for a later cycle."""
        self.effects.append(effect)

    @property
    def pending(self) -> int:
        return len(self.effects)

    def recur(self, tyme):
        """
        Called each scheduling cycle - run ONE effect.

        Returns:
            True if done (queue drained and not persistent)
            False if more work may remain
        """
        if not self.effects:
            return not self.persist

        effect = self.effects.popleft()
        effect.run()
        self.ran += 1
        return False


def run_effects(
    effects: Iterable[Effect], limit: Optional[float] = None, tock: float = 0.0
) -> EffectDoer:
    """Drain effects through an EffectDoer on a non-real-time Doist."""
    doer = EffectDoer(effects=effects, tock=tock)
    doist = doing.Doist(real=False, limit=limit, doers=[doer], tock=0.03125)
    doist.do()
    return doer


__all__ = ["EffectDoer", "run_effects"]
