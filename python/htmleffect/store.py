"""
store.py - state/effects dispatch loop.

A reducer is pure: given the current state and an action it returns the next
state and the effects it wants performed. The store owns the only mutable
slot (the current state) and the decision of when effects actually run:

    store = Store(reduce, initial, view=lambda s: [set_inner_html(el)(s.html)])
    store.dispatch({"type": "EDIT", "html": "<b>hi</b>"})

After each dispatch the view's effects for the new state run first, then the
reducer's effects, each through the runner. The default runner performs the
effect immediately; pass EffectDoer.push to defer them to a hio scheduler.
Subscribers are told last, after the runner has taken every effect.
"""

from __future__ import annotations

from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from .content import Effect

S = TypeVar("S")

Action = Dict[str, Any]
Runner = Callable[[Effect], Any]


def run_now(effect: Effect) -> None:
    effect.run()


class Store(Generic[S]):
    def __init__(
        self,
        reducer: Callable[[S, Action], Tuple[S, Sequence[Effect]]],
        state: S,
        view: Optional[Callable[[S], Iterable[Effect]]] = None,
        runner: Optional[Runner] = None,
    ):
        self.reducer = reducer
        self.state = state
        self.view = view
        self.runner = runner if runner is not None else run_now
        self._listeners: List[Callable[[S], Any]] = []

    def subscribe(self, listener: Callable[[S], Any]) -> Callable[[], None]:
        """
        Call listener with the new state once a dispatch has handed all of its
        effects to the runner. A dispatch whose effect raises notifies nobody.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> S:
        self.state, effects = self.reducer(self.state, action)

        if self.view is not None:
            for effect in self.view(self.state):
                self.runner(effect)

        for effect in effects:
            self.runner(effect)

        for listener in list(self._listeners):
            listener(self.state)

        return self.state

    def render(self) -> None:
        """Run the view's effects for the current state without an action."""
        if self.view is None:
            return
        for effect in self.view(self.state):
            self.runner(effect)
