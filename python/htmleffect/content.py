"""
content.py - deferred replacement of a node's rendered content.

set_inner_html() is curried in three stages so a caller can build the
mutation as a value and decide later when it happens:

    effect = set_inner_html(element)("<p>hello</p>")   # nothing changes yet
    effect.run()                                        # element.innerHTML set

The element is any object accepting assignment to ``innerHTML``: a PyScript
element proxy, an htmleffect.host.Element, or a test double. It must be a
valid node when the effect runs; that is the caller's precondition and is not
checked here. The markup is handed to the host untouched (no escaping, no
sanitising) and whatever the host raises propagates as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class Effect:
    """A zero-argument action that has been described but not yet performed."""

    action: Callable[[], Any]
    label: str = "effect"

    def run(self) -> None:
        self.action()

    def __call__(self) -> None:
        self.run()

    def __repr__(self) -> str:
        return f"Effect({self.label})"


def set_inner_html(element: Any) -> Callable[[str], Effect]:
    """Capture the target node; returns a function that captures the markup."""

    def with_html(html: str) -> Effect:
        def assign() -> None:
            element.innerHTML = html

        return Effect(assign, label="setInnerHTML")

    return with_html
