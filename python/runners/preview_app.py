"""
preview_app.py - PyScript controller for the markup preview page.

State/effects dispatch loop:
- the reducer is pure and returns (state, effects)
- effects are set_inner_html() values, run by the store after rendering
- status/badge rendering is a view over the state

The page offers a markup textarea, Apply/Clear buttons, a preview pane and a
"Run checks" button that runs the conformance suite against the live DOM.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

import js
from pyodide.ffi import create_proxy
from pyodide.ffi.wrappers import add_event_listener
from pyscript import document

from htmleffect import Effect, Store, set_inner_html, ui_log
from runners import conformance_tests


@dataclass(frozen=True)
class PreviewState:
    markup: str
    status: str
    tone: str
    applied: int


_MAX_STATUS = 120

initial_state = PreviewState(markup="", status="Ready", tone="idle", applied=0)

store: Store[PreviewState]
preview_el = None
_run_checks_proxy = None


def _status_classes(tone: str) -> str:
    base = "rounded-md px-2 py-1 text-xs font-medium"
    if tone == "busy":
        return f"{base} bg-amber-200 text-amber-900"
    if tone == "error":
        return f"{base} bg-rose-200 text-rose-900"
    return f"{base} bg-emerald-200 text-emerald-900"


def _preview():
    preview = document.getElementById("preview")
    if preview is None:
        raise RuntimeError("Missing #preview in page")
    return preview


def _short(text: str) -> str:
    if len(text) > _MAX_STATUS:
        return f"{text[: _MAX_STATUS - 3]}..."
    return text


def _reduce(current: PreviewState, action: dict) -> Tuple[PreviewState, List[Effect]]:
    action_type = action.get("type")

    if action_type == "MARKUP_CHANGED":
        return (replace(current, markup=str(action.get("markup") or "")), [])

    if action_type == "APPLY_REQUESTED":
        return (
            replace(
                current,
                status=f"Applied {len(current.markup)} chars",
                tone="idle",
                applied=current.applied + 1,
            ),
            [set_inner_html(preview_el)(current.markup)],
        )

    if action_type == "CLEAR_REQUESTED":
        return (
            replace(current, status="Preview cleared", tone="idle"),
            [set_inner_html(preview_el)("")],
        )

    if action_type == "FAILED":
        return (
            replace(current, status=_short(f"Error: {action['error']}"), tone="error"),
            [],
        )

    return current, []


def _render_status(current: PreviewState) -> List[Effect]:
    def paint() -> None:
        badge = document.getElementById("statusBadge")
        if badge is None:
            return
        badge.textContent = current.status
        badge.className = _status_classes(current.tone)

    return [Effect(paint, label="renderStatus")]


def dispatch(action: dict) -> None:
    try:
        store.dispatch(action)
    except Exception as exc:
        ui_log.emit(f"{type(exc).__name__}: {exc}", "fail")
        store.dispatch({"type": "FAILED", "error": str(exc)})


def _on_input(event) -> None:
    dispatch({"type": "MARKUP_CHANGED", "markup": event.target.value})


def _on_apply(_event=None) -> None:
    markup_el = document.getElementById("markupInput")
    if markup_el is not None:
        dispatch({"type": "MARKUP_CHANGED", "markup": markup_el.value})
    dispatch({"type": "APPLY_REQUESTED"})


def _on_clear(_event=None) -> None:
    dispatch({"type": "CLEAR_REQUESTED"})


def run_checks(_event=None) -> None:
    conformance_tests.run_tests(None)


def _boot() -> None:
    global store, preview_el, _run_checks_proxy

    preview_el = _preview()
    store = Store(_reduce, initial_state, view=_render_status)

    add_event_listener(document.getElementById("markupInput"), "input", _on_input)
    add_event_listener(document.getElementById("applyBtn"), "click", _on_apply)
    add_event_listener(document.getElementById("clearBtn"), "click", _on_clear)
    add_event_listener(document.getElementById("checksBtn"), "click", run_checks)

    _run_checks_proxy = create_proxy(run_checks)
    js.window.run_checks = _run_checks_proxy

    store.render()


_boot()
