"""
ui_log.py - shared UI logging sink for browser and non-browser runs.

Runners emit structured log entries through this module instead of writing
straight to the DOM. A controller (e.g. preview_app) can register custom
entry/clear sinks for fully state-driven rendering. Without sinks, entries
are appended to the #output element of the active document, or printed when
there is none.
"""

from __future__ import annotations

import datetime
import html
from typing import Any, Callable, Dict, Iterable, Optional

from .content import set_inner_html

# Browser document bridge; set_document() swaps in another tree.
try:
    from pyscript import document
except ImportError:  # pragma: no cover - non-browser usage
    document = None


LogEntry = Dict[str, Any]
EntrySink = Callable[[LogEntry], None]
ClearSink = Callable[[], None]

OUTPUT_ID = "output"

_ALLOWED_CSS = {"info", "success", "fail", "loading"}
_entry_sink: Optional[EntrySink] = None
_clear_sink: Optional[ClearSink] = None


def _now() -> str:
    return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]


def _normalize_css(css_class: str) -> str:
    return css_class if css_class in _ALLOWED_CSS else "info"


def normalize_entry(entry: LogEntry) -> LogEntry:
    return {
        "time": str(entry.get("time") or _now()),
        "css": _normalize_css(str(entry.get("css") or "info")),
        "msg": str(entry.get("msg") or ""),
        "run_id": entry.get("run_id"),
    }


def set_document(doc: Any) -> None:
    """Select the display tree used by the fallback sink (None disables it)."""
    global document
    document = doc


def set_sinks(
    entry_sink: Optional[EntrySink] = None, clear_sink: Optional[ClearSink] = None
) -> None:
    """Register sinks for app-level state-driven rendering."""
    global _entry_sink, _clear_sink
    _entry_sink = entry_sink
    _clear_sink = clear_sink


def clear_sinks() -> None:
    """Remove registered sinks and fall back to default behavior."""
    global _entry_sink, _clear_sink
    _entry_sink = None
    _clear_sink = None


def emit(
    msg: Any,
    css_class: str = "info",
    *,
    time: Optional[str] = None,
    run_id: Optional[str] = None,
) -> None:
    entry = normalize_entry(
        {"time": time, "css": css_class, "msg": msg, "run_id": run_id}
    )
    if _entry_sink is not None:
        _entry_sink(entry)
        return
    _default_emit(entry)


def emit_batch(entries: Iterable[LogEntry]) -> None:
    for entry in entries:
        normalized = normalize_entry(entry)
        if _entry_sink is not None:
            _entry_sink(normalized)
        else:
            _default_emit(normalized)


def clear() -> None:
    if _clear_sink is not None:
        _clear_sink()
        return
    _default_clear()


def format_line(entry: LogEntry) -> str:
    """Markup for one entry; the message is escaped, the wrapper is not."""
    line = html.escape(f"[{entry['time']}] {entry['msg']}")
    return f'<span class="{entry["css"]}">{line}</span>\n'


def _output():
    if document is None:
        return None
    return document.getElementById(OUTPUT_ID)


def _default_emit(entry: LogEntry) -> None:
    output = _output()
    if output is None:
        print(entry["msg"])
        return

    set_inner_html(output)(output.innerHTML + format_line(entry)).run()
    if hasattr(output, "scrollHeight"):
        output.scrollTop = output.scrollHeight


def _default_clear() -> None:
    output = _output()
    if output is not None:
        set_inner_html(output)("").run()
