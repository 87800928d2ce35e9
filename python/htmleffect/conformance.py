"""
conformance.py - behavioural checks for set_inner_html() against a host tree.

Every check takes a DOM-like ``document`` (pyscript.document in the browser,
htmleffect.host.Document elsewhere) and asserts one property of the content
setter. The same functions run under pytest on the lxml tree and in the
browser runner against the real DOM, so a substituted host engine is held to
the browser's behaviour.
"""

from __future__ import annotations

from typing import Any, Callable, List, Tuple

from .content import set_inner_html

Check = Callable[[Any], None]


def _fresh(document, markup: str = ""):
    """Append a new <div> to the body, optionally pre-filled."""
    el = document.createElement("div")
    document.body.appendChild(el)
    if markup:
        el.innerHTML = markup
    return el


def _tags(el) -> List[str]:
    return [str(child.tagName).upper() for child in el.children]


def check_replaces_content(document) -> None:
    el = _fresh(document, "<p>old</p>")
    try:
        set_inner_html(el)("<b>new</b>").run()
        assert el.innerHTML == "<b>new</b>", f"Got {el.innerHTML!r}"
        assert el.textContent == "new", f"Got {el.textContent!r}"
    finally:
        el.remove()


def check_construction_is_deferred(document) -> None:
    el = _fresh(document, "<p>old</p>")
    try:
        effect = set_inner_html(el)("<b>new</b>")
        assert el.innerHTML == "<p>old</p>", f"Mutated early: {el.innerHTML!r}"
        effect.run()
        assert el.innerHTML == "<b>new</b>", f"Got {el.innerHTML!r}"
    finally:
        el.remove()


def check_repeat_run_same_state(document) -> None:
    el = _fresh(document)
    try:
        effect = set_inner_html(el)("<i>x</i>y")
        effect.run()
        once = el.innerHTML
        effect.run()
        assert el.innerHTML == once, f"{el.innerHTML!r} != {once!r}"
        assert len(el.children) == 1, f"Children: {_tags(el)}"
    finally:
        el.remove()


def check_empty_string_clears(document) -> None:
    el = _fresh(document, "<p>a</p>text<p>b</p>")
    try:
        set_inner_html(el)("").run()
        assert el.innerHTML == "", f"Got {el.innerHTML!r}"
        assert len(el.children) == 0, f"Children: {_tags(el)}"
        assert el.textContent == "", f"Got {el.textContent!r}"
    finally:
        el.remove()


def check_nested_markup_becomes_children(document) -> None:
    el = _fresh(document, "<span>old</span><em>older</em>")
    old = list(el.children)
    try:
        set_inner_html(el)("<ul><li>a</li><li>b</li></ul><p>c</p>").run()
        assert _tags(el) == ["UL", "P"], f"Children: {_tags(el)}"
        items = _tags(el.firstElementChild)
        assert items == ["LI", "LI"], f"List items: {items}"
        for child in old:
            assert child.parentNode is None, f"{child!r} still attached"
    finally:
        el.remove()


def check_markup_is_not_escaped(document) -> None:
    el = _fresh(document)
    try:
        set_inner_html(el)("<i>x</i> &amp; y").run()
        assert _tags(el) == ["I"], f"Children: {_tags(el)}"
        assert el.textContent == "x & y", f"Got {el.textContent!r}"
    finally:
        el.remove()


def check_detached_matches_primitive(document) -> None:
    via_effect = document.createElement("div")
    direct = document.createElement("div")
    markup = "<p>detached</p>"

    result = set_inner_html(via_effect)(markup).run()
    direct.innerHTML = markup

    assert result is None, f"Effect returned {result!r}"
    assert via_effect.innerHTML == direct.innerHTML, (
        f"{via_effect.innerHTML!r} != {direct.innerHTML!r}"
    )


CHECKS: List[Tuple[str, Check]] = [
    ("replaces_content", check_replaces_content),
    ("construction_is_deferred", check_construction_is_deferred),
    ("repeat_run_same_state", check_repeat_run_same_state),
    ("empty_string_clears", check_empty_string_clears),
    ("nested_markup_becomes_children", check_nested_markup_becomes_children),
    ("markup_is_not_escaped", check_markup_is_not_escaped),
    ("detached_matches_primitive", check_detached_matches_primitive),
]
