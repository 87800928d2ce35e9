# -*- encoding: utf-8 -*-
"""
test_host.py - tests for the lxml-backed display tree.
"""

from __future__ import annotations

import pytest
from lxml.etree import ParserError

from htmleffect.host import Document, Element


def _attached(document, markup=""):
    el = document.createElement("div")
    document.body.appendChild(el)
    if markup:
        el.innerHTML = markup
    return el


# =============================================================================
# DOCUMENT
# =============================================================================


def test_blank_document_has_empty_body(document):
    assert document.body.tagName == "BODY"
    assert document.body.innerHTML == ""
    assert document.body.children == []


def test_from_string_and_get_element_by_id():
    doc = Document.from_string(
        '<html><body><div id="preview"><p>a</p></div><pre id="output"></pre></body></html>'
    )
    preview = doc.getElementById("preview")
    assert preview is not None
    assert preview.tagName == "DIV"
    assert preview.id == "preview"
    assert preview.innerHTML == "<p>a</p>"
    assert doc.getElementById("missing") is None


def test_from_string_empty_raises_parser_error():
    with pytest.raises(ParserError):
        Document.from_string("")


def test_create_element_is_detached(document):
    el = document.createElement("SPAN")
    assert el.tagName == "SPAN"
    assert el.parentNode is None
    assert el.isConnected is False


def test_append_child_connects(document):
    el = document.createElement("div")
    returned = document.body.appendChild(el)
    assert returned == el
    assert el.parentNode == document.body
    assert el.isConnected is True


# =============================================================================
# innerHTML
# =============================================================================


def test_inner_html_replaces_children_and_text(document):
    el = _attached(document, "lead<p>a</p>mid<p>b</p>tail")
    assert el.innerHTML == "lead<p>a</p>mid<p>b</p>tail"

    el.innerHTML = "<b>x</b>"
    assert el.innerHTML == "<b>x</b>"
    assert [c.tagName for c in el.children] == ["B"]
    assert el.textContent == "x"


def test_inner_html_text_only(document):
    el = _attached(document)
    el.innerHTML = "plain &amp; simple"
    assert el.children == []
    assert el.textContent == "plain & simple"
    assert el.innerHTML == "plain &amp; simple"


def test_inner_html_empty_clears(document):
    el = _attached(document, "<p>a</p>b")
    el.innerHTML = ""
    assert el.innerHTML == ""
    assert el.textContent == ""
    assert el.childElementCount == 0


def test_inner_html_coerces_with_str(document):
    el = _attached(document)
    el.innerHTML = 42
    assert el.innerHTML == "42"


def test_inner_html_keeps_leading_whitespace(document):
    el = _attached(document)
    el.innerHTML = "  <b>x</b>"
    assert el.innerHTML == "  <b>x</b>", f"Got {el.innerHTML!r}"
    assert [c.tagName for c in el.children] == ["B"]

    el.innerHTML = "\n  lead &amp; text<i>y</i>"
    assert el.innerHTML == "\n  lead &amp; text<i>y</i>", f"Got {el.innerHTML!r}"
    assert el.textContent == "\n  lead & texty"


def test_inner_html_whitespace_only(document):
    el = _attached(document, "<p>a</p>")
    el.innerHTML = "\n"
    assert el.innerHTML == "\n", f"Got {el.innerHTML!r}"
    assert el.children == []
    assert el.textContent == "\n"


def test_fragment_parsed_in_body_context(document):
    """Table rows survive on a <div> here; a browser would drop them."""
    el = _attached(document)
    el.innerHTML = "<tr><td>1</td></tr>"
    assert el.textContent == "1"
    assert [c.tagName for c in el.children] == ["TR"]


def test_replaced_descendants_are_detached(document):
    el = _attached(document, "<span>one</span><em>two</em>")
    old = el.children
    el.innerHTML = "<p>new</p>"
    for child in old:
        assert child.parentNode is None
        assert child.isConnected is False


def test_script_markup_is_inert(document):
    el = _attached(document)
    el.innerHTML = "<script>document.title = 'x'</script><p>ok</p>"
    assert [c.tagName for c in el.children] == ["SCRIPT", "P"]


def test_detached_element_accepts_inner_html(document):
    el = document.createElement("div")
    el.innerHTML = "<p>floating</p>"
    assert el.innerHTML == "<p>floating</p>"
    assert el.isConnected is False


def test_first_element_child_and_attributes(document):
    el = _attached(document, '<a href="/x" class="link">go</a><i>n</i>')
    first = el.firstElementChild
    assert first.tagName == "A"
    assert first.getAttribute("href") == "/x"
    assert first.getAttribute("missing") is None
    assert _attached(document).firstElementChild is None


def test_comments_are_not_children(document):
    el = _attached(document, "<!-- note --><p>a</p>")
    assert [c.tagName for c in el.children] == ["P"]


# =============================================================================
# REMOVAL
# =============================================================================


def test_remove_keeps_following_text_in_place(document):
    el = _attached(document, "<b>a</b><i>b</i> after")
    italic = el.children[1]
    italic.remove()
    assert el.innerHTML == "<b>a</b> after"
    assert italic.parentNode is None
    assert italic.innerHTML == "b"


def test_remove_detached_is_noop(document):
    el = document.createElement("div")
    el.remove()
    assert el.parentNode is None


def test_wrappers_compare_by_element(document):
    el = _attached(document, "<p>a</p>")
    assert el.children[0] == el.children[0]
    assert len({el.children[0], el.children[0]}) == 1
    assert el.children[0] != el
    assert isinstance(el.children[0], Element)
