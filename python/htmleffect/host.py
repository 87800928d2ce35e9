"""
host.py - lxml-backed display tree with a DOM-shaped surface.

Outside the browser there is no DOM, so this module gives set_inner_html()
something to write to. Document and Element wrap lxml.html elements and expose
the small subset of the DOM the rest of the project touches, using the DOM's
own names so the same code runs against pyscript.document and against this
tree.

The innerHTML setter follows the browser's replacement rules:
- every existing child and text node of the target is discarded
- the markup is parsed as an HTML fragment and becomes the new content
- nothing in the markup is executed (<script> is just an element here)
- detached elements accept the assignment exactly like attached ones
- leading whitespace is kept as text, as the browser keeps it

Fragment parsing always happens in <body> context, not in the context of the
target element. Markup that depends on its parent (a bare <tr> set on a
<div>, say) keeps elements a browser would drop.
"""

from __future__ import annotations

import html
from typing import List, Optional

from lxml import html as lxml_html
from lxml.html import HtmlElement

_BLANK_DOCUMENT = "<html><head></head><body></body></html>"


class Element:
    """DOM-style view of one lxml element."""

    __slots__ = ("_el", "_owner")

    def __init__(self, el: HtmlElement, owner: Optional["Document"] = None):
        self._el = el
        self._owner = owner

    def __eq__(self, other) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self._el is other._el

    def __hash__(self) -> int:
        return id(self._el)

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<Element {self.tagName}{ident}>"

    def _wrap(self, el: Optional[HtmlElement]) -> Optional["Element"]:
        if el is None:
            return None
        return Element(el, self._owner)

    @property
    def lxml(self) -> HtmlElement:
        """The underlying lxml element."""
        return self._el

    @property
    def tagName(self) -> str:
        return str(self._el.tag).upper()

    @property
    def id(self) -> str:
        return self._el.get("id", "")

    def getAttribute(self, name: str) -> Optional[str]:
        return self._el.get(name)

    @property
    def innerHTML(self) -> str:
        parts = [html.escape(self._el.text, quote=False)] if self._el.text else []
        parts.extend(
            lxml_html.tostring(child, encoding="unicode") for child in self._el
        )
        return "".join(parts)

    @innerHTML.setter
    def innerHTML(self, markup) -> None:
        markup = str(markup)
        for child in list(self._el):
            self._el.remove(child)
        self._el.text = None
        if not markup:
            return

        # fragments_fromstring() drops whitespace-only leading text.
        stripped = markup.lstrip()
        lead = markup[: len(markup) - len(stripped)]
        fragments = lxml_html.fragments_fromstring(stripped) if stripped else []
        if fragments and isinstance(fragments[0], str):
            lead += fragments.pop(0)
        self._el.text = lead or None
        self._el.extend(fragments)

    @property
    def textContent(self) -> str:
        return self._el.text_content()

    @property
    def children(self) -> List["Element"]:
        # Comments and processing instructions have a non-string tag.
        return [
            Element(child, self._owner)
            for child in self._el
            if isinstance(child.tag, str)
        ]

    @property
    def childElementCount(self) -> int:
        return len(self.children)

    @property
    def firstElementChild(self) -> Optional["Element"]:
        children = self.children
        return children[0] if children else None

    @property
    def parentNode(self) -> Optional["Element"]:
        return self._wrap(self._el.getparent())

    @property
    def isConnected(self) -> bool:
        if self._owner is None:
            return False
        # getroottree() reports the owning document even for unlinked nodes,
        # so walk the parents instead.
        node = self._el
        while node.getparent() is not None:
            node = node.getparent()
        return node is self._owner.root

    def appendChild(self, child: "Element") -> "Element":
        if child.parentNode is not None:
            child.remove()
        self._el.append(child._el)
        return child

    def remove(self) -> None:
        if self._el.getparent() is None:
            return
        # drop_tree() hands our tail text to the previous sibling or parent,
        # which is where the DOM keeps it.
        self._el.drop_tree()
        self._el.tail = None


class Document:
    """DOM-style view of an lxml HTML document."""

    def __init__(self, root: HtmlElement):
        self.root = root

    @classmethod
    def from_string(cls, markup: str) -> "Document":
        return cls(lxml_html.document_fromstring(markup))

    @classmethod
    def blank(cls) -> "Document":
        return cls.from_string(_BLANK_DOCUMENT)

    def _wrap(self, el: Optional[HtmlElement]) -> Optional[Element]:
        if el is None:
            return None
        return Element(el, self)

    @property
    def body(self) -> Element:
        return self._wrap(self.root.body)

    @property
    def html(self) -> str:
        return lxml_html.tostring(self.root, encoding="unicode")

    def getElementById(self, element_id: str) -> Optional[Element]:
        matches = self.root.xpath("//*[@id=$ident]", ident=element_id)
        return self._wrap(matches[0]) if matches else None

    def createElement(self, tag: str) -> Element:
        return self._wrap(self.root.makeelement(tag.lower()))
