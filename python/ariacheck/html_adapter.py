from __future__ import annotations

import re
from html.parser import HTMLParser
from pathlib import Path

from .tree import VOID_TAGS, Dynamic, Element


_MUSTACHE = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)
_BOUND_PREFIXES = ("v-bind:", ":")

_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "details", "div", "dl", "fieldset",
        "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr",
        "main", "nav", "ol", "p", "pre", "section", "table", "ul",
    }
)
# Opening the key tag implicitly closes an open element of any tag in the value.
_IMPLIED_END = {
    "li": frozenset({"li"}),
    "option": frozenset({"option"}),
    "dt": frozenset({"dt", "dd"}),
    "dd": frozenset({"dt", "dd"}),
    "tr": frozenset({"tr", "td", "th"}),
    "td": frozenset({"td", "th"}),
    "th": frozenset({"td", "th"}),
    "thead": frozenset({"tbody", "tfoot", "tr", "td", "th"}),
    "tbody": frozenset({"thead", "tbody", "tr", "td", "th"}),
    "tfoot": frozenset({"thead", "tbody", "tr", "td", "th"}),
}


def _attr_value(value: str | None) -> str | Dynamic:
    text = value or ""
    stripped = text.strip()
    if len(stripped) >= 2 and stripped.startswith("{") and stripped.endswith("}") and not stripped.startswith("{{"):
        return Dynamic(stripped[1:-1].strip())
    if _MUSTACHE.search(text):
        return Dynamic(text)
    return text


def _attributes(attrs_in: list[tuple[str, str | None]]) -> dict[str, str | Dynamic]:
    attrs: dict[str, str | Dynamic] = {}
    for key, value in attrs_in:
        name = key.lower()
        bound = False
        for prefix in _BOUND_PREFIXES:
            if name.startswith(prefix) and len(name) > len(prefix):
                name = name[len(prefix):]
                bound = True
                break
        attrs[name] = Dynamic((value or "").strip()) if bound else _attr_value(value)
    return attrs


def _text_pieces(data: str) -> list[str | Dynamic]:
    pieces: list[str | Dynamic] = []
    pos = 0
    for match in _MUSTACHE.finditer(data):
        if match.start() > pos:
            pieces.append(data[pos:match.start()])
        pieces.append(Dynamic(match.group(1).strip()))
        pos = match.end()
    if pos < len(data):
        pieces.append(data[pos:])
    return pieces


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.roots: list[Element] = []
        self.stack: list[Element] = []

    def handle_starttag(self, tag: str, attrs_in: list[tuple[str, str | None]]) -> None:
        t = tag.lower()
        self._close_implied(t)
        node = self._open(t, attrs_in)
        if t not in VOID_TAGS:
            self.stack.append(node)

    def handle_startendtag(self, tag: str, attrs_in: list[tuple[str, str | None]]) -> None:
        t = tag.lower()
        self._close_implied(t)
        self._open(t, attrs_in)

    def handle_endtag(self, tag: str) -> None:
        t = tag.lower()
        for idx in range(len(self.stack) - 1, -1, -1):
            if self.stack[idx].tag == t:
                del self.stack[idx:]
                return

    def handle_data(self, data: str) -> None:
        if not self.stack:
            return
        parent = self.stack[-1]
        for piece in _text_pieces(data):
            parent.append(piece)

    def _open(self, tag: str, attrs_in: list[tuple[str, str | None]]) -> Element:
        node = Element(tag=tag, attributes=_attributes(attrs_in))
        if self.stack:
            self.stack[-1].append(node)
        else:
            self.roots.append(node)
        return node

    def _close_implied(self, tag: str) -> None:
        if not self.stack:
            return
        closes = _IMPLIED_END.get(tag)
        if closes is not None:
            while self.stack and self.stack[-1].tag in closes:
                self.stack.pop()
        elif tag in _BLOCK_TAGS and self.stack[-1].tag == "p":
            self.stack.pop()


def parse_html(text: str) -> list[Element]:
    """Parse HTML (or a Vue-style template) into root elements.

    Bound attributes (``:alt``, ``v-bind:alt``), attribute values wrapped in
    ``{...}`` and values or text containing ``{{...}}`` become :class:`Dynamic`.
    """
    builder = _TreeBuilder()
    builder.feed(text)
    builder.close()
    return builder.roots


def parse_html_file(path: str | Path) -> list[Element]:
    return parse_html(Path(path).read_text(encoding="utf-8"))
