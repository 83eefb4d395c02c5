from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Any, Iterator

from .types import InvalidTreeError


VOID_TAGS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)


@dataclass(frozen=True)
class Dynamic:
    """A value that is only known at runtime (a template binding or expression)."""

    expression: str = ""

    def __str__(self) -> str:
        return "{" + self.expression + "}"


def normalize_tag(tag: Any) -> str:
    return str(tag).strip().lower()


def _normalize_attr_value(value: Any) -> str | Dynamic:
    if isinstance(value, Dynamic):
        return value
    if value is True:
        return ""
    return str(value)


@dataclass(eq=False)
class Element:
    tag: str
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list[Any] = field(default_factory=list)
    parent: Element | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.tag = normalize_tag(self.tag)
        if not self.tag:
            raise InvalidTreeError("Element tag must not be empty")
        self.attributes = {
            str(name).strip().lower(): _normalize_attr_value(value)
            for name, value in dict(self.attributes).items()
            if value is not None and value is not False
        }
        pending = list(self.children)
        self.children = []
        for child in pending:
            self.append(child)

    def append(self, child: Any) -> None:
        if child is None:
            return
        if isinstance(child, Element):
            if child.parent is not None:
                raise InvalidTreeError(f"<{child.tag}> is already attached to <{child.parent.tag}>")
            if child is self or any(anc is child for anc in self.ancestors()):
                raise InvalidTreeError(f"Attaching <{child.tag}> would create a cycle")
            child.parent = self
            self.children.append(child)
        elif isinstance(child, (str, Dynamic)):
            self.children.append(child)
        else:
            self.children.append(str(child))

    @property
    def id(self) -> str | None:
        value = self.attributes.get("id")
        if value is None or isinstance(value, Dynamic):
            return None
        text = value.strip()
        return text or None

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name.lower(), default)

    def has(self, name: str) -> bool:
        return name.lower() in self.attributes

    def text_attr(self, name: str) -> str | None:
        """Trimmed static attribute value; ``None`` when absent or dynamic."""
        value = self.attributes.get(name.lower())
        if value is None or isinstance(value, Dynamic):
            return None
        return value.strip()

    def is_dynamic(self, name: str) -> bool:
        return isinstance(self.attributes.get(name.lower()), Dynamic)

    @property
    def element_children(self) -> list[Element]:
        return [child for child in self.children if isinstance(child, Element)]

    def iter(self) -> Iterator[Element]:
        """Pre-order walk over this element and its element descendants."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def descendants(self) -> Iterator[Element]:
        it = self.iter()
        next(it)
        yield from it

    def ancestors(self) -> Iterator[Element]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def root(self) -> Element:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def has_dynamic_children(self) -> bool:
        return any(isinstance(child, Dynamic) for child in self.children)


def el(tag: str, *children: Any, **props: Any) -> Element:
    flat: list[Any] = []
    for child in children:
        if child is None:
            continue
        if isinstance(child, (list, tuple)):
            flat.extend(x for x in child if x is not None)
        else:
            flat.append(child)
    attributes = {_normalize_attr_name(key): value for key, value in props.items()}
    return Element(tag=tag, attributes=attributes, children=flat)


def _normalize_attr_name(name: str) -> str:
    if name == "class_name":
        return "class"
    if name == "html_for":
        return "for"
    return name.replace("_", "-")


def _render_attrs(attributes: dict[str, Any]) -> str:
    parts: list[str] = []
    for attr, value in attributes.items():
        if isinstance(value, Dynamic):
            parts.append(f':{attr}="{escape(value.expression, quote=True)}"')
        elif value == "":
            parts.append(attr)
        else:
            parts.append(f'{attr}="{escape(value, quote=True)}"')
    return (" " + " ".join(parts)) if parts else ""


def render_node(node: Any, *, max_length: int | None = None) -> str:
    if node is None:
        return ""
    if isinstance(node, Element):
        attrs = _render_attrs(node.attributes)
        if node.tag in VOID_TAGS and not node.children:
            out = f"<{node.tag}{attrs}>"
        else:
            children_html = "".join(render_node(child) for child in node.children)
            out = f"<{node.tag}{attrs}>{children_html}</{node.tag}>"
    elif isinstance(node, Dynamic):
        out = "{{ " + node.expression + " }}"
    else:
        out = escape(str(node))
    if max_length is not None and len(out) > max_length:
        return out[: max(max_length - 3, 0)] + "..."
    return out


def coerce_roots(root_or_roots: Any) -> list[Element]:
    if root_or_roots is None:
        raise InvalidTreeError("Validation root must not be None")
    if isinstance(root_or_roots, Element):
        return [root_or_roots]
    if isinstance(root_or_roots, (list, tuple)):
        roots = list(root_or_roots)
        for idx, item in enumerate(roots):
            if not isinstance(item, Element):
                raise InvalidTreeError(
                    f"Validation roots must be Element instances; item {idx} is {type(item).__name__}"
                )
        return roots
    raise InvalidTreeError(f"Unsupported validation root {type(root_or_roots).__name__}")


def iter_elements(roots: list[Element]) -> Iterator[Element]:
    for root in roots:
        yield from root.iter()


def element_path(element: Element) -> str:
    """XPath-like location such as ``/main[1]/h3[1]``, counted among element siblings."""
    steps: list[str] = []
    node: Element | None = element
    while node is not None:
        if node.parent is None:
            steps.append(f"{node.tag}[1]")
        else:
            idx = 0
            for sibling in node.parent.children:
                if isinstance(sibling, Element):
                    idx += 1
                    if sibling is node:
                        break
            steps.append(f"{node.tag}[{idx}]")
        node = node.parent
    return "/" + "/".join(reversed(steps))
