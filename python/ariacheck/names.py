"""Best-effort accessible name computation shared by every check.

Precedence, first match wins: ``aria-labelledby``, ``aria-label``, an
associated ``<label>`` (form controls only), text content, ``title``.
A value that is only known at runtime stops the walk and is reported with
``dynamic=True`` so that callers never treat it as a missing name.
"""
from __future__ import annotations

from dataclasses import dataclass

from .idrefs import IdRegistry, build_registry, id_tokens
from .tree import Dynamic, Element


LABELABLE_TAGS = frozenset({"input", "select", "textarea"})
INPUT_BUTTON_TYPES = frozenset({"button", "submit", "reset"})
_DEFAULT_INPUT_LABELS = {"submit": "Submit", "reset": "Reset"}
_NO_TEXT_TAGS = frozenset({"script", "style", "template"})


@dataclass(frozen=True)
class AccessibleName:
    text: str
    source: str
    dynamic: bool = False

    @property
    def present(self) -> bool:
        return self.source != "none"


NO_NAME = AccessibleName("", "none")


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def is_hidden(node: Element) -> bool:
    value = node.attributes.get("aria-hidden")
    return isinstance(value, str) and value.strip().lower() == "true"


def text_content(node: object, *, skip: Element | None = None) -> tuple[str, bool]:
    """Collapsed text of a subtree and whether any part of it is dynamic."""
    chunks: list[str] = []
    dynamic = False

    def visit(item: object) -> None:
        nonlocal dynamic
        if isinstance(item, Dynamic):
            dynamic = True
        elif isinstance(item, str):
            chunks.append(item)
        elif isinstance(item, Element):
            if item is skip or is_hidden(item) or item.tag in _NO_TEXT_TAGS:
                return
            label = item.attributes.get("aria-label")
            if isinstance(label, Dynamic):
                dynamic = True
                return
            if label is not None and label.strip():
                chunks.append(f" {label.strip()} ")
                return
            if item.tag == "img":
                alt = item.attributes.get("alt")
                if isinstance(alt, Dynamic):
                    dynamic = True
                elif alt is not None:
                    chunks.append(f" {alt} ")
                return
            for child in item.children:
                visit(child)

    visit(node)
    return collapse_whitespace("".join(chunks)), dynamic


def _own_text(element: Element) -> tuple[str, bool]:
    if element.tag == "img":
        alt = element.attributes.get("alt")
        if isinstance(alt, Dynamic):
            return "", True
        return collapse_whitespace(alt or ""), False
    if element.tag == "input":
        input_type = (element.text_attr("type") or "text").lower()
        if input_type in INPUT_BUTTON_TYPES:
            value = element.attributes.get("value")
            if isinstance(value, Dynamic):
                return "", True
            if value is not None and value.strip():
                return collapse_whitespace(value), False
            return _DEFAULT_INPUT_LABELS.get(input_type, ""), False
        if input_type == "image":
            alt = element.attributes.get("alt")
            if isinstance(alt, Dynamic):
                return "", True
            return collapse_whitespace(alt or ""), False
        return "", False
    if element.tag in LABELABLE_TAGS:
        return "", False
    chunks: list[str] = []
    dynamic = False
    for child in element.children:
        text, child_dynamic = text_content(child)
        dynamic = dynamic or child_dynamic
        if text:
            chunks.append(text)
    return collapse_whitespace(" ".join(chunks)), dynamic


def _labels_for(element: Element) -> list[Element]:
    labels: list[Element] = []
    control_id = element.id
    if control_id is not None:
        for node in element.root().iter():
            if node.tag == "label" and node.text_attr("for") == control_id:
                labels.append(node)
    for ancestor in element.ancestors():
        if ancestor.tag == "label" and ancestor not in labels:
            labels.append(ancestor)
            break
    return labels


def accessible_name(
    element: Element,
    registry: IdRegistry | None = None,
    *,
    from_content: bool = True,
) -> AccessibleName:
    """Resolve the accessible name of ``element``.

    ``from_content=False`` limits the walk to authored labels (landmarks and
    dialogs are not named by the text they contain).
    """
    attrs = element.attributes

    labelledby = attrs.get("aria-labelledby")
    if isinstance(labelledby, Dynamic):
        return AccessibleName("", "aria-labelledby", dynamic=True)
    tokens = id_tokens(labelledby)
    if tokens:
        if registry is None:
            registry = build_registry(element.root())
        parts: list[str] = []
        dynamic = False
        for token in tokens:
            target = registry.get(token)
            if target is None:
                continue
            text, target_dynamic = text_content(target)
            dynamic = dynamic or target_dynamic
            if text:
                parts.append(text)
        return AccessibleName(collapse_whitespace(" ".join(parts)), "aria-labelledby", dynamic)

    label = attrs.get("aria-label")
    if isinstance(label, Dynamic):
        return AccessibleName("", "aria-label", dynamic=True)
    if label is not None and label.strip():
        return AccessibleName(label.strip(), "aria-label")

    if element.tag in LABELABLE_TAGS:
        for label_el in _labels_for(element):
            text, dynamic = text_content(label_el, skip=element)
            if text or dynamic:
                return AccessibleName(text, "label", dynamic)

    if from_content:
        text, dynamic = _own_text(element)
        if text or dynamic:
            return AccessibleName(text, "text", dynamic)

    title = attrs.get("title")
    if isinstance(title, Dynamic):
        return AccessibleName("", "title", dynamic=True)
    if title is not None and title.strip():
        return AccessibleName(title.strip(), "title")

    return NO_NAME
