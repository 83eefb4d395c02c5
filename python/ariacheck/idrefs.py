from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .tree import Dynamic, Element, coerce_roots, element_path, iter_elements
from .types import Violation


IDREF_ATTRIBUTES = (
    "aria-labelledby",
    "aria-describedby",
    "aria-controls",
    "aria-owns",
    "aria-activedescendant",
    "aria-flowto",
    "aria-errormessage",
    "aria-details",
)


@dataclass(frozen=True)
class IdRegistry:
    counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    first: Mapping[str, Element] = field(default_factory=lambda: MappingProxyType({}), repr=False)
    dynamic_ids: int = 0

    def __contains__(self, value: object) -> bool:
        return value in self.counts

    def __iter__(self) -> Iterator[str]:
        return iter(self.counts)

    def __len__(self) -> int:
        return len(self.counts)

    def count(self, value: str) -> int:
        return self.counts.get(value, 0)

    def get(self, value: str) -> Element | None:
        return self.first.get(value)

    @property
    def has_dynamic_ids(self) -> bool:
        return self.dynamic_ids > 0

    @property
    def duplicates(self) -> list[str]:
        return [value for value, n in self.counts.items() if n > 1]


def build_registry(roots: Any) -> IdRegistry:
    counts: dict[str, int] = {}
    first: dict[str, Element] = {}
    dynamic = 0
    for node in iter_elements(coerce_roots(roots)):
        if node.is_dynamic("id"):
            dynamic += 1
            continue
        node_id = node.id
        if node_id is None:
            continue
        counts[node_id] = counts.get(node_id, 0) + 1
        first.setdefault(node_id, node)
    return IdRegistry(counts=MappingProxyType(counts), first=MappingProxyType(first), dynamic_ids=dynamic)


def id_tokens(value: Any) -> list[str]:
    if value is None or isinstance(value, Dynamic):
        return []
    return [tok for tok in str(value).split() if tok]


def validate_id_refs(
    property_name: str,
    value: Any,
    registry: IdRegistry,
    element: Element | None = None,
) -> list[Violation]:
    """Report static id tokens that match no element in ``registry``.

    When the scope holds elements with runtime ids, an unmatched token may
    still resolve, so it is reported as ``aria-unverified-id-reference``.
    """
    if isinstance(value, Dynamic):
        return []
    name = property_name.strip().lower()
    path = element_path(element) if element is not None else None
    out: list[Violation] = []
    reported: set[str] = set()
    for token in id_tokens(value):
        if token in registry or token in reported:
            continue
        reported.add(token)
        if registry.has_dynamic_ids:
            out.append(
                Violation(
                    id="aria-unverified-id-reference",
                    description=f"{name} references id {token!r}, which only a runtime id could provide.",
                    impact="minor",
                    element=element,
                    data={"attribute": name, "id": token},
                    path=path,
                )
            )
            continue
        out.append(
            Violation(
                id="aria-invalid-id-reference",
                description=f"{name} references missing id {token!r}.",
                impact="serious",
                element=element,
                data={"attribute": name, "id": token},
                path=path,
            )
        )
    return out


def check_duplicate_ids(root: Any, registry: IdRegistry | None = None) -> list[Violation]:
    roots = coerce_roots(root)
    if registry is None:
        registry = build_registry(roots)
    if not registry.duplicates:
        return []
    seen: dict[str, str] = {}
    out: list[Violation] = []
    for node in iter_elements(roots):
        node_id = node.id
        if node_id is None or registry.count(node_id) < 2:
            continue
        path = element_path(node)
        if node_id not in seen:
            seen[node_id] = path
            continue
        out.append(
            Violation(
                id="duplicate-id",
                description=f"Duplicate id {node_id!r}.",
                impact="serious",
                element=node,
                data={"id": node_id, "first_seen_path": seen[node_id]},
                path=path,
            )
        )
    return out
