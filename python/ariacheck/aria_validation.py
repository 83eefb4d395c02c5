from __future__ import annotations

import math
from typing import Any

from .aria_spec import (
    PropertyDefinition,
    discouraged_properties,
    has_strong_native_semantics,
    implicit_role_of,
    lookup_property,
    lookup_role,
)
from .idrefs import IDREF_ATTRIBUTES, IdRegistry, build_registry, validate_id_refs
from .tree import Dynamic, Element, element_path
from .types import Violation


PRESENTATIONAL_ROLES = frozenset({"presentation", "none"})
_TRISTATE_VALUES = ("true", "false", "mixed")


def first_role_token(value: Any) -> str | None:
    """First token of a role fallback list; ``None`` when absent, blank or dynamic."""
    if value is None or isinstance(value, Dynamic):
        return None
    tokens = str(value).split()
    return tokens[0].lower() if tokens else None


def input_type_of(element: Element) -> str | None:
    if element.tag != "input":
        return None
    return (element.text_attr("type") or "text").lower()


def implicit_role_for(element: Element) -> str | None:
    tag = element.tag
    if tag in {"a", "area"} and not element.has("href"):
        return None
    if tag == "select" and (element.has("multiple") or _int_or_none(element.text_attr("size")) not in {None, 0, 1}):
        return "listbox"
    return implicit_role_of(tag, input_type_of(element))


def resolved_role(element: Element) -> str | None:
    """Explicit first role token, falling back to the implicit role."""
    value = element.attributes.get("role")
    if isinstance(value, Dynamic):
        return None
    explicit = first_role_token(value)
    if explicit is not None:
        return explicit
    return implicit_role_for(element)


def _int_or_none(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _violation(code: str, impact: str, message: str, element: Element | None, **data: Any) -> Violation:
    return Violation(
        id=code,
        description=message,
        impact=impact,
        element=element,
        data=data,
        path=element_path(element) if element is not None else None,
    )


def _nearest_context_role(element: Element) -> tuple[bool, str | None]:
    """(known, role) of the nearest ancestor carrying a role; unknown when dynamic."""
    for ancestor in element.ancestors():
        if isinstance(ancestor.attributes.get("role"), Dynamic):
            return False, None
        role = resolved_role(ancestor)
        if role is None or role in PRESENTATIONAL_ROLES or role == "generic":
            continue
        return True, role
    return True, None


def _owned_roles(element: Element) -> tuple[bool, set[str]]:
    """(known, roles) of the elements ``element`` owns, looking through roleless wrappers."""
    if element.has("aria-owns") or str(element.attributes.get("aria-busy", "")).strip().lower() == "true":
        return False, set()
    roles: set[str] = set()
    pending = list(element.children)
    while pending:
        child = pending.pop()
        if isinstance(child, Dynamic):
            return False, set()
        if not isinstance(child, Element):
            continue
        if isinstance(child.attributes.get("role"), Dynamic):
            return False, set()
        role = resolved_role(child)
        if role is None or role in PRESENTATIONAL_ROLES or role == "generic":
            pending.extend(child.children)
        else:
            roles.add(role)
    return True, roles


def validate_role(
    role: Any,
    tag: str,
    element: Element | None = None,
    input_type: str | None = None,
) -> list[Violation]:
    name = first_role_token(role)
    if name is None:
        return []
    tag = tag.strip().lower()
    if input_type is None and element is not None:
        input_type = input_type_of(element)

    role_def = lookup_role(name)
    if role_def is None:
        return [
            _violation("aria-invalid-role", "critical", f'Invalid ARIA role: "{name}".', element, role=name)
        ]

    out: list[Violation] = []
    if role_def.deprecated:
        out.append(
            _violation("aria-deprecated-role", "minor", f'ARIA role "{name}" is deprecated.', element, role=name)
        )
    if role_def.abstract:
        out.append(
            _violation(
                "aria-abstract-role",
                "minor",
                f'ARIA role "{name}" is abstract and must not be used by authors.',
                element,
                role=name,
            )
        )
        return out

    if not role_def.allows_tag(tag):
        out.append(
            _violation(
                "aria-role-on-wrong-element",
                "moderate",
                f'ARIA role "{name}" is not allowed on <{tag}>.',
                element,
                role=name,
                tag=tag,
            )
        )

    if role_def.required_context and element is not None:
        known, context = _nearest_context_role(element)
        if known and context not in role_def.required_context:
            expected = ", ".join(sorted(role_def.required_context))
            out.append(
                _violation(
                    "aria-missing-context-role",
                    "serious",
                    f'ARIA role "{name}" must be contained by an element with role {expected}.',
                    element,
                    role=name,
                    context=context,
                    expected=sorted(role_def.required_context),
                )
            )

    implicit = implicit_role_for(element) if element is not None else implicit_role_of(tag, input_type)
    if implicit == name:
        out.append(
            _violation(
                "aria-redundant-role",
                "minor",
                f'Redundant role: <{tag}> already has implicit role "{name}".',
                element,
                role=name,
            )
        )
    elif has_strong_native_semantics(tag) and _conflicts(name, tag, element):
        out.append(
            _violation(
                "aria-conflicting-semantics",
                "serious",
                f'ARIA role "{name}" conflicts with the native semantics of <{tag}>.',
                element,
                role=name,
                implicit_role=implicit,
            )
        )

    if role_def.required_properties and element is not None and implicit != name:
        if not any(element.has(prop) for prop in role_def.required_properties):
            required = " or ".join(role_def.required_properties)
            out.append(
                _violation(
                    "aria-missing-required-property",
                    "critical",
                    f'ARIA role "{name}" requires {required}.',
                    element,
                    role=name,
                    required=list(role_def.required_properties),
                )
            )

    if role_def.required_owned and element is not None and implicit != name:
        known, owned = _owned_roles(element)
        if known and not owned & role_def.required_owned:
            expected = ", ".join(sorted(role_def.required_owned))
            out.append(
                _violation(
                    "aria-missing-required-children",
                    "critical",
                    f'ARIA role "{name}" must own an element with role {expected}.',
                    element,
                    role=name,
                    expected=sorted(role_def.required_owned),
                )
            )
    return out


def _conflicts(name: str, tag: str, element: Element | None) -> bool:
    """Any role other than the implicit one overrides a strong native element."""
    if element is not None and tag in {"a", "area"} and not element.has("href"):
        return False
    if name in PRESENTATIONAL_ROLES and tag == "img":
        return element is not None and element.attributes.get("alt") != ""
    return True


def _value_error(prop: PropertyDefinition, value: str) -> str | None:
    text = value.strip()
    kind = prop.kind
    if prop.type == "boolean":
        if value not in {"true", "false"}:
            return f'ARIA {kind} "{prop.name}" must be "true" or "false".'
    elif prop.type == "tristate":
        if value not in _TRISTATE_VALUES:
            return f'ARIA {kind} "{prop.name}" must be "true", "false" or "mixed".'
    elif prop.type == "enum":
        tokens = text.split() if prop.token_list else [value]
        if not tokens or any(tok not in prop.enum_values for tok in tokens):
            return f'ARIA {kind} "{prop.name}" must be one of: {", ".join(prop.enum_values)}.'
    elif prop.type == "integer":
        try:
            int(text)
        except ValueError:
            return f'ARIA {kind} "{prop.name}" must be an integer.'
    elif prop.type == "number":
        try:
            number = float(text)
        except ValueError:
            return f'ARIA {kind} "{prop.name}" must be a number.'
        if not math.isfinite(number):
            return f'ARIA {kind} "{prop.name}" must be a finite number.'
    return None


def validate_property(
    name: str,
    value: Any,
    tag: str,
    role: Any,
    input_type: str | None = None,
    *,
    element: Element | None = None,
) -> list[Violation]:
    name = name.strip().lower()
    tag = tag.strip().lower()
    prop = lookup_property(name)
    if prop is None:
        return [
            _violation("aria-invalid-property", "serious", f'Invalid ARIA attribute: "{name}".', element, attribute=name)
        ]

    out: list[Violation] = []
    if prop.deprecated:
        out.append(
            _violation(
                "aria-deprecated-property",
                "minor",
                f'ARIA {prop.kind} "{name}" is deprecated.',
                element,
                attribute=name,
            )
        )

    if value is not None and not isinstance(value, Dynamic):
        message = _value_error(prop, str(value))
        if message is not None:
            out.append(
                _violation(
                    "aria-invalid-property-value",
                    "serious",
                    message,
                    element,
                    attribute=name,
                    value=str(value),
                )
            )

    if input_type is None and element is not None:
        input_type = input_type_of(element)
    if name in discouraged_properties(tag, input_type):
        where = f'<{tag} type="{input_type}">' if tag == "input" and input_type else f"<{tag}>"
        out.append(
            _violation(
                "aria-property-discouraged",
                "minor",
                f'ARIA {prop.kind} "{name}" is discouraged on {where}; prefer a visible label.',
                element,
                attribute=name,
            )
        )

    role_name = first_role_token(role)
    role_def = lookup_role(role_name) if role_name else None
    if (
        role_def is not None
        and not role_def.abstract
        and name not in role_def.allowed_properties
        and not prop.is_global
    ):
        out.append(
            _violation(
                "aria-property-not-allowed-with-role",
                "minor",
                f'ARIA {prop.kind} "{name}" is not allowed with role "{role_name}".',
                element,
                attribute=name,
                role=role_name,
            )
        )
    return out


def validate_element_aria(element: Element, registry: IdRegistry | None = None) -> list[Violation]:
    """Role, ``aria-*`` attribute and id-reference validation for one element."""
    tag = element.tag
    input_type = input_type_of(element)
    role_value = element.attributes.get("role")
    out: list[Violation] = []
    if role_value is not None:
        out.extend(validate_role(role_value, tag, element, input_type))

    role = None if isinstance(role_value, Dynamic) else first_role_token(role_value)
    for name, value in element.attributes.items():
        if not name.startswith("aria-"):
            continue
        out.extend(validate_property(name, value, tag, role, input_type, element=element))
        if name in IDREF_ATTRIBUTES:
            if registry is None:
                registry = build_registry(element.root())
            out.extend(validate_id_refs(name, value, registry, element))
    return out
