# SPDX-License-Identifier: AGPL-3.0-only
"""Accessibility semantic validation for markup trees.

The package validates element trees (built with :func:`el` or parsed from
HTML and Vue-style templates with :func:`parse_html`) against a WAI-ARIA 1.2
knowledge base plus HTML accessibility heuristics, and returns violations as
data. :func:`check` runs the full battery; ``mode="warn"`` and
``mode="raise"`` turn the result into warnings or an exception.
"""
from .aria_spec import (
    PropertyDefinition,
    RoleDefinition,
    StateDefinition,
    discouraged_properties,
    implicit_role_of,
    is_global_property,
    lookup_property,
    lookup_role,
    lookup_state,
)
from .aria_validation import validate_element_aria, validate_property, validate_role
from .checks import CHECKS, CheckContext
from .engine import A11yEngine, check
from .html_adapter import parse_html
from .idrefs import IdRegistry, build_registry, check_duplicate_ids, validate_id_refs
from .names import AccessibleName, accessible_name
from .options import (
    EngineOptions,
    HeadingOrderOptions,
    ImageAltOptions,
    LinkTextOptions,
    NoninteractiveTabindexOptions,
    RedundantAltOptions,
)
from .tree import Dynamic, Element, el, render_node
from .types import (
    A11yValidationError,
    A11yWarning,
    CheckResult,
    ConfigError,
    InvalidTreeError,
    Violation,
)

__version__ = "0.1.0"

__all__ = [
    "A11yEngine",
    "A11yValidationError",
    "A11yWarning",
    "AccessibleName",
    "CHECKS",
    "CheckContext",
    "CheckResult",
    "ConfigError",
    "Dynamic",
    "Element",
    "EngineOptions",
    "HeadingOrderOptions",
    "IdRegistry",
    "ImageAltOptions",
    "InvalidTreeError",
    "LinkTextOptions",
    "NoninteractiveTabindexOptions",
    "PropertyDefinition",
    "RedundantAltOptions",
    "RoleDefinition",
    "StateDefinition",
    "Violation",
    "accessible_name",
    "build_registry",
    "check",
    "check_duplicate_ids",
    "discouraged_properties",
    "el",
    "implicit_role_of",
    "is_global_property",
    "lookup_property",
    "lookup_role",
    "lookup_state",
    "parse_html",
    "render_node",
    "validate_element_aria",
    "validate_id_refs",
    "validate_property",
    "validate_role",
]
