from __future__ import annotations

import logging
import warnings
from typing import Any

from .checks import CHECKS, CheckContext
from .idrefs import IdRegistry, build_registry
from .options import EngineOptions
from .tree import coerce_roots
from .types import A11yValidationError, A11yWarning, CheckResult, Violation


logger = logging.getLogger(__name__)

BLOCKING_IMPACTS = frozenset({"critical", "serious"})


def _normalize_mode(mode: str | None) -> str | None:
    normalized = None if mode is None else str(mode).strip().lower()
    if normalized not in {None, "", "warn", "raise"}:
        raise ValueError(f"Unsupported a11y validation mode {mode!r}")
    return normalized or None


class A11yEngine:
    """Runs the full check battery over a tree, in declaration order."""

    def __init__(self, options: EngineOptions | None = None) -> None:
        self.options = options or EngineOptions()

    def check(
        self,
        root_or_roots: Any,
        *,
        registry: IdRegistry | None = None,
        mode: str | None = None,
    ) -> CheckResult:
        normalized_mode = _normalize_mode(mode)
        roots = coerce_roots(root_or_roots)
        if registry is None:
            registry = build_registry(roots)
        context = CheckContext(registry=registry, options=self.options)

        violations: list[Violation] = []
        for definition in CHECKS:
            if not self.options.is_enabled(definition.name):
                continue
            found = definition.func(roots, context)
            violations.extend(v for v in found if self.options.is_enabled(v.id))
        result = CheckResult(violations=tuple(violations))
        logger.debug(
            "checked %d root(s), %d ids, %d violation(s)",
            len(roots),
            len(registry),
            len(result.violations),
        )

        if normalized_mode == "warn":
            for v in result.violations:
                warnings.warn(
                    f"[{v.impact}] {v.id}: {v.description} ({v.path})",
                    A11yWarning,
                    stacklevel=2,
                )
        if normalized_mode == "raise":
            blocking = [v for v in result.violations if v.impact in BLOCKING_IMPACTS]
            if blocking:
                raise A11yValidationError(
                    f"Accessibility validation failed with {len(blocking)} critical/serious violation(s)",
                    result,
                )
        return result


def check(
    root_or_roots: Any,
    *,
    registry: IdRegistry | None = None,
    options: EngineOptions | None = None,
    mode: str | None = None,
) -> CheckResult:
    return A11yEngine(options).check(root_or_roots, registry=registry, mode=mode)
