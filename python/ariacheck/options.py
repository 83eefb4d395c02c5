from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, TypeVar

from .types import ConfigError


DEFAULT_LINK_DENYLIST = (
    "click here", "here", "click", "read more", "learn more", "more",
    "link", "this link", "this", "this page", "page", "go",
)
DEFAULT_REDUNDANT_ALT_WORDS = ("image", "photo", "photograph", "picture", "graphic", "icon", "logo", "img")

T = TypeVar("T")


def _from_mapping(cls: type[T], data: Mapping[str, Any] | None, section: str) -> T:
    if not data:
        return cls()
    known = {f.name for f in fields(cls)}
    values: dict[str, Any] = {}
    for key, value in data.items():
        name = str(key).replace("-", "_")
        if name not in known:
            raise ConfigError(f"Unknown option {key!r} in [{section}]")
        if isinstance(value, list):
            value = tuple(value)
        values[name] = value
    try:
        return cls(**values)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid [{section}] options: {e}") from e


@dataclass(frozen=True)
class ImageAltOptions:
    """Decorative-image policy; images only escape ``image-alt`` when the policy is enabled."""

    allow_missing_alt_on_decorative: bool = False
    require_aria_hidden: bool = False
    require_role_presentation: bool = False
    marker_attributes: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ImageAltOptions:
        return _from_mapping(cls, data, "image_alt")


@dataclass(frozen=True)
class LinkTextOptions:
    words: tuple[str, ...] = DEFAULT_LINK_DENYLIST
    case_insensitive: bool = True
    allowlist_patterns: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> LinkTextOptions:
        return _from_mapping(cls, data, "link_text")


@dataclass(frozen=True)
class HeadingOrderOptions:
    allow_same_level: bool = True
    max_skip: int = 1

    def __post_init__(self) -> None:
        if int(self.max_skip) < 1:
            raise ValueError(f"max_skip must be at least 1, got {self.max_skip!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> HeadingOrderOptions:
        return _from_mapping(cls, data, "heading_order")


@dataclass(frozen=True)
class RedundantAltOptions:
    words: tuple[str, ...] = DEFAULT_REDUNDANT_ALT_WORDS

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> RedundantAltOptions:
        return _from_mapping(cls, data, "redundant_alt")


@dataclass(frozen=True)
class NoninteractiveTabindexOptions:
    """Tags and roles that may sit in the tab order without an interactive role."""

    tags: tuple[str, ...] = ()
    roles: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> NoninteractiveTabindexOptions:
        return _from_mapping(cls, data, "noninteractive_tabindex")


@dataclass(frozen=True)
class EngineOptions:
    image_alt: ImageAltOptions = field(default_factory=ImageAltOptions)
    link_text: LinkTextOptions = field(default_factory=LinkTextOptions)
    heading_order: HeadingOrderOptions = field(default_factory=HeadingOrderOptions)
    redundant_alt: RedundantAltOptions = field(default_factory=RedundantAltOptions)
    noninteractive_tabindex: NoninteractiveTabindexOptions = field(default_factory=NoninteractiveTabindexOptions)
    disabled_checks: frozenset[str] = frozenset()

    def disable(self, *check_ids: str) -> EngineOptions:
        return replace(self, disabled_checks=self.disabled_checks | frozenset(check_ids))

    def is_enabled(self, check_id: str) -> bool:
        return check_id not in self.disabled_checks
