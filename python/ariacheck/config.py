# SPDX-License-Identifier: AGPL-3.0-only
from pathlib import Path
from typing import Dict, List, Optional, Any
try:
    import tomllib
except ImportError:
    import tomli as tomllib

from .options import (
    EngineOptions,
    HeadingOrderOptions,
    ImageAltOptions,
    LinkTextOptions,
    NoninteractiveTabindexOptions,
    RedundantAltOptions,
)
from .types import IMPACTS, ConfigError

CONFIG_FILENAME = "ariacheck.toml"

# Default configuration structure
DEFAULT_CONFIG = {
    "checks": {
        "disabled": [],  # check names or violation ids
    },
    "image_alt": {},
    "link_text": {},
    "heading_order": {},
    "redundant_alt": {},
    "noninteractive_tabindex": {},
    "report": {
        "fail_on": "serious",
    },
    "files": {
        "include": ["**/*.html", "**/*.htm", "**/*.vue"],
        "paths": ["."],  # checked when the command line names no files
    },
}

KNOWN_SECTIONS = frozenset(DEFAULT_CONFIG)


class Config:
    def __init__(self, data: Dict[str, Any], path: Optional[Path] = None):
        unknown = sorted(set(data) - KNOWN_SECTIONS)
        if unknown:
            raise ConfigError(f"Unknown config section(s) {', '.join(unknown)} in {path or '<defaults>'}")
        self.data = data
        self.path = path
        self.root = path.parent if path is not None else Path.cwd()

    @classmethod
    def default(cls) -> "Config":
        return cls({})

    @staticmethod
    def discover(start: Optional[Path] = None) -> Optional[Path]:
        """Find ariacheck.toml, or a pyproject.toml carrying [tool.ariacheck], walking up from start."""
        base = (start or Path.cwd()).resolve()
        for directory in (base, *base.parents):
            candidate = directory / CONFIG_FILENAME
            if candidate.is_file():
                return candidate
            pyproject = directory / "pyproject.toml"
            if pyproject.is_file() and "ariacheck" in _read_toml(pyproject).get("tool", {}):
                return pyproject
        return None

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from ariacheck.toml (or [tool.ariacheck] in pyproject.toml)."""
        if path is None:
            path = cls.discover()
            if path is None:
                raise FileNotFoundError(
                    f"No {CONFIG_FILENAME} found in {Path.cwd()} or its parents."
                )
        path = Path(path)
        data = _read_toml(path)
        if path.name == "pyproject.toml":
            data = data.get("tool", {}).get("ariacheck", {})
        return cls(data, path)

    @property
    def checks(self) -> Dict[str, Any]:
        return self.data.get("checks", {})

    @property
    def report(self) -> Dict[str, Any]:
        return self.data.get("report", {})

    @property
    def files(self) -> Dict[str, Any]:
        return self.data.get("files", {})

    def section(self, name: str) -> Dict[str, Any]:
        value = self.data.get(name, {})
        if not isinstance(value, dict):
            raise ConfigError(f"[{name}] must be a table")
        return value

    # Helpers for common fields
    def get_disabled_checks(self) -> List[str]:
        disabled = self.checks.get("disabled", [])
        if isinstance(disabled, str):
            disabled = [disabled]
        return [str(d) for d in disabled]

    def get_fail_on(self) -> str:
        fail_on = str(self.report.get("fail_on", DEFAULT_CONFIG["report"]["fail_on"])).lower()
        if fail_on not in IMPACTS:
            raise ConfigError(f"report.fail_on must be one of {', '.join(IMPACTS)}, got {fail_on!r}")
        return fail_on

    def get_include_patterns(self) -> List[str]:
        include = self.files.get("include", DEFAULT_CONFIG["files"]["include"])
        if isinstance(include, str):
            include = [include]
        return list(include)

    def resolve_path(self, relative_path: str) -> Path:
        return self.root / relative_path

    def get_check_paths(self) -> List[Path]:
        paths = self.files.get("paths", DEFAULT_CONFIG["files"]["paths"])
        if isinstance(paths, str):
            paths = [paths]
        return [self.resolve_path(str(p)) for p in paths]

    def engine_options(self) -> EngineOptions:
        return EngineOptions(
            image_alt=ImageAltOptions.from_mapping(self.section("image_alt")),
            link_text=LinkTextOptions.from_mapping(self.section("link_text")),
            heading_order=HeadingOrderOptions.from_mapping(self.section("heading_order")),
            redundant_alt=RedundantAltOptions.from_mapping(self.section("redundant_alt")),
            noninteractive_tabindex=NoninteractiveTabindexOptions.from_mapping(
                self.section("noninteractive_tabindex")
            ),
            disabled_checks=frozenset(self.get_disabled_checks()),
        )


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e
