"""Configuration parsing from ``.coverhtml.yml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from coverhtml.errors import CoverHTMLError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".coverhtml.yml"


@dataclass
class ReportConfig:
    """Report page settings."""

    title: str = "Coverage Report"
    """Page title."""

    language: str = ""
    """Syntax-highlighting tag forced for every file (empty = by extension)."""

    open_browser: bool = True
    """Open temporary reports in a browser."""


@dataclass
class SourcesConfig:
    """Where profile file names are resolved."""

    module_root: str = "."
    """Directory holding the main module's ``go.mod``."""

    search_roots: list[str] = field(default_factory=list)
    """Extra directories tried before the Go lookup."""


@dataclass
class AssetsConfig:
    """Additional assets inlined after the bundled ones."""

    stylesheets: list[str] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)


@dataclass
class CoverHTMLConfig:
    """Complete coverhtml configuration."""

    base_dir: str = "."
    """Directory relative paths in the config are resolved against."""

    report: ReportConfig = field(default_factory=ReportConfig)
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    assets: AssetsConfig = field(default_factory=AssetsConfig)

    raw: dict[str, Any] = field(default_factory=dict)
    """The raw parsed YAML."""

    def resolve_path(self, value: str) -> Path:
        """Resolve a configured path against the config's directory."""
        path = Path(value).expanduser()
        if path.is_absolute():
            return path
        return (Path(self.base_dir) / path).resolve()

    @property
    def module_root(self) -> Path:
        return self.resolve_path(self.sources.module_root)

    @property
    def search_roots(self) -> list[Path]:
        return [self.resolve_path(p) for p in self.sources.search_roots]

    @property
    def asset_files(self) -> list[Path]:
        return [self.resolve_path(p) for p in [*self.assets.stylesheets, *self.assets.scripts]]


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    return value if isinstance(value, dict) else {}


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def load_config(path: str | Path | None = None) -> CoverHTMLConfig:
    """Load ``.coverhtml.yml``.

    Args:
        path: Config file, or a directory containing ``.coverhtml.yml``.
            Defaults to the current directory. A missing file yields defaults.

    Raises:
        CoverHTMLError: If the file exists but is not valid YAML.
    """
    target = Path(path) if path is not None else Path.cwd()
    config_file = target / CONFIG_FILE_NAME if target.is_dir() else target
    base_dir = config_file.parent.resolve()

    raw: dict[str, Any] = {}
    if config_file.is_file():
        try:
            parsed = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise CoverHTMLError(f"invalid configuration in {config_file}: {e}") from e
        if isinstance(parsed, dict):
            raw = parsed
        logger.debug("Loaded configuration from %s", config_file)
    else:
        logger.debug("No configuration at %s, using defaults", config_file)

    report_raw = _section(raw, "report")
    report = ReportConfig(
        title=str(report_raw.get("title", ReportConfig.title)),
        language=str(report_raw.get("language", "") or ""),
        open_browser=bool(report_raw.get("open_browser", True)),
    )

    sources_raw = _section(raw, "sources")
    sources = SourcesConfig(
        module_root=str(sources_raw.get("module_root", ".")),
        search_roots=_str_list(sources_raw.get("search_roots", [])),
    )

    assets_raw = _section(raw, "assets")
    assets = AssetsConfig(
        stylesheets=_str_list(assets_raw.get("stylesheets", [])),
        scripts=_str_list(assets_raw.get("scripts", [])),
    )

    return CoverHTMLConfig(
        base_dir=str(base_dir),
        report=report,
        sources=sources,
        assets=assets,
        raw=raw,
    )


def validate_config(config: CoverHTMLConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []

    if not config.report.title.strip():
        errors.append("report.title must not be empty")

    if not config.module_root.is_dir():
        errors.append(f"sources.module_root {config.module_root} is not a directory")

    errors.extend(
        f"sources.search_roots entry {root} is not a directory"
        for root in config.search_roots
        if not root.is_dir()
    )

    for key, values, suffix in (
        ("assets.stylesheets", config.assets.stylesheets, ".css"),
        ("assets.scripts", config.assets.scripts, ".js"),
    ):
        for value in values:
            path = config.resolve_path(value)
            if not path.is_file():
                errors.append(f"{key} entry {path} does not exist")
            elif path.suffix != suffix:
                errors.append(f"{key} entry {path} must end in {suffix}")

    return errors
