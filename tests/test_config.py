"""Tests for config.py: .coverhtml.yml parsing and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from coverhtml.config import (
    CONFIG_FILE_NAME,
    CoverHTMLConfig,
    ReportConfig,
    load_config,
    validate_config,
)
from coverhtml.errors import CoverHTMLError


def _write_config(root: Path, data: dict[str, Any]) -> Path:
    path = root / CONFIG_FILE_NAME
    path.write_text(yaml.dump(data), encoding="utf-8")
    return path


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)
        assert config.report == ReportConfig()
        assert config.report.title == "Coverage Report"
        assert config.module_root == tmp_path.resolve()
        assert config.search_roots == []
        assert config.asset_files == []
        assert config.raw == {}

    def test_full_file(self, tmp_path: Path) -> None:
        _write_config(
            tmp_path,
            {
                "report": {"title": "API coverage", "language": "clike", "open_browser": False},
                "sources": {"module_root": "svc", "search_roots": ["extra", "/abs/root"]},
                "assets": {"stylesheets": ["theme.css"], "scripts": ["prism.js"]},
            },
        )
        config = load_config(tmp_path)
        base = tmp_path.resolve()
        assert config.report.title == "API coverage"
        assert config.report.language == "clike"
        assert config.report.open_browser is False
        assert config.module_root == base / "svc"
        assert config.search_roots == [base / "extra", Path("/abs/root")]
        assert config.asset_files == [base / "theme.css", base / "prism.js"]

    def test_explicit_file_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yml"
        path.write_text("report:\n  title: Custom\n", encoding="utf-8")
        config = load_config(path)
        assert config.report.title == "Custom"
        assert Path(config.base_dir) == tmp_path.resolve()

    def test_non_dict_sections_fall_back(self, tmp_path: Path) -> None:
        _write_config(tmp_path, {"report": "nope", "sources": ["x"], "assets": None})
        config = load_config(tmp_path)
        assert config.report == ReportConfig()
        assert config.sources.search_roots == []
        assert config.assets.scripts == []

    def test_non_list_entries_ignored(self, tmp_path: Path) -> None:
        _write_config(tmp_path, {"sources": {"search_roots": "single"}})
        assert load_config(tmp_path).sources.search_roots == []

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("report: [unclosed\n", encoding="utf-8")
        with pytest.raises(CoverHTMLError, match="invalid configuration"):
            load_config(tmp_path)

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, {"report": {"title": "Here"}})
        monkeypatch.chdir(tmp_path)
        assert load_config().report.title == "Here"


class TestValidateConfig:
    def test_valid_defaults(self, tmp_path: Path) -> None:
        assert validate_config(load_config(tmp_path)) == []

    def test_reports_every_problem(self, tmp_path: Path) -> None:
        (tmp_path / "theme.txt").write_text("", encoding="utf-8")
        config = CoverHTMLConfig(base_dir=str(tmp_path))
        config.report.title = "  "
        config.sources.module_root = "missing"
        config.sources.search_roots = ["gone"]
        config.assets.stylesheets = ["theme.txt"]
        config.assets.scripts = ["nope.js"]

        errors = validate_config(config)
        assert len(errors) == 5
        assert errors[0] == "report.title must not be empty"
        assert "sources.module_root" in errors[1]
        assert "sources.search_roots" in errors[2]
        assert "must end in .css" in errors[3]
        assert "does not exist" in errors[4]
