"""Tests for the profile-to-HTML pipeline (pipeline.py)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from coverhtml.adapters.resolver import SourceResolver
from coverhtml.analyzers.coverage import aggregate_coverage
from coverhtml.config import load_config
from coverhtml.errors import ParseError, ResolutionError, UsageError
from coverhtml.pipeline import generate_html, generate_report, resolver_from_config


def _resolver(root: Path) -> SourceResolver:
    return SourceResolver(module_root=root, gopath=[], goroot=None)


class TestGenerateReport:
    def test_builds_report_in_profile_order(self, go_project: Path) -> None:
        report = generate_report(go_project / "coverage.out", _resolver(go_project))

        assert [f.name for f in report.files] == [
            "example.com/demo/main.go",
            "example.com/demo/util/util.go",
        ]
        assert report.set_mode is True
        main, util = report.files
        assert main.coverage == pytest.approx(200 / 3)
        assert main.uncovered_ranges == ("6-8",)
        assert 'fmt.Println("always")' in main.body
        assert util.coverage == 0.0
        assert util.id == 1
        assert aggregate_coverage(report) == pytest.approx(100 / 3)

    def test_empty_profile_path(self, go_project: Path) -> None:
        with pytest.raises(UsageError):
            generate_report("", _resolver(go_project))

    def test_malformed_profile(
        self, go_project: Path, make_file: Callable[[Path, str, str], Path]
    ) -> None:
        bad = make_file(go_project, "bad.out", "mode: set\nexample.com/demo/main.go:1.1,2.2 1\n")
        with pytest.raises(ParseError):
            generate_report(bad, _resolver(go_project))

    def test_atomic_mode_is_not_set_mode(
        self, go_project: Path, make_file: Callable[[Path, str, str], Path]
    ) -> None:
        profile = make_file(
            go_project,
            "atomic.out",
            "mode: atomic\nexample.com/demo/main.go:5.13,6.27 1 3\n",
        )
        report = generate_report(profile, _resolver(go_project))
        assert report.set_mode is False
        assert [f.coverage for f in report.files] == [100.0]

    def test_missing_source(self, go_project: Path) -> None:
        (go_project / "util/util.go").unlink()
        with pytest.raises(ResolutionError, match="util.go"):
            generate_report(go_project / "coverage.out", _resolver(go_project))

    def test_language_override(self, go_project: Path) -> None:
        report = generate_report(
            go_project / "coverage.out", _resolver(go_project), language="clike"
        )
        assert all('class="language-clike"' in f.body for f in report.files)


class TestGenerateHtml:
    def test_writes_destination(self, go_project: Path, tmp_path: Path) -> None:
        out = tmp_path / "out" / "coverage.html"
        config = load_config(go_project)
        with patch("coverhtml.pipeline.start_browser") as mock_browser:
            result = generate_html(go_project / "coverage.out", out, config)

        mock_browser.assert_not_called()
        assert result.path == out
        assert result.is_temporary is False
        page = out.read_text(encoding="utf-8")
        assert "Total: 33.3%" in page
        assert 'data-line="6-8"' in page

    def test_temporary_file_opens_browser(self, go_project: Path) -> None:
        config = load_config(go_project)
        with patch("coverhtml.pipeline.start_browser", return_value=True) as mock_browser:
            result = generate_html(go_project / "coverage.out", None, config)

        assert result.is_temporary is True
        assert result.opened is True
        assert result.path.is_file()
        mock_browser.assert_called_once_with(result.path.resolve().as_uri())

    def test_browser_disabled(self, go_project: Path) -> None:
        config = load_config(go_project)
        with patch("coverhtml.pipeline.start_browser") as mock_browser:
            result = generate_html(go_project / "coverage.out", "", config, open_browser=False)
        mock_browser.assert_not_called()
        assert result.opened is False

    def test_no_output_on_failure(self, go_project: Path, tmp_path: Path) -> None:
        (go_project / "main.go").unlink()
        out = tmp_path / "coverage.html"
        with pytest.raises(ResolutionError):
            generate_html(go_project / "coverage.out", out, load_config(go_project))
        assert not out.exists()

    def test_extra_assets_are_inlined(
        self,
        go_project: Path,
        tmp_path: Path,
        make_file: Callable[[Path, str, str], Path],
    ) -> None:
        make_file(go_project, "theme.css", "/* custom theme */")
        make_file(go_project, ".coverhtml.yml", "assets:\n  stylesheets: [theme.css]\n")
        out = tmp_path / "coverage.html"
        generate_html(go_project / "coverage.out", out, load_config(go_project))
        assert "/* custom theme */" in out.read_text(encoding="utf-8")


def test_resolver_from_config(go_project: Path) -> None:
    resolver = resolver_from_config(load_config(go_project))
    assert resolver.module_path == "example.com/demo"
