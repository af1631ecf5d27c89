"""Shared fixtures: a tiny Go module with a matching cover profile."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable

_MAIN_GO = """\
package main

import "fmt"

func main() {
\tif len(fmt.Sprint()) > 0 {
\t\tfmt.Println("never")
\t}
\tfmt.Println("always")
}
"""

_UTIL_GO = """\
package util

func Double(x int) int {
\treturn x * 2
}
"""

PROFILE = """\
mode: set
example.com/demo/main.go:5.13,6.27 1 1
example.com/demo/main.go:6.27,8.3 1 0
example.com/demo/main.go:9.2,9.24 1 1
example.com/demo/util/util.go:3.24,5.2 1 0
"""


def write_file(root: Path, rel: str, content: str) -> Path:
    """Write *content* to a file under *root*."""
    f = root / rel
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(content, encoding="utf-8")
    return f


@pytest.fixture()
def go_project(tmp_path: Path) -> Path:
    """Create a Go module at ``tmp_path/demo`` with a ``coverage.out`` profile."""
    root = tmp_path / "demo"
    write_file(root, "go.mod", "module example.com/demo\n\ngo 1.22\n")
    write_file(root, "main.go", _MAIN_GO)
    write_file(root, "util/util.go", _UTIL_GO)
    write_file(root, "coverage.out", PROFILE)
    return root


@pytest.fixture()
def make_file() -> Callable[[Path, str, str], Path]:
    """Expose :func:`write_file` to test modules."""
    return write_file
