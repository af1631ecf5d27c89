"""Locate the source file behind a cover profile file name.

Profile file names are Go import paths followed by the file name
(``example.com/mod/pkg/file.go``). They are looked up the way the Go
toolchain finds packages: the main module (via ``go.mod``), its vendor
directory, each GOPATH ``src`` tree and finally GOROOT.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from coverhtml.errors import ResolutionError

logger = logging.getLogger(__name__)

_GO_MOD = "go.mod"
_MODULE_LINE_REGEX = re.compile(r"^\s*module\s+(\S+)", re.MULTILINE)


def read_module_path(go_mod: Path) -> str | None:
    """Return the module path declared in a ``go.mod`` file, if any."""
    try:
        text = go_mod.read_text(encoding="utf-8")
    except OSError:
        return None
    match = _MODULE_LINE_REGEX.search(text)
    if not match:
        return None
    return match.group(1).strip("\"`")


def _default_gopath() -> list[Path]:
    raw = os.environ.get("GOPATH", "")
    if raw:
        return [Path(p) for p in raw.split(os.pathsep) if p]
    return [Path.home() / "go"]


def _default_goroot() -> Path | None:
    raw = os.environ.get("GOROOT", "")
    return Path(raw) if raw else None


class SourceResolver:
    """Resolve profile file names to files on disk."""

    def __init__(
        self,
        *,
        module_root: Path | None = None,
        search_roots: list[Path] | tuple[Path, ...] = (),
        gopath: list[Path] | None = None,
        goroot: Path | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            module_root: Directory holding the main module's ``go.mod``.
            search_roots: Extra directories file names are tried against first.
            gopath: GOPATH entries; defaults to ``$GOPATH`` or ``~/go``.
            goroot: Go installation root; defaults to ``$GOROOT``.
        """
        self._module_root = module_root
        self._search_roots = list(search_roots)
        self._gopath = _default_gopath() if gopath is None else gopath
        self._goroot = _default_goroot() if goroot is None else goroot
        self._module_path = (
            read_module_path(module_root / _GO_MOD) if module_root is not None else None
        )
        if module_root is not None and self._module_path is None:
            logger.debug("No module path found in %s", module_root / _GO_MOD)

    @property
    def module_path(self) -> str | None:
        """Module path declared by the main module's ``go.mod``."""
        return self._module_path

    def candidates(self, file_name: str) -> list[Path]:
        """Return every location tried for *file_name*, in lookup order."""
        name = Path(file_name)
        if name.is_absolute():
            return [name]

        paths = [root / name for root in self._search_roots]

        if self._module_root is not None:
            module_path = self._module_path
            if module_path and file_name.startswith(module_path + "/"):
                paths.append(self._module_root / file_name[len(module_path) + 1 :])
            paths.append(self._module_root / "vendor" / name)

        paths.extend(entry / "src" / name for entry in self._gopath)
        if self._goroot is not None:
            paths.append(self._goroot / "src" / name)
        return paths

    def find(self, file_name: str) -> Path:
        """Return the first existing file for *file_name*.

        Raises:
            ResolutionError: If no candidate exists.
        """
        tried = self.candidates(file_name)
        for path in tried:
            if path.is_file():
                logger.debug("Resolved %s -> %s", file_name, path)
                return path
        searched = ", ".join(str(p) for p in tried) or "no locations"
        raise ResolutionError(f"can't find {file_name!r} (searched {searched})")

    def read(self, file_name: str) -> bytes:
        """Return the source bytes for *file_name*.

        Raises:
            ResolutionError: If the file cannot be found or read.
        """
        path = self.find(file_name)
        try:
            return path.read_bytes()
        except OSError as e:
            raise ResolutionError(f"can't read {path}: {e}") from e
