"""Write rendered reports to disk and open them in a browser."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
import webbrowser
from pathlib import Path

from coverhtml.errors import RenderError

logger = logging.getLogger(__name__)

_TEMP_DIR_PREFIX = "cover"
_TEMP_FILE_NAME = "coverage.html"


def _default_file_mode() -> int:
    """Return the mode a newly created file gets under the current umask."""
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


def _write_atomic(path: Path, content: str) -> None:
    """Write *content* to *path* via a sibling temp file and rename."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        # mkstemp creates 0600 files; give the report a regular file mode.
        tmp_path.chmod(_default_file_mode())
        tmp_path.replace(path)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise


def write_report(content: str, outfile: str | Path | None = None) -> Path:
    """Write a rendered page and return where it went.

    Args:
        content: Complete HTML document.
        outfile: Destination path. When empty, the page is written to
            ``coverage.html`` inside a new temporary directory.

    Raises:
        RenderError: If the file cannot be written.
    """
    try:
        if outfile:
            path = Path(outfile)
            path.parent.mkdir(parents=True, exist_ok=True)
            _write_atomic(path, content)
        else:
            temp_dir = Path(tempfile.mkdtemp(prefix=_TEMP_DIR_PREFIX))
            path = temp_dir / _TEMP_FILE_NAME
            try:
                path.write_text(content, encoding="utf-8")
            except OSError:
                shutil.rmtree(temp_dir, ignore_errors=True)
                raise
    except OSError as e:
        raise RenderError(f"can't write report: {e}") from e

    logger.info("HTML report written to %s", path)
    return path


def start_browser(url: str) -> bool:
    """Try to open *url* in a browser and report whether it worked."""
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.warning("Could not open browser: %s", e)
        return False
    if not opened:
        logger.warning("No browser available to open %s", url)
    return opened
