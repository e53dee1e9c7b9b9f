"""Idempotent, whole-file artifact writes."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from .logging import get_logger
from .models import WriteOutcome

# mkstemp creates 0600 files; generated sources should be world-readable.
_DEFAULT_MODE = 0o644


class ArtifactWriter:
    """Writes generated files, leaving existing ones alone unless told otherwise."""

    def __init__(self) -> None:
        self.logger = get_logger("writer")

    def write(self, path: Path, content: str, overwrite: bool) -> WriteOutcome:
        """Write ``content`` to ``path`` and report what happened.

        An existing destination is never touched when ``overwrite`` is False,
        whatever its content. Otherwise the content goes to a temporary
        sibling file that then replaces the destination, so readers see
        either the old file or the complete new one. OSError propagates.
        """
        path = Path(path)
        if path.exists() and not overwrite:
            return WriteOutcome.SKIPPED_EXISTING

        path.parent.mkdir(parents=True, exist_ok=True)
        mode = path.stat().st_mode & 0o777 if path.exists() else _DEFAULT_MODE
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content.encode("utf-8"))
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        self.logger.debug("Wrote %d bytes to %s", len(content), path)
        return WriteOutcome.WRITTEN


__all__ = ["ArtifactWriter"]
