"""Zip extraction into the scratch directory."""

from __future__ import annotations

import logging
import pathlib
import zipfile

from snaplaunch.errors import ExtractError

log = logging.getLogger(__name__)


class ArchiveExtractor:
    def extract(self, archive: pathlib.Path, dest: pathlib.Path, tree_name: str) -> pathlib.Path:
        """Unpack `archive` into `dest` and return the working tree root.

        The archive is deleted once extraction succeeds. On failure whatever
        was already written stays on disk for inspection.
        """
        if not zipfile.is_zipfile(archive):
            raise ExtractError(f"Not a zip archive: {archive}")
        try:
            with zipfile.ZipFile(archive) as zf:
                zf.extractall(dest)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError) as exc:
            raise ExtractError(f"Extraction failed for {archive}: {exc}") from exc
        log.info("Extraction complete")

        try:
            archive.unlink()
        except OSError as exc:
            raise ExtractError(f"Cannot remove archive {archive}: {exc}") from exc

        tree = dest / tree_name
        if not tree.is_dir():
            raise ExtractError(f"No extracted folder: expected {tree}")
        return tree
