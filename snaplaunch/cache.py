"""
Scratch directory lifecycle.

One pipeline run owns the scratch directory. `prepare()` wipes whatever a
previous run left behind and recreates it empty.
"""

from __future__ import annotations

import logging
import pathlib
import shutil

from snaplaunch.errors import CacheError

log = logging.getLogger(__name__)

SCRATCH_DIRNAME = ".tmp"
ARCHIVE_FILENAME = "repo.zip"


class CacheManager:
    def __init__(self, base_dir: pathlib.Path, nesting: int = 0):
        self.root = pathlib.Path(base_dir) / SCRATCH_DIRNAME
        scratch = self.root
        for i in range(max(0, nesting)):
            scratch = scratch / f"_{i}"
        self.scratch_dir = scratch

    @property
    def archive_path(self) -> pathlib.Path:
        return self.scratch_dir / ARCHIVE_FILENAME

    def prepare(self) -> pathlib.Path:
        """Remove any previous scratch root and create an empty scratch dir."""
        try:
            if self.root.exists():
                log.info("Cleaning cache at %s", self.root)
                shutil.rmtree(self.root)
            self.scratch_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheError(f"Cannot reset scratch directory {self.root}: {exc}") from exc
        return self.scratch_dir

    def teardown(self) -> None:
        try:
            shutil.rmtree(self.root)
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise CacheError(f"Cannot remove scratch directory {self.root}: {exc}") from exc
