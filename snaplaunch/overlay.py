"""Operator config overlay."""

from __future__ import annotations

import logging
import pathlib
import shutil

from snaplaunch.errors import OverlayError

log = logging.getLogger(__name__)


class ConfigOverlay:
    def apply(self, overlay: pathlib.Path, dest: pathlib.Path) -> bool:
        """Copy `overlay` over `dest`. Returns False when there is no overlay."""
        if not overlay.is_file():
            log.debug("No overlay config at %s", overlay)
            return False
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(overlay, dest)
        except OSError as exc:
            raise OverlayError(f"Cannot copy {overlay} to {dest}: {exc}") from exc
        log.info("Config applied: %s", dest)
        return True
