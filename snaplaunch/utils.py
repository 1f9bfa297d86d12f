"""Shared helpers: logging setup and atomic writes."""

from __future__ import annotations

import logging
import os
import pathlib
import stat
import uuid

_LOGGER_NAMES = ("snaplaunch", "supervisor")


def configure_logging(verbose: bool = False) -> None:
    """Send launcher logs to stderr, replacing any handler from an earlier call."""
    level = logging.DEBUG if verbose else logging.INFO
    for name in _LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("[snaplaunch] %(levelname)s %(message)s"))
        logger.addHandler(handler)


def atomic_write_text(path: pathlib.Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.tmp.{uuid.uuid4().hex}")
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = 0o644
    fd = os.open(str(tmp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    try:
        try:
            os.write(fd, content.encode("utf-8"))
            os.fsync(fd)
        finally:
            os.close(fd)
        os.chmod(str(tmp), mode)
        os.replace(str(tmp), str(path))
    except Exception:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass
        raise


