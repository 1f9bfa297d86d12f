"""
Source tree abstraction and visitor-based traversal.

The normalizer only talks to a `SourceTree`, so rename and rewrite logic can
run against the extracted checkout (`LocalTree`) or a dict fixture
(`MemoryTree`). Paths are POSIX-style and relative to the tree root; the root
itself is "".
"""

from __future__ import annotations

import pathlib
import posixpath
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

from snaplaunch.utils import atomic_write_text


class SourceTree(ABC):
    """Minimal filesystem surface needed by the normalizer."""

    @abstractmethod
    def listdir(self, path: str) -> Tuple[List[str], List[str]]:
        """Return (subdirectory names, file names) directly under `path`."""

    @abstractmethod
    def exists(self, path: str) -> bool: ...

    @abstractmethod
    def read_text(self, path: str) -> str: ...

    @abstractmethod
    def write_text(self, path: str, content: str) -> None: ...

    @abstractmethod
    def rename(self, src: str, dst: str) -> None: ...


class LocalTree(SourceTree):
    def __init__(self, root: pathlib.Path):
        self.root = pathlib.Path(root)

    def _abs(self, path: str) -> pathlib.Path:
        return self.root / path if path else self.root

    def listdir(self, path: str) -> Tuple[List[str], List[str]]:
        dirs, files = [], []
        for child in self._abs(path).iterdir():
            # Symlinked directories are treated as files so the walk never loops.
            if child.is_dir() and not child.is_symlink():
                dirs.append(child.name)
            else:
                files.append(child.name)
        return dirs, files

    def exists(self, path: str) -> bool:
        return self._abs(path).exists()

    def read_text(self, path: str) -> str:
        return self._abs(path).read_text(encoding="utf-8")

    def write_text(self, path: str, content: str) -> None:
        atomic_write_text(self._abs(path), content)

    def rename(self, src: str, dst: str) -> None:
        self._abs(src).rename(self._abs(dst))


class MemoryTree(SourceTree):
    """In-memory tree keyed by relative file path."""

    def __init__(self, files: Dict[str, str]):
        self.files: Dict[str, str] = dict(files)

    def listdir(self, path: str) -> Tuple[List[str], List[str]]:
        prefix = f"{path}/" if path else ""
        dirs, files = set(), []
        for key in self.files:
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            head, sep, _ = rest.partition("/")
            if sep:
                dirs.add(head)
            else:
                files.append(head)
        return sorted(dirs), files

    def exists(self, path: str) -> bool:
        if path in self.files:
            return True
        return any(key.startswith(f"{path}/") for key in self.files)

    def read_text(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def write_text(self, path: str, content: str) -> None:
        self.files[path] = content

    def rename(self, src: str, dst: str) -> None:
        if src not in self.files:
            raise FileNotFoundError(src)
        self.files[dst] = self.files.pop(src)


class TreeVisitor:
    def visit_directory(self, tree: SourceTree, path: str) -> None:
        pass

    def visit_file(self, tree: SourceTree, path: str) -> None:
        pass


def walk(tree: SourceTree, visitor: TreeVisitor, path: str = "") -> None:
    """Depth-first, name-sorted traversal: directory first, then its files, then subdirectories."""
    visitor.visit_directory(tree, path)
    dirs, files = tree.listdir(path)
    for name in sorted(files):
        visitor.visit_file(tree, posixpath.join(path, name) if path else name)
    for name in sorted(dirs):
        walk(tree, visitor, posixpath.join(path, name) if path else name)
