"""Tree-wide `.js` -> `.cjs` rename and relative import rewriting."""

from __future__ import annotations

import logging
import re
from typing import List

from snaplaunch.errors import NormalizationError
from snaplaunch.normalize.tree import SourceTree, TreeVisitor, walk

log = logging.getLogger(__name__)

SOURCE_EXT = ".js"
TARGET_EXT = ".cjs"

# Quoted relative specifier ending in .js after from/import/require, e.g.
#   import x from "./a.js"   import "./b.js"   import("../c.js")
#   require('./d.js')        export * from "./e.js"
_RELATIVE_REF = re.compile(
    r"""(?P<lead>(?<![\w.$])\b(?:from|import|require)\s*\(?\s*)"""
    r"""(?P<q>['"])(?P<path>\.{1,2}/[^'"\n]*?)\.js(?P=q)"""
)


class _ExtensionCollector(TreeVisitor):
    def __init__(self, ext: str):
        self.ext = ext
        self.paths: List[str] = []

    def visit_file(self, tree: SourceTree, path: str) -> None:
        if path.endswith(self.ext):
            self.paths.append(path)


def collect_files(tree: SourceTree, ext: str) -> List[str]:
    collector = _ExtensionCollector(ext)
    walk(tree, collector)
    return collector.paths


def rename_sources(tree: SourceTree) -> List[str]:
    """Rename every .js file to .cjs. Returns the new paths in rename order.

    A .cjs file already sitting next to its .js twin is never overwritten.
    """
    sources = sorted(collect_files(tree, SOURCE_EXT))
    for path in sources:
        target = path[: -len(SOURCE_EXT)] + TARGET_EXT
        if tree.exists(target):
            raise NormalizationError(f"Cannot rename {path}: {target} already exists")

    renamed = []
    for path in sources:
        target = path[: -len(SOURCE_EXT)] + TARGET_EXT
        tree.rename(path, target)
        renamed.append(target)
    log.info("Renamed %d file(s) to %s", len(renamed), TARGET_EXT)
    return renamed


def rewrite_text(content: str) -> str:
    return _RELATIVE_REF.sub(r"\g<lead>\g<q>\g<path>" + TARGET_EXT + r"\g<q>", content)


class ReferenceRewriter(TreeVisitor):
    """Points relative .js imports in .cjs files at their renamed targets."""

    def __init__(self):
        self.rewritten: List[str] = []

    def visit_file(self, tree: SourceTree, path: str) -> None:
        if not path.endswith(TARGET_EXT):
            return
        content = tree.read_text(path)
        patched = rewrite_text(content)
        if patched != content:
            tree.write_text(path, patched)
            self.rewritten.append(path)


def rewrite_references(tree: SourceTree) -> List[str]:
    rewriter = ReferenceRewriter()
    walk(tree, rewriter)
    if rewriter.rewritten:
        log.info("Rewrote relative imports in %d file(s)", len(rewriter.rewritten))
    return rewriter.rewritten
