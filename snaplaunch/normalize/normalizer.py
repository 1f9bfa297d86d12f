"""ESM -> CommonJS normalization of an extracted working tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from snaplaunch.errors import NormalizationError
from snaplaunch.normalize.manifest import patch_manifest
from snaplaunch.normalize.references import SOURCE_EXT, TARGET_EXT, rename_sources, rewrite_references
from snaplaunch.normalize.suspension import SuspensionStrategy, default_strategies, patch_suspension
from snaplaunch.normalize.tree import SourceTree

log = logging.getLogger(__name__)


@dataclass
class NormalizationReport:
    entry_point: str
    manifest_patched: bool = False
    renamed: List[str] = field(default_factory=list)
    rewritten: List[str] = field(default_factory=list)
    suspension_strategy: Optional[str] = None


def normalized_name(path: str) -> str:
    if path.endswith(SOURCE_EXT):
        return path[: -len(SOURCE_EXT)] + TARGET_EXT
    return path


class ModuleNormalizer:
    """Runs manifest patch, rename, reference rewrite and await patch, in that order.

    Any failure raises NormalizationError; the tree must then not be launched.
    """

    def __init__(self, entry_point: str = "index.js", strategies: Optional[Sequence[SuspensionStrategy]] = None):
        self.entry_point = entry_point
        self.strategies = tuple(strategies) if strategies is not None else tuple(default_strategies())

    def normalize(self, tree: SourceTree) -> NormalizationReport:
        entry = normalized_name(self.entry_point)
        report = NormalizationReport(entry_point=entry)
        try:
            report.manifest_patched = patch_manifest(tree)
            report.renamed = rename_sources(tree)
            report.rewritten = rewrite_references(tree)
            if not tree.exists(entry):
                raise NormalizationError(f"No entry point found: {self.entry_point}")
            report.suspension_strategy = self._patch_entry(tree, entry)
        except NormalizationError:
            raise
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            raise NormalizationError(f"Normalization failed: {exc}") from exc
        return report

    def _patch_entry(self, tree: SourceTree, entry: str) -> Optional[str]:
        content = tree.read_text(entry)
        patched, strategy = patch_suspension(content, self.strategies)
        if strategy is not None:
            tree.write_text(entry, patched)
            log.info("Patched top-level await in %s (%s)", entry, strategy)
        return strategy
