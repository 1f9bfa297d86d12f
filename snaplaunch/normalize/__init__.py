from snaplaunch.normalize.normalizer import ModuleNormalizer, NormalizationReport
from snaplaunch.normalize.suspension import (
    RegionWrapStrategy,
    SuspensionStrategy,
    WholeFileWrapStrategy,
    default_strategies,
)
from snaplaunch.normalize.tree import LocalTree, MemoryTree, SourceTree, TreeVisitor, walk

__all__ = [
    "LocalTree",
    "MemoryTree",
    "ModuleNormalizer",
    "NormalizationReport",
    "RegionWrapStrategy",
    "SourceTree",
    "SuspensionStrategy",
    "TreeVisitor",
    "WholeFileWrapStrategy",
    "default_strategies",
    "walk",
]
