"""
Top-level await patching for CommonJS entry points.

CommonJS forbids `await` outside an async function. This is a text-level
heuristic, not a parser: a strategy either recognises a region it knows how
to wrap, or the whole file is wrapped in an async IIFE. A parser-based
strategy can be dropped into the chain without touching the normalizer.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from snaplaunch.config import DEFAULT_AWAIT_REGION

IIFE_OPEN = "(async () => {"
IIFE_CLOSE = "})();"


def _wrap(body: str) -> str:
    return f"{IIFE_OPEN}\n{body}\n{IIFE_CLOSE}"


class SuspensionStrategy(ABC):
    """Contract for top-level await patchers."""

    name = "base"

    @abstractmethod
    def can_patch(self, text: str) -> bool:
        """Return True when this strategy knows how to patch `text`."""

    @abstractmethod
    def patch(self, text: str) -> str:
        """Return `text` with its top-level await moved inside an async boundary."""


class RegionWrapStrategy(SuspensionStrategy):
    """Wraps the first region matching `pattern` (first capture group)."""

    name = "region"

    def __init__(self, pattern: str = DEFAULT_AWAIT_REGION):
        self.pattern = re.compile(pattern)

    def can_patch(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def patch(self, text: str) -> str:
        def _repl(m: "re.Match[str]") -> str:
            return _wrap(m.group(1) if m.groups() else m.group(0))

        return self.pattern.sub(_repl, text, count=1)


class WholeFileWrapStrategy(SuspensionStrategy):
    """Fallback: `await` present and no async IIFE yet, so wrap everything."""

    name = "whole_file"

    def can_patch(self, text: str) -> bool:
        return "await " in text and IIFE_OPEN not in text

    def patch(self, text: str) -> str:
        return _wrap(text)


def default_strategies(region_pattern: Optional[str] = None) -> Sequence[SuspensionStrategy]:
    return (RegionWrapStrategy(region_pattern or DEFAULT_AWAIT_REGION), WholeFileWrapStrategy())


def patch_suspension(text: str, strategies: Sequence[SuspensionStrategy]) -> tuple[str, Optional[str]]:
    """Apply the first strategy that accepts `text`. Returns (text, strategy name or None)."""
    for strategy in strategies:
        if strategy.can_patch(text):
            return strategy.patch(text), strategy.name
    return text, None
