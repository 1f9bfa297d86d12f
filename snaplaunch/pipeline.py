"""
Launcher pipeline: cache -> fetch -> extract -> normalize -> overlay -> launch.

Stages run strictly in order. The first fatal LauncherError stops the run and
`run()` returns 1; otherwise it returns the child's exit status.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from snaplaunch.cache import CacheManager
from snaplaunch.config import LauncherConfig, load_launcher_config
from snaplaunch.errors import LauncherError, OverlayError
from snaplaunch.extract import ArchiveExtractor
from snaplaunch.fetch import Fetcher
from snaplaunch.normalize import LocalTree, ModuleNormalizer, default_strategies
from snaplaunch.normalize.normalizer import normalized_name
from snaplaunch.overlay import ConfigOverlay
from snaplaunch.utils import configure_logging
from supervisor.process import ProcessSupervisor

log = logging.getLogger(__name__)

PIPELINE_FAILURE = 1


class Pipeline:
    def __init__(
        self,
        cfg: LauncherConfig,
        supervisor: Optional[ProcessSupervisor] = None,
        fetcher: Optional[Fetcher] = None,
    ):
        self.cfg = cfg
        self.cache = CacheManager(cfg.base_path, nesting=cfg.scratch_nesting)
        self.fetcher = fetcher or Fetcher(timeout_sec=cfg.request_timeout_sec, require_token=cfg.require_token)
        self.extractor = ArchiveExtractor()
        self.normalizer = ModuleNormalizer(
            entry_point=cfg.entry_point,
            strategies=default_strategies(cfg.await_region_pattern),
        )
        self.overlay = ConfigOverlay()
        self.supervisor = supervisor or ProcessSupervisor(cfg.node_binary)

    def run(self) -> int:
        try:
            return self._run()
        except LauncherError as e:
            log.error("%s failed: %s", e.stage, e)
            return PIPELINE_FAILURE

    def _run(self) -> int:
        cfg = self.cfg
        # Credential check happens before the scratch dir or network is touched.
        token = cfg.token()

        scratch = self.cache.prepare()
        archive = self.fetcher.fetch(cfg.resolved_archive_url(), self.cache.archive_path, token=token)
        tree_root = self.extractor.extract(archive, scratch, cfg.tree_name)

        report = self.normalizer.normalize(LocalTree(tree_root))

        # The overlay follows the rename, so config.js lands as config.cjs.
        try:
            self.overlay.apply(cfg.overlay_path, tree_root / normalized_name(cfg.overlay_target))
        except OverlayError as e:
            log.warning("%s; continuing with default config", e)

        entry = tree_root / report.entry_point
        return self.supervisor.launch(entry, tree_root, cfg.child_environment())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snaplaunch",
        description="Download a repository snapshot, convert it to CommonJS and run it.",
    )
    parser.add_argument("--config", default=None, help="Path to snaplaunch.config.json.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        cfg = load_launcher_config(args.config)
    except (LauncherError, FileNotFoundError) as e:
        log.error("config failed: %s", e)
        return PIPELINE_FAILURE

    if cfg.health_port > 0:
        from supervisor.health import start_health_server

        start_health_server(cfg.health_port, cfg.health_message)

    return Pipeline(cfg).run()


if __name__ == "__main__":
    sys.exit(main())
