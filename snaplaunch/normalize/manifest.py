"""package.json patch: drop `"type": "module"` so .cjs loading is the default."""

from __future__ import annotations

import json
import logging

from snaplaunch.normalize.tree import SourceTree

log = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"
MODE_KEY = "type"
ESM_MODE = "module"


def patch_manifest(tree: SourceTree, path: str = MANIFEST_NAME) -> bool:
    """Remove the ESM mode declaration. Returns True if the manifest was rewritten.

    A manifest without the declaration is left byte-identical.
    """
    if not tree.exists(path):
        return False
    data = json.loads(tree.read_text(path))
    if not isinstance(data, dict) or data.get(MODE_KEY) != ESM_MODE:
        return False
    del data[MODE_KEY]
    tree.write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")
    log.info("Removed type:module from %s", path)
    return True
