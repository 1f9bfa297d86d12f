"""Bootstrap shim for local execution.

Loads `snaplaunch.config.json` next to this file (or $SNAPLAUNCH_CONFIG),
runs the launcher pipeline and exits with the child's status.
"""

import os
import pathlib
import sys

from snaplaunch.pipeline import main


os.environ.setdefault("PYTHONUNBUFFERED", "1")
os.environ.setdefault("SNAPLAUNCH_BASE_DIR", str(pathlib.Path(__file__).resolve().parent))

default_cfg = pathlib.Path(__file__).resolve().parent / "snaplaunch.config.json"
if "SNAPLAUNCH_CONFIG" not in os.environ and default_cfg.exists():
    os.environ["SNAPLAUNCH_CONFIG"] = str(default_cfg)

sys.exit(main(sys.argv[1:]))
