import os
import sys

import pytest

from snaplaunch.errors import SpawnError
from supervisor.process import FAILURE_STATUS, ProcessSupervisor, exit_status


def _script(tmp_path, body, name="child.py"):
    p = tmp_path / name
    p.write_text(body, encoding="utf-8")
    return p


@pytest.mark.parametrize("code", [0, 1, 3, 137])
def test_exit_code_is_mirrored(tmp_path, code):
    entry = _script(tmp_path, f"import sys\nsys.exit({code})\n")
    status = ProcessSupervisor(sys.executable).launch(entry, tmp_path, dict(os.environ))
    assert status == code


def test_child_runs_in_working_dir_with_env(tmp_path):
    work = tmp_path / "tree"
    work.mkdir()
    entry = _script(work, (
        "import os\n"
        "with open('seen.txt', 'w') as f:\n"
        "    f.write(os.environ.get('NODE_ENV', '') + '|' + os.getcwd())\n"
    ))
    env = dict(os.environ, NODE_ENV="production")
    assert ProcessSupervisor(sys.executable).launch(entry, work, env) == 0
    node_env, cwd = (work / "seen.txt").read_text().split("|")
    assert node_env == "production"
    assert os.path.samefile(cwd, work)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
def test_killed_child_maps_to_128_plus_signal(tmp_path):
    entry = _script(tmp_path, "import os, signal\nos.kill(os.getpid(), signal.SIGKILL)\n")
    assert ProcessSupervisor(sys.executable).launch(entry, tmp_path, dict(os.environ)) == 137


def test_missing_executable_is_spawn_error(tmp_path):
    entry = _script(tmp_path, "")
    with pytest.raises(SpawnError) as ei:
        ProcessSupervisor(str(tmp_path / "no-such-node")).launch(entry, tmp_path, dict(os.environ))
    assert ei.value.stage == "launch"


def test_exit_status_mapping():
    assert exit_status(0) == 0
    assert exit_status(42) == 42
    assert exit_status(-15) == 143
    assert exit_status(None) == FAILURE_STATUS
