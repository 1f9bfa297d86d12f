import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from snaplaunch.errors import ConfigurationError
from snaplaunch.fetch import archive_url as default_archive_url


DEFAULT_CONFIG_PATH = Path("snaplaunch.config.json")
DEFAULT_AWAIT_REGION = r"(const phoneNumber = await new Promise[\s\S]*?rl\.close\(\);)"


@dataclass(frozen=True)
class LauncherConfig:
    owner: str
    repo: str
    branch: str = "main"
    archive_url: str = ""
    base_dir: str = ""
    scratch_nesting: int = 0
    entry_point: str = "index.js"
    overlay_file: str = "config.js"
    overlay_target: str = "config.js"
    node_binary: str = "node"
    request_timeout_sec: int = 60
    require_token: bool = False
    token_env: str = "GITHUB_TOKEN"
    max_old_space_mb: int = 384
    child_env: Dict[str, str] = field(default_factory=dict)
    await_region_pattern: str = DEFAULT_AWAIT_REGION
    health_port: int = 0
    health_message: str = "launcher is running"

    @property
    def base_path(self) -> Path:
        return Path(self.base_dir or Path.cwd()).expanduser().resolve()

    @property
    def tree_name(self) -> str:
        return f"{self.repo}-{self.branch.replace('/', '-')}"

    @property
    def overlay_path(self) -> Path:
        return self.base_path / self.overlay_file

    def resolved_archive_url(self) -> str:
        if self.archive_url:
            return self.archive_url
        return default_archive_url(self.owner, self.repo, self.branch)

    def token(self) -> Optional[str]:
        return get_secret(self.token_env, required=self.require_token)

    def child_environment(self, base: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        env = dict(os.environ if base is None else base)
        if self.max_old_space_mb > 0:
            env["NODE_OPTIONS"] = f"--max-old-space-size={self.max_old_space_mb}"
        env.update({str(k): str(v) for k, v in self.child_env.items()})
        env["NODE_ENV"] = "production"
        return env


def get_secret(name: str, required: bool = False) -> Optional[str]:
    v = os.environ.get(name)
    if v is not None and str(v).strip() == "":
        v = None
    if required and v is None:
        raise ConfigurationError(f"Missing required secret: {name}")
    return v


def _required(data: Dict[str, Any], key: str) -> str:
    val = str(data.get(key, "")).strip()
    if not val:
        raise ConfigurationError(f"Missing required config key: {key}")
    return val


def _int(data: Dict[str, Any], key: str, default: int, minimum: int = 0) -> int:
    try:
        val = int(data.get(key, default))
    except (TypeError, ValueError):
        val = default
    return max(minimum, val)


def _bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    val = data.get(key, default)
    if isinstance(val, str):
        return val.strip().lower() in {"1", "true", "yes", "on"}
    return bool(val)


def _env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(data)
    for key, env_name in (
        ("owner", "SNAPLAUNCH_OWNER"),
        ("repo", "SNAPLAUNCH_REPO"),
        ("branch", "SNAPLAUNCH_BRANCH"),
        ("base_dir", "SNAPLAUNCH_BASE_DIR"),
        ("health_port", "PORT"),
    ):
        val = os.environ.get(env_name, "").strip()
        if val:
            merged[key] = val
    return merged


def load_launcher_config(path: Optional[str] = None) -> LauncherConfig:
    explicit = path or os.environ.get("SNAPLAUNCH_CONFIG")
    cfg_path = Path(explicit or str(DEFAULT_CONFIG_PATH)).expanduser().resolve()
    data: Dict[str, Any] = {}
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise ConfigurationError(f"Config file is not valid JSON: {cfg_path}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must hold a JSON object: {cfg_path}")
    elif explicit:
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    data = _env_overrides(data)

    base_dir = data.get("base_dir") or (cfg_path.parent if cfg_path.exists() else Path.cwd())
    child_env = data.get("child_env") or {}
    if not isinstance(child_env, dict):
        raise ConfigurationError("child_env must be a JSON object")

    return LauncherConfig(
        owner=_required(data, "owner"),
        repo=_required(data, "repo"),
        branch=str(data.get("branch", "main")).strip() or "main",
        archive_url=str(data.get("archive_url", "")).strip(),
        base_dir=str(Path(base_dir).expanduser().resolve()),
        scratch_nesting=_int(data, "scratch_nesting", 0),
        entry_point=str(data.get("entry_point", "index.js")).strip() or "index.js",
        overlay_file=str(data.get("overlay_file", "config.js")).strip() or "config.js",
        overlay_target=str(data.get("overlay_target", "config.js")).strip() or "config.js",
        node_binary=str(data.get("node_binary", "node")).strip() or "node",
        request_timeout_sec=_int(data, "request_timeout_sec", 60, minimum=5),
        require_token=_bool(data, "require_token", False),
        token_env=str(data.get("token_env", "GITHUB_TOKEN")).strip() or "GITHUB_TOKEN",
        max_old_space_mb=_int(data, "max_old_space_mb", 384),
        child_env={str(k): str(v) for k, v in child_env.items()},
        await_region_pattern=str(data.get("await_region_pattern") or DEFAULT_AWAIT_REGION),
        health_port=_int(data, "health_port", 0),
        health_message=str(data.get("health_message", "launcher is running")),
    )
