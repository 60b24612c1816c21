"""
Configuration loader for ORACLE.

Three layers, highest priority first:
  1. Per-invocation overrides (CLI flags)
  2. Project config   (<project>/.oracle.json)
  3. Global config    (~/.config/oracle/config.json)
  4. Built-in defaults (oracle/config.yaml + ORACLE_* env vars)
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, Field


PROJECT_CONFIG_NAME = ".oracle.json"


class ConfigError(Exception):
    """Raised for unusable configuration, e.g. a missing project path."""
    pass


# ---------------------------------------------------------------------------
# Built-in defaults
# ---------------------------------------------------------------------------

class OracleDefaults(BaseModel):
    driver: str = "gemini"
    model: str = "gemini-2.5-flash"
    timeout: int = 180
    recall_url: str = "https://recall.beast"
    extra_path: list[str] = Field(default_factory=list)

    def extra_path_segment(self) -> str:
        """PATH fragment to prepend for the LLM subprocess ('' when unset)."""
        return os.pathsep.join(str(Path(p).expanduser()) for p in self.extra_path)


_DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

_ENV_OVERRIDES = {
    "driver": "ORACLE_DRIVER",
    "model": "ORACLE_MODEL",
    "timeout": "ORACLE_TIMEOUT",
    "recall_url": "ORACLE_RECALL_URL",
    "extra_path": "ORACLE_EXTRA_PATH",
}


def load_defaults() -> OracleDefaults:
    """
    Load built-in defaults by merging:
      1. Bundled defaults (oracle/config.yaml)
      2. ORACLE_* environment variable overrides
    """
    with open(_DEFAULT_CONFIG_PATH, "r") as f:
        base: dict[str, Any] = yaml.safe_load(f) or {}

    for key, env_var in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        if key == "extra_path":
            base[key] = [p for p in value.split(os.pathsep) if p]
        else:
            base[key] = value

    return OracleDefaults(**base)


def global_config_dir() -> Path:
    override = os.environ.get("ORACLE_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "oracle"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _read_json(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"[CONFIG] Ignoring malformed {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _write_json(path: Path, data: dict[str, Any]) -> None:
    path.write_text(json.dumps(data, indent=4, ensure_ascii=False) + "\n", encoding="utf-8")


def _dig(data: dict[str, Any], key: str, default: Any = None) -> Any:
    """Look up a dotted key ("a.b.c") in nested dicts."""
    current: Any = data
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def _assign(data: dict[str, Any], key: str, value: Any) -> None:
    parts = key.split(".")
    current = data
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[parts[-1]] = value


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------

class ConfigManager:
    """
    Plain key/value JSON config at two levels (global + project).

    Global values are persisted on every `set`. Project values are
    persisted only through `save_project`.
    """

    def __init__(self, global_dir: Path | None = None):
        self.global_dir = global_dir or global_config_dir()
        self.global_config_path = self.global_dir / "config.json"
        self.project_path: Path | None = None
        self._global: dict[str, Any] = {}
        self._project: dict[str, Any] = {}
        self.load_global()

    # -- global --------------------------------------------------------

    def load_global(self) -> None:
        self._global = _read_json(self.global_config_path)

    def save(self) -> None:
        self.global_dir.mkdir(parents=True, exist_ok=True)
        _write_json(self.global_config_path, self._global)

    def get(self, key: str | None = None, default: Any = None) -> Any:
        if key is None:
            return self._global
        return _dig(self._global, key, default)

    def set(self, key: str, value: Any) -> None:
        _assign(self._global, key, value)
        self.save()

    # -- project -------------------------------------------------------

    def load_project(self, project_path: Path) -> None:
        self.project_path = Path(project_path)
        self._project = _read_json(self.project_path / PROJECT_CONFIG_NAME)

    def save_project(self, project_path: Path | None = None) -> Path:
        target = Path(project_path or self.project_path or Path.cwd()) / PROJECT_CONFIG_NAME
        _write_json(target, self._project)
        return target

    def project_get(self, key: str | None = None, default: Any = None) -> Any:
        if key is None:
            return self._project
        return _dig(self._project, key, default)

    def project_set(self, key: str, value: Any) -> None:
        _assign(self._project, key, value)

    def set_project_config(self, config: dict[str, Any]) -> None:
        self._project = dict(config)

    def has_project_config(self) -> bool:
        return self.project_path is not None and (self.project_path / PROJECT_CONFIG_NAME).is_file()

    # -- resolution ----------------------------------------------------

    def resolve(self, key: str, default: Any = None, override: Any = None) -> Any:
        """Resolve with priority: override > project > global > default."""
        if override is not None:
            return override
        value = self.project_get(key)
        if value is None:
            value = self.get(key)
        return default if value is None else value


def resolve_project_path(path: Path | str | None = None) -> Path:
    """Return the absolute project directory, or raise ConfigError."""
    candidate = Path(path).expanduser() if path else Path.cwd()
    resolved = candidate.resolve()
    if not resolved.is_dir():
        raise ConfigError(f"Project path does not exist: {path or candidate}")
    return resolved
