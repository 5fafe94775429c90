"""Project config loading (gocross.yaml) and merge with command-line overrides.

Config YAML format (all keys optional):
- targets: list of "os" or "os/arch" strings
- output_dir: build output directory (relative to the project directory)
- binary_name: base name of produced binaries
- jobs: max concurrent builds (omit for one per target)
- timeout: seconds allowed for the `go tool dist list` query
- go: toolchain binary (default: $GOCROSS_GO or "go")
- build_flags: extra arguments passed to `go build`
- cgo_enabled: force CGO_ENABLED=1/0 for every build
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from gocross.errors import ConfigError

log = logging.getLogger(__name__)

CONFIG_NAME = "gocross.yaml"
GO_ENV_VAR = "GOCROSS_GO"

DEFAULTS: dict[str, Any] = {
    "targets": [],
    "output_dir": None,
    "binary_name": None,
    "jobs": None,
    "timeout": None,
    "go": "go",
    "build_flags": [],
    "cgo_enabled": None,
}

_TYPES: dict[str, tuple[type, ...]] = {
    "targets": (list,),
    "output_dir": (str,),
    "binary_name": (str,),
    "jobs": (int,),
    "timeout": (int, float),
    "go": (str,),
    "build_flags": (list,),
    "cgo_enabled": (bool,),
}


def default_config() -> dict[str, Any]:
    """Built-in defaults, with GOCROSS_GO applied."""
    cfg = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULTS.items()}
    env_go = os.environ.get(GO_ENV_VAR)
    if env_go:
        cfg["go"] = env_go
    return cfg


def _check(key: str, value: Any, path: Path) -> Any:
    types = _TYPES[key]
    # bool is an int subclass; jobs/timeout must not accept true/false
    if isinstance(value, bool) and bool not in types:
        msg = f"{path}: {key} must be {types[0].__name__}, got bool"
        raise ConfigError(msg)
    if not isinstance(value, types):
        msg = f"{path}: {key} must be {types[0].__name__}, got {type(value).__name__}"
        raise ConfigError(msg)
    if key in ("targets", "build_flags"):
        if not all(isinstance(v, str) for v in value):
            msg = f"{path}: {key} must be a list of strings"
            raise ConfigError(msg)
        return list(value)
    if key == "jobs" and value < 1:
        msg = f"{path}: jobs must be >= 1"
        raise ConfigError(msg)
    return value


def load_config(config_path: Path) -> dict[str, Any]:
    """Load and validate one config file. Unknown keys are ignored."""
    try:
        with config_path.open() as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        msg = f"cannot read {config_path}: {e}"
        raise ConfigError(msg) from e
    except yaml.YAMLError as e:
        msg = f"invalid YAML in {config_path}: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = f"{config_path}: expected a mapping at top level"
        raise ConfigError(msg)

    out: dict[str, Any] = {}
    for key, value in data.items():
        if key not in _TYPES:
            log.debug("Ignoring unknown key %r in %s", key, config_path)
            continue
        if value is None:
            continue
        out[key] = _check(key, value, config_path)
    return out


def find_config(project_dir: Path, explicit: Path | None = None) -> Path | None:
    """explicit (must exist) or project_dir/gocross.yaml when present."""
    if explicit is not None:
        if not explicit.is_file():
            msg = f"config file not found: {explicit}"
            raise ConfigError(msg)
        return explicit
    candidate = project_dir / CONFIG_NAME
    return candidate if candidate.is_file() else None


def resolve_config(
    project_dir: Path,
    overrides: dict[str, Any] | None = None,
    config_path: Path | None = None,
) -> dict[str, Any]:
    """Defaults <- config file <- overrides (None values in overrides are skipped).

    output_dir from the file is made relative to project_dir.
    """
    cfg = default_config()
    path = find_config(project_dir, config_path)
    if path is not None:
        file_cfg = load_config(path)
        if "output_dir" in file_cfg and not Path(file_cfg["output_dir"]).is_absolute():
            file_cfg["output_dir"] = str(project_dir / file_cfg["output_dir"])
        cfg.update(file_cfg)
        log.debug("Loaded config %s", path)
    for key, value in (overrides or {}).items():
        if value is None or (key == "targets" and not value):
            continue
        cfg[key] = value
    return cfg
