#!/usr/bin/env python3
# registrar/db/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in the root directory: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed with REGISTRAR_ (prefix stripped)

Validation:
  - COMMANDS_PATH / DATA_PATH: resolved under the root when relative
  - DEVELOPMENT / GENERATE_COMMAND_JSON / RETAIN_CATALOG: bool
  - CATALOG_MODE: one of {'batch', 'debounced'}
  - CATALOG_DEBOUNCE_MS / READY_DEBOUNCE_MS: int >= 0
  - DEFAULT_PREFIX_DEV / DEFAULT_PREFIX_PROD: non-empty str
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH: None or path resolved under the root
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
import configparser
import json
import os
import re
import tomllib

from registrar.exceptions import ConfigError

ENV_PREFIX = "REGISTRAR_"

DEFAULTS: dict[str, Any] = {
    "COMMANDS_PATH": "plugins",
    "DATA_PATH": "data",
    "CATALOG_FILE": "commands.json",
    "DEVELOPMENT": False,
    "GENERATE_COMMAND_JSON": False,
    "CATALOG_MODE": "batch",        # 'batch' or 'debounced'
    "CATALOG_DEBOUNCE_MS": 500,
    "RETAIN_CATALOG": False,
    "READY_DEBOUNCE_MS": 1000,
    "DEFAULT_PREFIX_DEV": "b?",
    "DEFAULT_PREFIX_PROD": "b!",
    "LOG_LEVEL": None,              # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
}

CATALOG_MODES = {"batch", "debounced"}


# ---------- data model ----------

@dataclass(frozen=True)
class AppConfig:
    root: Path
    commands_path: Path
    catalog_path: Path

    development: bool
    generate_command_json: bool
    catalog_mode: str
    catalog_debounce_ms: int
    retain_catalog: bool
    ready_debounce_ms: int

    default_prefix_dev: str
    default_prefix_prod: str

    log_level: str | None
    log_file_path: Path | None

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def catalog_enabled(self) -> bool:
        """The catalog is only generated in development with the flag set."""
        return self.development and self.generate_command_json

    @property
    def default_prefix(self) -> str:
        return self.default_prefix_dev if self.development else self.default_prefix_prod


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser()
    if not cfg.read(path, encoding="utf-8"):
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Malformed JSON config {path}: {exc}") from exc


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Malformed TOML config {path}: {exc}") from exc


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'default_prefix': {'dev': 'b?'}} -> {'DEFAULT_PREFIX_DEV': 'b?'}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(root: Path) -> list[Path]:
    return [
        root / ".env",
        root / "config.ini",
        root / "config.json",
        root / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ConfigError(f"{key}: expected boolean, got {val!r}")


def _as_int(key: str, val: Any, *, minimum: int = 0) -> int:
    if isinstance(val, int) and not isinstance(val, bool):
        out = val
    else:
        try:
            out = int(str(val).strip())
        except ValueError as exc:
            raise ConfigError(f"{key}: expected integer, got {val!r}") from exc
    if out < minimum:
        raise ConfigError(f"{key} must be >= {minimum}")
    return out


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_str(key: str, val: Any) -> str:
    out = _as_opt_str(val)
    if out is None:
        raise ConfigError(f"{key} must not be empty")
    return out


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ConfigError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_catalog_mode(val: Any) -> str:
    mode = _as_str("CATALOG_MODE", val).strip().lower()
    if mode not in CATALOG_MODES:
        raise ConfigError(
            f"CATALOG_MODE must be one of {sorted(CATALOG_MODES)}, got {val!r}")
    return mode


def _resolve_under(base: Path, value: Any) -> Path | None:
    """Resolve a config path relative to `base` (the root) when not absolute."""
    text = _as_opt_str(value)
    if text is None:
        return None
    p = Path(os.path.expandvars(os.path.expanduser(text)))
    return p if p.is_absolute() else (base / p).resolve()


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _merge_sources(root: Path, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(root):
        if file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_toml_file(file))))

    # Environment variables override all; only REGISTRAR_* keys
    env = os.environ if environ is None else environ
    merged.update({
        k[len(ENV_PREFIX):]: v for k, v in env.items()
        if k.startswith(ENV_PREFIX) and re.fullmatch(r"[A-Z0-9_]+", k)
    })
    return merged


def _validate_and_build(root: Path, config: Mapping[str, Any]) -> AppConfig:
    def get(key: str) -> Any:
        return config.get(key, DEFAULTS[key])

    commands_path = _resolve_under(root, get("COMMANDS_PATH"))
    data_path = _resolve_under(root, get("DATA_PATH"))
    if commands_path is None or data_path is None:
        raise ConfigError("COMMANDS_PATH and DATA_PATH must not be empty")
    catalog_file = _as_str("CATALOG_FILE", get("CATALOG_FILE"))

    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return AppConfig(
        root=root,
        commands_path=commands_path,
        catalog_path=data_path / catalog_file,
        development=_as_bool("DEVELOPMENT", get("DEVELOPMENT")),
        generate_command_json=_as_bool(
            "GENERATE_COMMAND_JSON", get("GENERATE_COMMAND_JSON")),
        catalog_mode=_as_catalog_mode(get("CATALOG_MODE")),
        catalog_debounce_ms=_as_int(
            "CATALOG_DEBOUNCE_MS", get("CATALOG_DEBOUNCE_MS")),
        retain_catalog=_as_bool("RETAIN_CATALOG", get("RETAIN_CATALOG")),
        ready_debounce_ms=_as_int(
            "READY_DEBOUNCE_MS", get("READY_DEBOUNCE_MS")),
        default_prefix_dev=_as_str(
            "DEFAULT_PREFIX_DEV", get("DEFAULT_PREFIX_DEV")),
        default_prefix_prod=_as_str(
            "DEFAULT_PREFIX_PROD", get("DEFAULT_PREFIX_PROD")),
        log_level=_as_log_level(get("LOG_LEVEL")),
        log_file_path=_resolve_under(root, get("LOG_FILE_PATH")),
        extra=extra,
    )


# ---------- public API ----------

def load_config(
    root: str | Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Load, merge, normalize, and validate configuration for `root`
    (defaults to the current directory). `overrides` win over every
    other source. No filesystem side-effects.
    """
    base = Path(root if root is not None else Path.cwd()).resolve()
    raw = _merge_sources(base, environ)
    if overrides:
        raw.update(_normalize_keys(overrides))
    return _validate_and_build(base, raw)
