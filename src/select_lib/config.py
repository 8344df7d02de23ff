# src/select_lib/config.py
"""Configuration loader: YAML file overlaid by environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

import yaml

from .source import DEFAULT_EXPRESSION

ROOT = Path(__file__).resolve().parents[2]
CONFIG_PATH = ROOT / "config" / "config.yaml"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """Raised when required configuration values are missing or invalid."""


@dataclass(frozen=True)
class SelectConfig:
    bucket: str
    key: str
    expression: str = DEFAULT_EXPRESSION
    strict: bool = False
    log_level: str = "INFO"


@lru_cache(maxsize=8)
def _read_yaml(path: str) -> Dict:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        cfg = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {p}: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ConfigError(f"Expected a mapping at top level of {p}")
    return cfg


def _as_bool(value, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


def load_config(
    path: Optional[str | Path] = None,
    *,
    require_target: bool = True,
    **overrides,
) -> SelectConfig:
    """Resolve the select target and decoder options.

    Precedence: keyword overrides, then environment variables
    (``BUCKET_NAME``, ``OBJECT_KEY``, ``SELECT_EXPRESSION``, ``SELECT_STRICT``,
    ``LOG_LEVEL``), then the YAML file (``path``, ``SELECT_CONFIG`` or
    ``config/config.yaml``), then defaults. ``None`` overrides are ignored.
    With ``require_target=False`` a missing bucket or key is left empty.
    """
    cfg_path = path or os.getenv("SELECT_CONFIG") or CONFIG_PATH
    cfg = _read_yaml(str(cfg_path))
    s3_cfg = cfg.get("s3") or {}
    dec_cfg = cfg.get("decoder") or {}
    log_cfg = cfg.get("logging") or {}

    def pick(name: str, env: str, file_value):
        if overrides.get(name) is not None:
            return overrides[name]
        if os.getenv(env) is not None:
            return os.getenv(env)
        return file_value

    bucket = pick("bucket", "BUCKET_NAME", s3_cfg.get("bucket"))
    key = pick("key", "OBJECT_KEY", s3_cfg.get("key"))
    missing = [env for env, val in (("BUCKET_NAME", bucket), ("OBJECT_KEY", key)) if not val]
    if missing and require_target:
        raise ConfigError(f"Missing required setting(s) {missing} (environment or {cfg_path})")

    expression = pick("expression", "SELECT_EXPRESSION", s3_cfg.get("expression")) or DEFAULT_EXPRESSION
    strict = _as_bool(pick("strict", "SELECT_STRICT", dec_cfg.get("strict", False)), "strict")
    log_level = str(pick("log_level", "LOG_LEVEL", log_cfg.get("level", "INFO"))).upper()

    return SelectConfig(
        bucket=str(bucket or ""),
        key=str(key or ""),
        expression=str(expression),
        strict=strict,
        log_level=log_level,
    )
