from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class ConfigError(RuntimeError):
    pass


def _require(d: Dict[str, Any], key: str, path: str) -> Any:
    if key not in d:
        raise ConfigError(f"Missing required config: {path}.{key}")
    return d[key]


def _section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = cfg.setdefault(key, {})
    if value is None:
        value = cfg[key] = {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{key}' must be a mapping")
    return value


def load_config(path: str | Path = "config.yaml", *, required: bool = True) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        if required:
            raise ConfigError(
                f"Config file not found: {p.resolve()}\n\nTip: copy config.example.yaml -> config.yaml"
            )
        data: Any = {}
    else:
        try:
            data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as ex:
            raise ConfigError(f"Invalid YAML in {p}: {ex}") from ex
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {p}")
    validate_config(data)
    return data


def validate_config(cfg: Dict[str, Any]) -> None:
    ds = _section(cfg, "datastore")
    ds.setdefault("url_env", "SUPABASE_URL")
    ds.setdefault("key_env", "SUPABASE_ANON_KEY")
    ds.setdefault("url_placeholder", "YOUR_SUPABASE_URL")
    ds.setdefault("key_placeholder", "YOUR_SUPABASE_ANON_KEY")
    tables = _section(ds, "tables")
    tables.setdefault("regions", "states")
    tables.setdefault("sub_regions", "cities")
    tables.setdefault("entries", "stores")

    site = _section(cfg, "site")
    site.setdefault("output_dir", "public")
    site.setdefault("template_dir", "site/templates")
    site.setdefault("stylesheet", "site/styles/main.css")
    for key in ("base_path", "section"):
        # The page templates hard-code these in their breadcrumbs.
        if key in site:
            raise ConfigError(f"site.{key} is fixed by the page templates and cannot be set")
    for key in ("output_dir", "template_dir", "stylesheet"):
        if not str(_require(site, key, "site")).strip():
            raise ConfigError(f"Config value site.{key} must not be empty")

    runtime = _section(cfg, "runtime")
    runtime.setdefault("http_timeout_sec", 20)
    runtime.setdefault("http_retries", 0)
    runtime.setdefault("user_agent", "dentdirectory/0.1")
    runtime.setdefault("log_dir", "logs")
    runtime.setdefault("log_level", "INFO")


def resolve_credentials(
    cfg: Dict[str, Any], environ: Optional[Dict[str, str]] = None
) -> tuple[str, str]:
    """Returns (url, key) from the configured env vars, or the placeholders when unset."""
    env = os.environ if environ is None else environ
    ds = cfg["datastore"]
    url = (env.get(ds["url_env"]) or "").strip() or ds["url_placeholder"]
    key = (env.get(ds["key_env"]) or "").strip() or ds["key_placeholder"]
    return url, key
