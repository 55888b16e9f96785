"""Settings for the URL fetcher.

Resolution order (later wins):
1. Built-in defaults
2. YAML file at $URLFETCH_CONFIG, else {home}/config.yaml
3. URLFETCH_<FIELD> environment variables

{home} is $URLFETCH_HOME, defaulting to ~/.urlfetch.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from urlfetch.constants import HOME_DIR
from urlfetch.errors import ConfigurationError

ENV_PREFIX = "URLFETCH_"

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


@dataclass
class Settings:
    """Runtime settings."""
    user_agent: str = "Mozilla/5.0 (compatible; URLFetcher/1.0)"
    request_timeout: float = 30.0
    max_content_bytes: int = 5 * 1024 * 1024
    follow_redirects: bool = True
    browser_headless: bool = True
    browser_timeout_ms: int = 30000
    history_size: int = 10
    strict_xml: bool = True
    debug: bool = False
    log_retention_days: int = 30


def get_home() -> Path:
    """Get the fetcher home directory from env var or default to ~/.urlfetch."""
    home = os.getenv("URLFETCH_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / HOME_DIR


def get_config_path() -> Path:
    """Get the YAML config path."""
    path = os.getenv("URLFETCH_CONFIG")
    if path:
        return Path(path).expanduser()
    return get_home() / "config.yaml"


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from defaults, the YAML file and the environment."""
    values: Dict[str, Any] = {}
    values.update(_load_yaml(config_path or get_config_path()))
    values.update(_load_env())

    settings = Settings()
    known = {f.name: f for f in fields(Settings)}
    for key, raw in values.items():
        if key not in known:
            continue
        default = getattr(settings, key)
        setattr(settings, key, _coerce(key, raw, type(default)))
    return settings


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def _load_env() -> Dict[str, str]:
    values = {}
    for f in fields(Settings):
        raw = os.getenv(f"{ENV_PREFIX}{f.name.upper()}")
        if raw is not None:
            values[f.name] = raw
    return values


def _coerce(name: str, value: Any, kind: type) -> Any:
    """Coerce a YAML or env value to the field's type."""
    if kind is bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ConfigurationError(f"Expected a boolean for {name}, got {value!r}", field=name)

    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Expected {kind.__name__} for {name}, got {value!r}", field=name
        ) from e
