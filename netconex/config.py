import yaml
from copy import deepcopy
from pathlib import Path
from typing import Dict, Any, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator


class RequesterConfig(BaseModel):
    base_url: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    # Milliseconds; None or 0 means no timeout.
    timeout_ms: Optional[int] = None
    max_workers: int = 8

    @field_validator("timeout_ms")
    @classmethod
    def _validate_timeout(cls, value):
        if value is not None and value < 0:
            raise ValueError("requester.timeout_ms must be a non-negative integer.")
        return value

    @field_validator("max_workers")
    @classmethod
    def _validate_max_workers(cls, value):
        if value < 1:
            raise ValueError("requester.max_workers must be at least 1.")
        return value


class LoggingConfig(BaseModel):
    level: str = "INFO"
    logs_dir: Optional[str] = None


class AppConfig(BaseModel):
    requester: RequesterConfig = Field(default_factory=RequesterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _load_yaml_mapping(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Error parsing YAML config: {exc}")

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file at {path} must contain a mapping at the top level.")
    return data


def _deep_merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load YAML config, merge it with defaults, validate with Pydantic, and return a typed config object.
    Without a path only the bundled defaults are used.
    """
    default_config = _load_yaml_mapping(get_default_config_path())
    user_config: Dict[str, Any] = {}
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found at: {config_path}")
        user_config = _load_yaml_mapping(path)

    merged_config = _deep_merge_dicts(default_config, user_config)

    try:
        return AppConfig(**merged_config)
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed: {e}")


def get_default_config_path() -> Path:
    """Returns the absolute path to the default config file."""
    root_dir = Path(__file__).parent.parent
    return root_dir / "config" / "default.yaml"
