"""Configuration loading and management."""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from decodedesk.core.exceptions import ConfigurationError


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        "openrouter": {
            "base_url": "https://openrouter.ai/api/v1",
            "model": "deepseek/deepseek-r1-0528-qwen3-8b:free",
            "max_tokens": 400,
            "temperature": 0.7,
            "timeout": 30.0,
            "app_name": "DecodeDesk"
        },
        "retry": {
            "max_attempts": 3,
            "backoff_seconds": 1.0
        },
        "quota": {
            "guest_limit": 8,
            "user_weekly_limit": 5,
            "total_weekly_limit": 13,
            "window_days": 7
        },
        "storage": {
            "backend": "disk",
            "directory": ".cache/decodedesk"
        },
        "logging": {
            "level": "WARNING",
            "file": None
        },
        "api_keys": {
            "openrouter": ""
        }
    }


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None, use_dotenv: bool = True) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Values from the file are layered over the built-in defaults, then
    environment variables (including a ``.env`` file) override both.

    Args:
        config_path: Path to config file (defaults to configs/default.yaml when present)
        use_dotenv: Load a ``.env`` file from the working directory first

    Returns:
        Configuration dictionary
    """
    if use_dotenv:
        load_dotenv()

    if config_path is None:
        possible_paths = [
            Path("configs/default.yaml"),
            Path(__file__).parent.parent.parent / "configs" / "default.yaml"
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break

    config = get_default_config()
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {e}", config_key=str(config_path)) from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a mapping",
                config_key=str(config_path)
            )
        config = _merge(config, loaded)

    return override_with_env(config)


def save_config(config: Dict[str, Any], config_path: str) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        config_path: Output path
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def override_with_env(config: Dict[str, Any]) -> Dict[str, Any]:
    """Override config with environment variables."""
    env_mappings = {
        "OPENROUTER_API_KEY": ["api_keys", "openrouter"],
        "OPENROUTER_BASE_URL": ["openrouter", "base_url"],
        "DECODEDESK_MODEL": ["openrouter", "model"],
        "DECODEDESK_STORAGE_DIR": ["storage", "directory"],
        "DECODEDESK_LOG_LEVEL": ["logging", "level"]
    }

    for env_var, path in env_mappings.items():
        value = os.getenv(env_var)
        if value:
            current = config
            for key in path[:-1]:
                if key not in current or not isinstance(current[key], dict):
                    current[key] = {}
                current = current[key]
            current[path[-1]] = value

    return config
