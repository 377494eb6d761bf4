"""Unit tests for configuration loading."""

import pytest

from decodedesk.core.exceptions import ConfigurationError
from decodedesk.utils.config_loader import get_default_config, load_config, save_config


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config(use_dotenv=False)
    assert config["openrouter"]["model"] == "deepseek/deepseek-r1-0528-qwen3-8b:free"
    assert config["openrouter"]["max_tokens"] == 400
    assert config["quota"]["guest_limit"] == 8


def test_file_overrides_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("quota:\n  guest_limit: 2\nstorage:\n  backend: memory\n")

    config = load_config(str(path), use_dotenv=False)
    assert config["quota"]["guest_limit"] == 2
    assert config["quota"]["user_weekly_limit"] == 5
    assert config["storage"]["backend"] == "memory"


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("openrouter:\n  model: from-file\n")
    monkeypatch.setenv("DECODEDESK_MODEL", "from-env")
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-test")

    config = load_config(str(path), use_dotenv=False)
    assert config["openrouter"]["model"] == "from-env"
    assert config["api_keys"]["openrouter"] == "sk-or-test"


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"), use_dotenv=False)


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("quota: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_config(str(path), use_dotenv=False)


def test_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        load_config(str(path), use_dotenv=False)


def test_save_and_reload(tmp_path):
    config = get_default_config()
    config["retry"]["max_attempts"] = 5
    path = tmp_path / "nested" / "saved.yaml"

    save_config(config, str(path))
    assert load_config(str(path), use_dotenv=False)["retry"]["max_attempts"] == 5


def test_shipped_default_yaml_matches_builtin_defaults():
    from pathlib import Path
    shipped = Path(__file__).parent.parent.parent / "configs" / "default.yaml"
    assert load_config(str(shipped), use_dotenv=False) == get_default_config()
