"""Tests for configuration management."""

import json

import pytest
import yaml

from dnsdirect.core.config import Config


@pytest.fixture
def temp_config_file(tmp_path):
    """Path of a not yet existing config file."""
    return tmp_path / "config.json"


def test_config_initialization(temp_config_file):
    """Test config initialization."""
    config = Config(temp_config_file)
    assert config.config_path == temp_config_file
    assert isinstance(config.config_data, dict)
    assert not temp_config_file.exists()


def test_config_default_values(temp_config_file):
    """Test default configuration values."""
    config = Config(temp_config_file)
    assert config.get("log_level") == "info"
    assert config.get("app_name") == "dnsdirect"
    assert config.get("resolv_conf") == "/etc/resolv.conf"
    assert config.get("restart_resolved") is True
    assert config.get_nameservers() == []
    assert config.get_search_domains() == []


def test_config_get_set(temp_config_file):
    """Test getting and setting config values."""
    config = Config(temp_config_file)

    config.set("test_key", "test_value")
    assert config.get("test_key") == "test_value"

    config.set("nested.key", "nested_value")
    assert config.get("nested.key") == "nested_value"

    assert config.get("nonexistent_key", "default") == "default"
    assert config.get("log_level.deeper", "default") == "default"


def test_config_set_replaces_scalar_parent(temp_config_file):
    config = Config(temp_config_file)

    config.set("log_level.deeper", "x")

    assert config.get("log_level") == {"deeper": "x"}
    assert not temp_config_file.exists()


def test_config_persistence(temp_config_file):
    """Saved values are loaded again, defaults fill the rest."""
    config1 = Config(temp_config_file)
    config1.set("nameservers", ["100.100.100.100"])
    config1.save()

    config2 = Config(temp_config_file)
    assert config2.get_nameservers() == ["100.100.100.100"]
    assert config2.get("log_level") == "info"


def test_config_corrupt_file_uses_defaults(temp_config_file):
    temp_config_file.write_text("{not json", encoding="utf-8")

    config = Config(temp_config_file)

    assert config.get("log_level") == "info"


def test_config_export_import_json(temp_config_file, tmp_path):
    config = Config(temp_config_file)
    config.set("search_domains", ["corp.example.com"])

    export_file = tmp_path / "export.json"
    assert config.export_config(export_file, "json") is True
    assert json.loads(export_file.read_text())["search_domains"] == ["corp.example.com"]

    new_config = Config(tmp_path / "new_config.json")
    assert new_config.import_config(export_file, "json") is True
    assert new_config.get_search_domains() == ["corp.example.com"]
    assert (tmp_path / "new_config.json").exists()


def test_config_export_import_yaml(temp_config_file, tmp_path):
    config = Config(temp_config_file)
    config.set("nameservers", ["1.1.1.1", "1.0.0.1"])

    export_file = tmp_path / "export.yaml"
    assert config.export_config(export_file, "yaml") is True
    assert yaml.safe_load(export_file.read_text())["nameservers"] == ["1.1.1.1", "1.0.0.1"]

    new_config = Config(tmp_path / "new_config.json")
    assert new_config.import_config(export_file, "yaml") is True
    assert new_config.get_nameservers() == ["1.1.1.1", "1.0.0.1"]


def test_config_import_rejects_non_mapping(temp_config_file, tmp_path):
    bad = tmp_path / "list.yaml"
    bad.write_text("- 1.1.1.1\n")

    config = Config(temp_config_file)
    assert config.import_config(bad, "yaml") is False
    assert not temp_config_file.exists()


def test_config_import_missing_file(temp_config_file, tmp_path):
    config = Config(temp_config_file)
    assert config.import_config(tmp_path / "missing.json") is False
