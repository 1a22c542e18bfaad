"""Tests for home configuration loading."""

import tempfile
from pathlib import Path

import pytest
import yaml

from apphome.config import load_config
from apphome.errors import ConfigError


def test_missing_config_is_noop():
    with tempfile.TemporaryDirectory() as tmpdir:
        state = {"a": 1}
        assert load_config(tmpdir, state) is False
        assert state == {"a": 1}


def test_empty_config_is_noop():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "config.yaml").write_text("")
        state = {}
        assert load_config(tmpdir, state) is False
        assert state == {}


def test_config_merged_onto_state():
    with tempfile.TemporaryDirectory() as tmpdir:
        with open(Path(tmpdir) / "config.yaml", "w") as f:
            yaml.dump({"log_level": "debug", "servers": ["a", "b"]}, f)
        state = {"log_level": "info", "theme": "dark"}

        assert load_config(tmpdir, state) is True
        assert state == {"log_level": "debug", "servers": ["a", "b"], "theme": "dark"}


def test_invalid_yaml_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "config.yaml").write_text("key: [unclosed\n")
        with pytest.raises(ConfigError) as exc:
            load_config(tmpdir, {})
        assert isinstance(exc.value.__cause__, yaml.YAMLError)


def test_non_mapping_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "config.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError) as exc:
            load_config(tmpdir, {})
        assert "must be a mapping" in str(exc.value)
