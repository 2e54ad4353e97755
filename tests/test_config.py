"""Tests for configuration loading."""

import os
import tempfile
from pathlib import Path

import pytest

from flowtext.config import load_config
from flowtext.errors import ConfigError


def test_load_config_defaults():
    """Test loading config with defaults when no file exists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(config_path=Path(tmpdir) / "missing.toml")

    assert config.markup.hashtags is True
    assert config.editing.bold_marker == "**"
    assert config.suggest.limit == 8
    assert config.suggest.lists is None
    assert config.api.port == 8765
    assert config.logging.level == "WARNING"


def test_load_config_from_file():
    """Test loading config from a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "flowtext.toml"
        config_path.write_text("""
[markup]
hashtags = false
images = false

[editing]
bold_marker = "__"
italic_marker = "_"

[suggest]
limit = 3
lists = "lists.yaml"

[api]
host = "0.0.0.0"
port = 9000

[logging]
level = "debug"
""")

        config = load_config(config_path=config_path)

        assert config.markup.hashtags is False
        assert config.markup.emphasis is True
        assert config.markup.images is False
        assert config.editing.bold_marker == "__"
        assert config.editing.italic_marker == "_"
        assert config.suggest.limit == 3
        assert config.suggest.lists == Path(tmpdir) / "lists.yaml"
        assert config.api.host == "0.0.0.0"
        assert config.api.port == 9000
        assert config.logging.level == "DEBUG"


def test_load_config_search_cwd():
    """Test config search in current working directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        orig_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            Path(tmpdir, "flowtext.toml").write_text("""
[suggest]
limit = 12
""")

            config = load_config()
            assert config.suggest.limit == 12
        finally:
            os.chdir(orig_cwd)


def test_load_config_absolute_lists_path():
    """Test that absolute list paths are kept as is."""
    with tempfile.TemporaryDirectory() as tmpdir:
        lists = Path(tmpdir) / "elsewhere" / "lists.json"
        config_path = Path(tmpdir) / "flowtext.toml"
        config_path.write_text(f'[suggest]\nlists = "{lists.as_posix()}"\n')

        config = load_config(config_path=config_path)
        assert config.suggest.lists == lists


def test_load_config_invalid_toml():
    """Test that a broken file raises ConfigError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "flowtext.toml"
        config_path.write_text("[markup\nhashtags = ")

        with pytest.raises(ConfigError):
            load_config(config_path=config_path)


def test_load_config_empty_marker():
    """Test that empty emphasis markers are rejected."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "flowtext.toml"
        config_path.write_text('[editing]\nbold_marker = ""\n')

        with pytest.raises(ConfigError):
            load_config(config_path=config_path)


@pytest.mark.parametrize("value", ['"8"', "true", "2.5"])
def test_load_config_non_integer_limit(value):
    """Test that a non-integer suggestion limit is rejected."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "flowtext.toml"
        config_path.write_text(f"[suggest]\nlimit = {value}\n")

        with pytest.raises(ConfigError):
            load_config(config_path=config_path)
