"""Tests for configuration loading."""

import os
import tempfile
from pathlib import Path

import pytest

from notara.config import load_config
from notara.errors import ConfigError


def test_load_config_defaults():
    """Test loading config with defaults when no file exists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        original_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            config = load_config()
        finally:
            os.chdir(original_cwd)

    assert config.notes.root == Path("./notes")
    assert config.render.highlight is True
    assert config.render.classes == {}
    assert config.server.host == "127.0.0.1"
    assert config.server.port == 8765


def test_load_config_from_file():
    """Test loading config from a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "notara.toml"
        config_path.write_text("""
[notes]
root = "my-notes"

[render]
highlight = false

[render.classes]
p = "prose"
h1 = "title"

[server]
host = "0.0.0.0"
port = 9000
""")

        config = load_config(config_path=config_path)

        assert config.notes.root == Path("my-notes")
        assert config.render.highlight is False
        assert config.render.classes == {"p": "prose", "h1": "title"}
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 9000


def test_load_config_search_cwd():
    """Test that config is found in the current directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "notara.toml").write_text('[notes]\nroot = "cwd-notes"\n')
        original_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            config = load_config()
        finally:
            os.chdir(original_cwd)

        assert config.notes.root == Path("cwd-notes")


def test_load_config_search_notes_dir():
    """Test that config is found inside the notes directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        notes = Path(tmpdir) / "notes"
        notes.mkdir()
        (notes / "notara.toml").write_text("[server]\nport = 7000\n")
        original_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            config = load_config(notes_path=notes)
        finally:
            os.chdir(original_cwd)

        assert config.server.port == 7000
        assert config.notes.root == notes


def test_missing_explicit_config():
    """An explicit config path that does not exist is an error."""
    with pytest.raises(ConfigError, match="not found"):
        load_config(config_path=Path("/nonexistent/notara.toml"))


def test_unknown_class_key():
    """Unknown render.classes keys are rejected by name."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "notara.toml"
        config_path.write_text('[render.classes]\nparagraph = "x"\n')

        with pytest.raises(ConfigError, match="paragraph"):
            load_config(config_path=config_path)


def test_bad_toml():
    """Malformed TOML raises ConfigError instead of a parser exception."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "notara.toml"
        config_path.write_text("[notes\nroot = \n")

        with pytest.raises(ConfigError):
            load_config(config_path=config_path)


def test_bad_port():
    """A non-integer port is a config error."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "notara.toml"
        config_path.write_text('[server]\nport = "high"\n')

        with pytest.raises(ConfigError, match="port"):
            load_config(config_path=config_path)


@pytest.mark.parametrize(
    "body, message",
    [
        ('[render]\nhighlight = "false"\n', "highlight"),
        ('[render]\nclasses = "x"\n', "table"),
        ("[render.classes]\np = 3\n", "p"),
        ("[server]\nport = true\n", "port"),
    ],
)
def test_wrong_value_types(body, message):
    """Values of the wrong type raise ConfigError instead of being coerced."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "notara.toml"
        config_path.write_text(body)

        with pytest.raises(ConfigError, match=message):
            load_config(config_path=config_path)
