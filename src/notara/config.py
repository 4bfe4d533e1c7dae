"""Configuration loader for notara.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .errors import ConfigError
from .render.markup import DEFAULT_CLASSES

CONFIG_NAME = "notara.toml"


@dataclass
class NotesConfig:
    """Where the notes live."""
    root: Path


@dataclass
class RenderConfig:
    """Renderer options."""
    highlight: bool = True
    classes: dict[str, str] = field(default_factory=dict)


@dataclass
class ServerConfig:
    """Local API server options."""
    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class NotaraConfig:
    """Complete notara configuration."""
    notes: NotesConfig
    render: RenderConfig
    server: ServerConfig


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e


def load_config(config_path: Path | None = None, notes_path: Path | None = None) -> NotaraConfig:
    """
    Load configuration from notara.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/notara.toml
    3. notes_path/notara.toml

    Args:
        config_path: Explicit path to config file
        notes_path: Notes directory for fallback search

    Returns:
        NotaraConfig with resolved settings

    Raises:
        ConfigError: explicit file missing, bad TOML, or unknown class keys
    """
    toml_data: dict[str, Any] = {}

    if config_path is not None and not config_path.exists():
        raise ConfigError(f"Config file {config_path} not found")

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if notes_path:
        search_paths.append(notes_path / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            toml_data = _read_toml(path)
            break

    notes_data = toml_data.get("notes", {})
    notes_config = NotesConfig(
        root=Path(notes_data.get("root", notes_path or Path("./notes")))
    )

    render_data = toml_data.get("render", {})
    highlight = render_data.get("highlight", True)
    if not isinstance(highlight, bool):
        raise ConfigError(f"render.highlight must be true or false, not {highlight!r}")
    classes = render_data.get("classes", {})
    if not isinstance(classes, dict):
        raise ConfigError("render.classes must be a table of class strings")
    unknown = sorted(set(classes) - set(DEFAULT_CLASSES))
    if unknown:
        raise ConfigError(f"Unknown render.classes keys: {', '.join(unknown)}")
    bad = sorted(k for k, v in classes.items() if not isinstance(v, str))
    if bad:
        raise ConfigError(f"render.classes values must be strings: {', '.join(bad)}")
    render_config = RenderConfig(highlight=highlight, classes=dict(classes))

    server_data = toml_data.get("server", {})
    port = server_data.get("port", 8765)
    if isinstance(port, bool) or not isinstance(port, int):
        raise ConfigError(f"server.port must be an integer, not {port!r}")
    server_config = ServerConfig(
        host=str(server_data.get("host", "127.0.0.1")),
        port=port,
    )

    return NotaraConfig(
        notes=notes_config,
        render=render_config,
        server=server_config,
    )
