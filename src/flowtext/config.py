"""Configuration loader for flowtext.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .errors import ConfigError


@dataclass
class MarkupConfig:
    """Which inline forms the tokenizer recognizes."""
    hashtags: bool = True
    emphasis: bool = True
    images: bool = True


@dataclass
class EditingConfig:
    """Marker strings used by the bold/italic toggles."""
    bold_marker: str = "**"
    italic_marker: str = "*"


@dataclass
class SuggestConfig:
    """Hashtag suggestion configuration."""
    limit: int = 8
    lists: Path | None = None


@dataclass
class ApiConfig:
    """Local JSON API configuration."""
    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class FlowTextConfig:
    """Complete flowtext configuration."""
    markup: MarkupConfig = field(default_factory=MarkupConfig)
    editing: EditingConfig = field(default_factory=EditingConfig)
    suggest: SuggestConfig = field(default_factory=SuggestConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Path | None = None) -> FlowTextConfig:
    """
    Load configuration from flowtext.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/flowtext.toml

    Relative list paths are resolved against the config file's directory.

    Args:
        config_path: Explicit path to config file

    Returns:
        FlowTextConfig with resolved settings

    Raises:
        ConfigError: If the config file is not valid TOML
    """
    toml_data: dict[str, Any] = {}
    base_dir = Path.cwd()

    # Search for config file
    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / "flowtext.toml")

    for path in search_paths:
        if path.exists():
            try:
                with open(path, "rb") as f:
                    toml_data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(f"Invalid config file {path}: {e}") from e
            base_dir = path.parent
            break

    # Parse markup config
    markup_data = toml_data.get("markup", {})
    markup_config = MarkupConfig(
        hashtags=markup_data.get("hashtags", True),
        emphasis=markup_data.get("emphasis", True),
        images=markup_data.get("images", True),
    )

    # Parse editing config
    editing_data = toml_data.get("editing", {})
    editing_config = EditingConfig(
        bold_marker=editing_data.get("bold_marker", "**"),
        italic_marker=editing_data.get("italic_marker", "*"),
    )
    if not editing_config.bold_marker or not editing_config.italic_marker:
        raise ConfigError("Emphasis markers must not be empty")

    # Parse suggest config
    suggest_data = toml_data.get("suggest", {})
    lists_path = None
    if suggest_data.get("lists"):
        lists_path = Path(suggest_data["lists"])
        if not lists_path.is_absolute():
            lists_path = base_dir / lists_path
    limit = suggest_data.get("limit", 8)
    if not isinstance(limit, int) or isinstance(limit, bool):
        raise ConfigError(f"[suggest] limit must be an integer, got {limit!r}")
    suggest_config = SuggestConfig(
        limit=limit,
        lists=lists_path,
    )

    # Parse API config
    api_data = toml_data.get("api", {})
    api_config = ApiConfig(
        host=api_data.get("host", "127.0.0.1"),
        port=api_data.get("port", 8765),
    )

    # Parse logging config
    logging_data = toml_data.get("logging", {})
    logging_config = LoggingConfig(
        level=str(logging_data.get("level", "WARNING")).upper()
    )

    return FlowTextConfig(
        markup=markup_config,
        editing=editing_config,
        suggest=suggest_config,
        api=api_config,
        logging=logging_config,
    )
