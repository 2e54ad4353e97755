"""Runtime wiring helper for the CLI and API."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .adapters.list_source import FileListSource, StaticListSource
from .config import FlowTextConfig, load_config
from .core.ports import ListSource


@dataclass
class Runtime:
    """Container for all wired components."""
    config: FlowTextConfig
    lists: ListSource


def build_runtime(
    config_path: Path | None = None,
    lists_path: Path | None = None,
) -> Runtime:
    """Build and wire all components."""
    # Load configuration
    config = load_config(config_path=config_path)

    # Use config values if CLI args not provided
    if lists_path is None:
        lists_path = config.suggest.lists

    lists: ListSource
    if lists_path is not None:
        lists = FileListSource(lists_path)
    else:
        lists = StaticListSource()

    return Runtime(config=config, lists=lists)


def configure_logging(level: str, verbose: bool = False) -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
