import json
import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

from ..core.model import ListCandidate
from ..core.ports import ListSource
from ..errors import ListSourceError

logger = logging.getLogger(__name__)


def candidate_from_dict(data: dict[str, Any]) -> ListCandidate:
    """Build a ListCandidate from a task list record.

    ``full_path`` falls back to ``name`` for root lists that omit it.
    """
    if not isinstance(data, dict) or not data.get("name"):
        raise ListSourceError(f"List record without a name: {data!r}")
    try:
        task_count = int(data.get("task_count") or 0)
        depth = int(data.get("depth") or 0)
    except (TypeError, ValueError) as e:
        raise ListSourceError(f"Bad list record {data!r}: {e}") from e
    return ListCandidate(
        name=str(data["name"]),
        full_path=str(data.get("full_path") or data["name"]),
        task_count=task_count,
        depth=depth,
        color=data.get("color"),
    )


def flatten_lists(records: Iterable[dict[str, Any]]) -> list[ListCandidate]:
    """Flatten nested list records (``children``) depth-first, parents first."""
    out: list[ListCandidate] = []
    for record in records:
        out.append(candidate_from_dict(record))
        children = record.get("children") or []
        if children:
            out.extend(flatten_lists(children))
    return out


class StaticListSource(ListSource):
    def __init__(self, candidates: Iterable[ListCandidate] = ()):
        self._candidates = list(candidates)

    def lists(self) -> list[ListCandidate]:
        return list(self._candidates)


class FileListSource(ListSource):
    """
    Task lists read from a JSON or YAML file (chosen by suffix). The file
    holds either a list of records or a mapping with a "lists" key. It is
    re-read on every call so edits show up without a restart.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Any:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ListSourceError(f"Cannot read list file {self.path}: {e}") from e

        try:
            if self.path.suffix in (".yaml", ".yml"):
                return yaml.safe_load(raw)
            return json.loads(raw)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ListSourceError(f"Malformed list file {self.path}: {e}") from e

    def lists(self) -> list[ListCandidate]:
        data = self._load()
        if isinstance(data, dict):
            data = data.get("lists", [])
        if data is None:
            data = []
        if not isinstance(data, list):
            raise ListSourceError(f"Expected a list of records in {self.path}")

        candidates = flatten_lists(data)
        logger.debug("Loaded %d lists from %s", len(candidates), self.path)
        return candidates
