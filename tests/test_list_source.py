"""Tests for task list sources."""

import json
import tempfile
from pathlib import Path

import pytest

from flowtext.adapters.list_source import (
    FileListSource,
    StaticListSource,
    candidate_from_dict,
    flatten_lists,
)
from flowtext.core.model import ListCandidate
from flowtext.errors import ListSourceError

RECORDS = [
    {
        "name": "Work",
        "task_count": 3,
        "children": [
            {"name": "Q3", "full_path": "Work/Q3", "depth": 1, "color": "#ff0000"},
        ],
    },
    {"name": "Home"},
]


def test_candidate_from_dict_defaults():
    """Test that full_path falls back to name."""
    candidate = candidate_from_dict({"name": "Home"})
    assert candidate == ListCandidate(name="Home", full_path="Home")


def test_candidate_without_name():
    """Test that a nameless record is rejected."""
    with pytest.raises(ListSourceError):
        candidate_from_dict({"full_path": "x"})


@pytest.mark.parametrize("field,value", [("task_count", "many"), ("depth", [1])])
def test_candidate_non_numeric_count(field, value):
    """Test that non-numeric counts are rejected as malformed records."""
    with pytest.raises(ListSourceError):
        candidate_from_dict({"name": "Work", field: value})


def test_file_source_non_numeric_count():
    """Test that a list file with a bad task_count raises ListSourceError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "lists.json"
        path.write_text(json.dumps([{"name": "Work", "task_count": "many"}]))
        with pytest.raises(ListSourceError):
            FileListSource(path).lists()


def test_flatten_lists_parents_first():
    """Test depth-first flattening of children."""
    paths = [c.full_path for c in flatten_lists(RECORDS)]
    assert paths == ["Work", "Work/Q3", "Home"]


def test_static_source_returns_copy():
    """Test the in-memory source."""
    source = StaticListSource([ListCandidate(name="A", full_path="A")])
    got = source.lists()
    got.clear()
    assert len(source.lists()) == 1


def test_file_source_json():
    """Test loading a JSON list file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "lists.json"
        path.write_text(json.dumps(RECORDS))

        lists = FileListSource(path).lists()
        assert [c.name for c in lists] == ["Work", "Q3", "Home"]
        assert lists[0].task_count == 3
        assert lists[1].color == "#ff0000"


def test_file_source_yaml_mapping():
    """Test loading a YAML file with a top-level lists key."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "lists.yaml"
        path.write_text("""
lists:
  - name: Shopping
    children:
      - name: Grocery
        full_path: Shopping/Grocery
        depth: 1
""")

        lists = FileListSource(path).lists()
        assert [c.full_path for c in lists] == ["Shopping", "Shopping/Grocery"]


def test_file_source_empty_yaml():
    """Test that an empty YAML file has no lists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "lists.yml"
        path.write_text("")
        assert FileListSource(path).lists() == []


def test_file_source_missing_file():
    """Test that a missing file raises ListSourceError."""
    with pytest.raises(ListSourceError):
        FileListSource(Path("/nonexistent/lists.json")).lists()


def test_file_source_malformed():
    """Test that malformed content raises ListSourceError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "lists.json"
        path.write_text("{not json")
        with pytest.raises(ListSourceError):
            FileListSource(path).lists()

        path.write_text('{"lists": 5}')
        with pytest.raises(ListSourceError):
            FileListSource(path).lists()
