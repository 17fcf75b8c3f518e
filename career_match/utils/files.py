"""YAML/JSON document loading shared by the question bank and career catalog."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def load_document(path: Path | str) -> Any:
    """Load a YAML or JSON document, detecting the format from the suffix.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be parsed.
    """
    doc_path = Path(path)
    if not doc_path.exists():
        raise FileNotFoundError(f"File not found: {doc_path}")

    suffix = doc_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return _load_yaml(doc_path)
    if suffix == ".json":
        return _load_json(doc_path)
    return _load_unknown(doc_path)


def extract_items(data: Any, key: str, path: Path | str) -> list[Any]:
    """Return the list payload, accepting either a bare list or `{key: [...]}`."""
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get(key)
        if data is None:
            raise ValueError(f"Expected a '{key}' list in {path}")
    if not isinstance(data, list):
        raise ValueError(f"'{key}' must be a list: {path}")
    return data


def _load_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML file: {path}") from e


def _load_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON file: {path}") from e


def _load_unknown(path: Path) -> Any:
    """Auto-detect the format when the file extension is unknown."""
    raw = path.read_text(encoding="utf-8")
    raw_stripped = raw.lstrip()

    # Try JSON first if it looks like JSON, otherwise fall back to YAML.
    if raw_stripped.startswith("{") or raw_stripped.startswith("["):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            pass

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid file format: {path}") from e
