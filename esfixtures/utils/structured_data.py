"""
Readers for fixture files.

Schema and settings files are single JSON documents; record sources are YAML
sequences of mappings. Both readers raise StructuredDataError with the file
path so callers can map it to the right ParseError subtype.
"""
import json
from pathlib import Path
from typing import Any

import yaml


class StructuredDataError(Exception):
    """Raised when a fixture file cannot be read or has the wrong shape."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


def read_json_object(path: Path) -> dict[str, Any] | None:
    """
    Read a JSON document that must contain an object.

    Args:
        path: File to read

    Returns:
        Parsed object, or None if the file does not exist

    Raises:
        StructuredDataError: If the file is unreadable, invalid JSON, or not an object
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise StructuredDataError(f"reading file: {e}", path) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StructuredDataError(f"invalid JSON: {e}", path) from e

    if not isinstance(data, dict):
        raise StructuredDataError(
            f"expected a JSON object, got {type(data).__name__}", path
        )

    return data


def read_yaml_mappings(path: Path) -> list[dict[str, Any]]:
    """
    Read a YAML file holding a top-level sequence of mappings.

    An empty file yields an empty list.

    Args:
        path: File to read

    Returns:
        List of mappings in file order, with top-level keys as strings

    Raises:
        StructuredDataError: If the file is unreadable, invalid YAML, or has the wrong shape
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StructuredDataError(f"reading file: {e}", path) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise StructuredDataError(f"invalid YAML: {e}", path) from e

    if data is None:
        return []

    if not isinstance(data, list):
        raise StructuredDataError(
            f"expected a sequence of mappings, got {type(data).__name__}", path
        )

    items = []
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise StructuredDataError(
                f"item {position} is a {type(item).__name__}, expected a mapping", path
            )
        items.append({str(key): value for key, value in item.items()})

    return items
