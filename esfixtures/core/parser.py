"""
Fixture tree parser.

Layout of a fixture root:

    fixtures/
        users/                  one directory per collection
            _mapping.json       optional schema
            _settings.json      optional settings
            users.yml           record sources: *.yml / *.yaml not starting with "_"
        products/
            ...

Parsing is read-only and fail-fast: the first malformed file aborts the whole
parse and no partial FixtureSet is returned.
"""
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ..models.fixture import CollectionFixture, FixtureSet, Record
from ..utils.logging import get_logger
from ..utils.structured_data import StructuredDataError, read_json_object, read_yaml_mappings
from .exceptions import (
    EmptyFixtureSetError,
    FixtureDirectoryError,
    MalformedRecordsError,
    MalformedSchemaError,
    MalformedSettingsError,
    ParseError,
)

logger = get_logger(__name__)

MAPPING_FILE = "_mapping.json"
SETTINGS_FILE = "_settings.json"
RESERVED_PREFIX = "_"
RECORD_EXTENSIONS = (".yml", ".yaml")
ID_FIELD = "_id"


def parse_fixtures(root: str | Path) -> FixtureSet:
    """
    Parse every collection directory under `root`.

    Args:
        root: Fixture root directory

    Returns:
        FixtureSet with one CollectionFixture per subdirectory

    Raises:
        ParseError: If the root is unusable, empty, or any collection is malformed
    """
    root = Path(root)

    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise FixtureDirectoryError(f"reading fixtures directory: {e}", root) from e

    collections = []
    for entry in entries:
        if not entry.is_dir():
            continue

        try:
            collections.append(parse_collection_dir(entry))
        except ParseError as e:
            logger.error("collection_parse_failed", collection=entry.name, error=str(e))
            raise e.for_collection(entry.name)

    if not collections:
        raise EmptyFixtureSetError("no collection directories found", root)

    fixture_set = FixtureSet(root=root, collections=tuple(collections))
    logger.info(
        "fixtures_parsed",
        root=str(root),
        collections=fixture_set.names,
        records=sum(len(c.records) for c in fixture_set)
    )
    return fixture_set


def parse_collection_dir(directory: Path) -> CollectionFixture:
    """Parse one collection directory: mapping, settings and record sources."""
    try:
        mapping = read_json_object(directory / MAPPING_FILE)
    except StructuredDataError as e:
        raise MalformedSchemaError(f"malformed {MAPPING_FILE}: {e}", e.path) from e

    try:
        settings = read_json_object(directory / SETTINGS_FILE)
    except StructuredDataError as e:
        raise MalformedSettingsError(f"malformed {SETTINGS_FILE}: {e}", e.path) from e

    sources = find_record_sources(directory)

    records: list[Record] = []
    for source in sources:
        records.extend(parse_record_source(source))

    logger.debug(
        "collection_parsed",
        collection=directory.name,
        has_mapping=mapping is not None,
        has_settings=settings is not None,
        sources=len(sources),
        records=len(records)
    )

    return CollectionFixture(
        name=directory.name,
        mapping=mapping,
        settings=settings,
        records=tuple(records),
        sources=tuple(sources),
    )


def find_record_sources(directory: Path) -> list[Path]:
    """YAML files directly inside `directory`, skipping reserved names."""
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise FixtureDirectoryError(f"reading directory: {e}", directory) from e

    return [
        entry for entry in entries
        if entry.is_file()
        and entry.name.endswith(RECORD_EXTENSIONS)
        and not entry.name.startswith(RESERVED_PREFIX)
    ]


def parse_record_source(path: Path) -> list[Record]:
    """Parse a YAML record source into Records, extracting `_id`."""
    try:
        raw_records = read_yaml_mappings(path)
    except StructuredDataError as e:
        raise MalformedRecordsError(f"malformed record source: {e}", e.path) from e

    records = []
    for position, raw in enumerate(raw_records):
        body = dict(raw)
        record_id = ""
        if ID_FIELD in body:
            value = body.pop(ID_FIELD)
            try:
                record_id = format_record_id(value)
            except TypeError as e:
                raise MalformedRecordsError(f"record {position}: {e}", path) from e
        records.append(Record(id=record_id, body=body))

    return records


def format_record_id(value: Any) -> str:
    """
    Coerce an `_id` value to the identifier sent to the store.

    Args:
        value: Scalar taken from the record source

    Returns:
        String identifier; empty for a null `_id`

    Raises:
        TypeError: If the value is not a scalar

    Examples:
        >>> format_record_id(7)
        '7'
        >>> format_record_id(7.0)
        '7'
        >>> format_record_id(True)
        'true'
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"_id must be a scalar, got {type(value).__name__}")
