"""
In-memory model of a parsed fixture tree.
"""
from pathlib import Path
from typing import Any, Iterator
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Record(BaseModel):
    """One document to be written to a collection."""
    model_config = ConfigDict(frozen=True)

    id: str = ""  # empty means the store assigns one
    body: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_identity_stripped(self) -> "Record":
        if "_id" in self.body:
            raise ValueError("record body must not contain the '_id' key")
        return self


class CollectionFixture(BaseModel):
    """A collection directory: optional mapping/settings plus its records."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    mapping: dict[str, Any] | None = None
    settings: dict[str, Any] | None = None
    records: tuple[Record, ...] = ()
    sources: tuple[Path, ...] = ()


class FixtureSet(BaseModel):
    """All collections found under a fixture root, in listing order."""
    model_config = ConfigDict(frozen=True)

    root: Path
    collections: tuple[CollectionFixture, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_unique_names(self) -> "FixtureSet":
        names = [c.name for c in self.collections]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate collection names in {names}")
        return self

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.collections]

    def get(self, name: str) -> CollectionFixture | None:
        for collection in self.collections:
            if collection.name == name:
                return collection
        return None

    def __iter__(self) -> Iterator[CollectionFixture]:  # type: ignore[override]
        return iter(self.collections)

    def __len__(self) -> int:
        return len(self.collections)
