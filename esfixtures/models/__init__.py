"""
Fixture and store result models.
"""
from esfixtures.models.fixture import CollectionFixture, FixtureSet, Record
from esfixtures.models.store import BulkItemResult, BulkResult

__all__ = [
    "CollectionFixture",
    "FixtureSet",
    "Record",
    "BulkItemResult",
    "BulkResult",
]
