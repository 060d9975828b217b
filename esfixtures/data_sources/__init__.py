"""
Document store gateways.
"""
from esfixtures.data_sources.base import DocumentStore
from esfixtures.data_sources.http_store import HTTPDocumentStore
from esfixtures.data_sources.readiness import wait_for_store

__all__ = [
    "DocumentStore",
    "HTTPDocumentStore",
    "wait_for_store",
]
