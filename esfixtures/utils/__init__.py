"""
Utility modules for esfixtures.
"""
from esfixtures.utils.structured_data import (
    read_json_object,
    read_yaml_mappings,
    StructuredDataError,
)
from esfixtures.utils.logging import get_logger, setup_logging

__all__ = [
    "read_json_object",
    "read_yaml_mappings",
    "StructuredDataError",
    "get_logger",
    "setup_logging",
]
