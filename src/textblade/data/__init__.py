"""Content source: loads game definitions from JSON."""

from .errors import (
    ContentNotFoundError,
    DataError,
    DataLoadError,
    DataReferenceError,
    DataValidationError,
)
from .paths import get_content_file, get_definitions_path, get_project_root

__all__ = [
    "ContentNotFoundError",
    "DataError",
    "DataLoadError",
    "DataReferenceError",
    "DataValidationError",
    "get_content_file",
    "get_definitions_path",
    "get_project_root",
]
