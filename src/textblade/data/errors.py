"""Exceptions raised while loading and validating content definitions."""


class DataError(Exception):
    """Base exception for the content layer."""


class DataLoadError(DataError):
    """Raised when a definition file is missing or is not valid JSON."""


class DataValidationError(DataError):
    """Raised when definition content has the wrong shape."""


class DataReferenceError(DataError):
    """Raised when a definition points at an id that does not exist."""


class ContentNotFoundError(KeyError):
    """Raised when a monster, skill or location id is not in the content source."""

    def __init__(self, kind: str, content_id: str) -> None:
        super().__init__(content_id)
        self.kind = kind
        self.content_id = content_id

    def __str__(self) -> str:
        return f"{self.kind} '{self.content_id}' not found"
