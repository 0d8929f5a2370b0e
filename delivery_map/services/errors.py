"""Domain errors raised by map services."""


class MapServiceError(Exception):
    """Base class for settings and pin service failures."""


class ValidationError(MapServiceError):
    """Input cannot be stored as given."""


class NotFoundError(MapServiceError):
    """Requested record does not exist for the requesting shop."""


class StorageError(MapServiceError):
    """Backing store failed while reading or writing."""
