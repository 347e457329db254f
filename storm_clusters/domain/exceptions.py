"""Domain errors raised by the clustering pipeline."""


class StormClusterError(Exception):
    """Base class for all pipeline errors."""


class SchemaError(StormClusterError, ValueError):
    """Input table is missing required columns or holds invalid values."""


class InvalidParameterError(StormClusterError, ValueError):
    """A configuration parameter is outside its allowed range."""


class InsufficientDataError(StormClusterError, ValueError):
    """Not enough data survived filtering to run the requested step."""
