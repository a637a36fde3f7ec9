"""Exception hierarchy for helisdf.

Construction-time validation raises :class:`InvalidParameterError`; thread
registry misses raise :class:`UnknownThreadError`.  Evaluation never raises.
"""


class HelisdfError(Exception):
    """Base error for all helisdf failures."""


class InvalidParameterError(HelisdfError, ValueError):
    """Raised when a node is built from parameters that describe no valid solid."""


class UnknownThreadError(HelisdfError, LookupError):
    """Raised when a thread name is not present in a thread database."""
