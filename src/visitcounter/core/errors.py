"""Error types raised by the counter service and its collaborators."""


class VisitCounterError(Exception):
    """Base class for visit counter errors."""
    pass


class StoreUnavailable(VisitCounterError):
    """The visit store could not be reached or the query failed."""
    pass


class ConfigError(VisitCounterError):
    """An environment setting could not be parsed."""
    pass
