"""Exceptions raised by services and mapped to HTTP errors by controllers."""


class Unauthenticated(RuntimeError):
    """The caller's token is missing, malformed, or was rejected."""


class UpstreamUnavailable(IOError):
    """A service we depend on could not be reached, or answered nonsense."""


class InvalidArgument(ValueError):
    """The request payload is malformed."""


class StorageFailure(IOError):
    """Could not read from or write to persistent storage."""


class Conflict(RuntimeError):
    """The resource to be created already exists."""
