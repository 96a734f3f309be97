"""Exceptions raised by the console backends."""


class BackendError(RuntimeError):
    """The display or input backend could not be started."""
