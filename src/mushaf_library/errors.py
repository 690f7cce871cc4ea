"""Exceptions raised by the library."""


class NotInitializedError(RuntimeError):
    """A container accessor was used before ``MushafContainer.initialize()``."""
