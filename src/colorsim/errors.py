"""Exceptions raised by the coloring simulator."""


class EmptyCollectionError(LookupError):
    """Raised when peeking or removing from an empty queue or stack."""


class EngineStateError(RuntimeError):
    """Raised when the engine is driven outside of a running phase."""
