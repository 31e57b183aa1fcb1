"""Error taxonomy for the adaptation pipeline."""


class AdaptiveUXError(Exception):
    """Base class for all adaptive UX errors."""


class StorageFailure(AdaptiveUXError):
    """A storage backend could not read, write or decode a record.

    Always non-fatal: callers log it and carry on with in-memory state.
    """


class LayoutNotFoundError(AdaptiveUXError):
    """A referenced layout id is in neither the cache nor storage."""

    def __init__(self, layout_id: str) -> None:
        self.layout_id = layout_id
        super().__init__(f"Layout configuration not found: {layout_id}")


class NoCurrentLayoutError(AdaptiveUXError):
    """A mutation was attempted while no layout is active."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"No current layout selected (operation: {operation})")


class CallbackFailure(AdaptiveUXError):
    """A subscriber raised while being notified.

    Never raised to the publisher; collected and logged by the broadcaster.
    """

    def __init__(self, callback: object, error: Exception) -> None:
        self.callback = callback
        self.error = error
        name = getattr(callback, "__qualname__", repr(callback))
        super().__init__(f"Callback {name} failed: {error!r}")
