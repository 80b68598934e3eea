"""Error types raised by the store services and the completion client."""


class StoreError(Exception):
    """Base class for catalog / order store failures."""


class NotFoundError(StoreError):
    """The referenced product, order or photo does not exist."""


class DuplicateKeyError(StoreError):
    """A unique constraint was violated (e.g. reused order id)."""


class InvalidTransitionError(StoreError):
    """An order status change was rejected by the state machine."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move order from '{current}' to '{requested}'")


class UpstreamError(Exception):
    """The completion service failed.

    ``reason`` is one of ``http_status``, ``network`` or ``malformed``.
    """

    def __init__(self, reason: str, message: str = ""):
        self.reason = reason
        super().__init__(message or reason)
