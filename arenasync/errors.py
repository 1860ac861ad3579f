class DeskError(Exception):
    """Base for every failure the desk reports back to staff."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(DeskError):
    """Required input missing; raised before any write is attempted."""


class AuthenticationFailed(DeskError):
    pass


class EmptyInventory(DeskError):
    pass


class OperationInProgress(DeskError):
    """The initiating control is still busy with a previous store call."""


class ConfirmationRequired(DeskError):
    pass


class StoreOperationFailed(DeskError):
    """A read or write against the remote store failed."""


class StoreUnavailable(DeskError):
    """Store connection parameters are missing."""


class NotFound(DeskError):
    pass
