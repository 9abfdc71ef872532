# backend/stockroom/core/errors.py


class InventoryError(Exception):
    """Base for errors that map onto an HTTP status and a public message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    status_code = 400


class NotFoundError(InventoryError):
    status_code = 404


class ConflictError(InventoryError):
    status_code = 409


class StorageError(InventoryError):
    # message is shown to callers; keep driver details out of it
    status_code = 500
