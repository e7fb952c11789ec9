class InventoryError(Exception):
    """Base exception for inventory service errors."""

    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.

        Args:
            message: Error message
            code: Application status code
            details: Additional error details
        """
        self.message = message or "An error occurred in the inventory service"
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            'error': self.__class__.__name__,
            'message': self.message,
        }

        if self.code:
            error_dict['code'] = self.code

        if self.details:
            error_dict['details'] = self.details

        return error_dict


class ValidationError(InventoryError):
    """Malformed or out-of-range input. Nothing was written."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Validation error"
        super().__init__(message, code, details)


class NotFoundError(InventoryError):
    """The referenced inventory record does not exist."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Resource not found"
        super().__init__(message, code, details)


class StorageError(InventoryError):
    """Snapshot read or write failed. Nothing is assumed committed."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Storage error"
        super().__init__(message, code, details)
