"""Custom exceptions for the weighbridge order service."""

class WeighbridgeError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        # Frontends read the 'error' key
        rv['error'] = self.message
        rv['status'] = 'error'
        return rv

class ValidationError(WeighbridgeError):
    """Raised when a request payload is missing or carries invalid fields."""
    def __init__(self, message, payload=None):
        super().__init__(message, 400, payload)

class NotFoundError(WeighbridgeError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="not found", payload=None):
        super().__init__(message, 404, payload)
