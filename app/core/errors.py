# app/core/errors.py
from typing import List, Optional


class ServiceError(Exception):
    """Errore applicativo con lo status HTTP da restituire al client."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingCredential(ServiceError):
    status_code = 401
    default_message = "Access token required"


class InvalidCredential(ServiceError):
    status_code = 401
    default_message = "Invalid token"


class ExpiredCredential(ServiceError):
    status_code = 401
    default_message = "Token expired"


class ValidationFailed(ServiceError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: List[dict], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors


class EmailAlreadyRegistered(ServiceError):
    status_code = 400
    default_message = "User already exists"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Access denied"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class StorageFailure(ServiceError):
    status_code = 500
    default_message = "Storage error"


class InvalidLogin(ServiceError):
    status_code = 401
    default_message = "Invalid email or password"
