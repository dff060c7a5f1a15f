"""
Custom exceptions for the OutFlo API.
Provides consistent error handling across the application.
"""
from typing import Any

from fastapi import status


class OutfloException(Exception):
    """Base exception for OutFlo"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "An error occurred", error: Any = None):
        self.message = message
        self.error = error
        super().__init__(self.message)


class NotFoundError(OutfloException):
    """Resource not found"""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource", resource_id: str = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message)


class AlreadyExistsError(OutfloException):
    """Resource already exists"""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, resource: str = "Resource", field: str = None, value: str = None):
        if field and value:
            message = f"{resource} with {field} '{value}' already exists"
        else:
            message = f"{resource} already exists"
        super().__init__(message)


class ValidationError(OutfloException):
    """Validation failed"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Validation failed", field: str = None):
        error = None
        if field:
            error = [{"field": field, "message": message}]
        super().__init__(message, error)


class ExternalServiceError(OutfloException):
    """External service call failed"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, service: str = "External service", message: str = None, error: Any = None):
        msg = f"{service} call failed"
        if message:
            msg = message
        super().__init__(msg, error)


class RateLimitError(ExternalServiceError):
    """External service answered with a rate-limit response"""
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, service: str = "External service"):
        super().__init__(service, f"{service} rate limit exceeded")


# Raise helpers used by the services
def raise_not_found(resource: str = "Resource", resource_id: str = None):
    """Raise 404 NotFoundError"""
    raise NotFoundError(resource, resource_id)


def raise_already_exists(resource: str = "Resource", field: str = None, value: str = None):
    """Raise 409 AlreadyExistsError"""
    raise AlreadyExistsError(resource, field, value)


def raise_validation_error(message: str = "Validation failed", field: str = None):
    """Raise 400 ValidationError"""
    raise ValidationError(message, field)
