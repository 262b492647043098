"""
Service Error Taxonomy

Exceptions raised by the service layer. Each carries the HTTP status the API
layer answers with, so routes never translate errors by hand.
"""

from typing import Optional, Dict, Any


class ServiceError(Exception):
    """Base exception for task manager service errors."""
    status_code = 500

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': 'error',
            'message': self.message,
        }


class ValidationError(ServiceError):
    """Malformed or missing input."""
    status_code = 400


class BadRequestError(ServiceError):
    """Well-formed request that cannot be honoured, e.g. bad credentials."""
    status_code = 400


class UnauthorizedError(ServiceError):
    """Missing/invalid token or an ownership violation."""
    status_code = 401


class ForbiddenError(ServiceError):
    """Authenticated principal lacks the role a route requires."""
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    """Unique constraint violation such as a duplicate email."""
    status_code = 409
