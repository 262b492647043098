"""
Authentication and authorization utilities.

Bearer tokens are resolved into a flask-login ``current_user`` by a request
loader, and routes are gated by principal type with ``roles_required``.
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Optional, Dict, Any

import jwt
from flask import current_app, request
from flask_login import LoginManager, login_required, current_user

from models import db, User, Admin
from services.errors import UnauthorizedError, ForbiddenError

logger = logging.getLogger(__name__)

login_manager = LoginManager()

PRINCIPAL_MODELS = {
    User.principal_type: User,
    Admin.principal_type: Admin,
}


def create_access_token(principal) -> str:
    """Issue a signed token for a User or Admin."""
    now = datetime.now(timezone.utc)
    payload = {
        'email': principal.email,
        'userId': principal.id,
        'type': principal.principal_type,
        'iat': now,
        'exp': now + timedelta(seconds=current_app.config['JWT_EXPIRES_IN']),
    }
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET'],
        algorithm=current_app.config['JWT_ALGORITHM'],
    )


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises:
        UnauthorizedError: token is expired, tampered with or malformed
    """
    try:
        return jwt.decode(
            token,
            current_app.config['JWT_SECRET'],
            algorithms=[current_app.config['JWT_ALGORITHM']],
            options={'require': ['exp', 'iat']},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError('Token has expired')
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected token: {e}")
        raise UnauthorizedError('Invalid token')


def resolve_principal(token: str):
    """Decode a token and load the User or Admin it names, or None."""
    try:
        claims = decode_access_token(token)
    except UnauthorizedError as e:
        logger.warning(f"Token rejected: {e.message}")
        return None

    model = PRINCIPAL_MODELS.get(claims.get('type'))
    if model is None or not claims.get('userId'):
        logger.warning(f"Token rejected: unknown principal type {claims.get('type')!r}")
        return None

    return db.session.get(model, claims['userId'])


def _bearer_token() -> Optional[str]:
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


@login_manager.request_loader
def load_principal_from_request(req):
    token = _bearer_token()
    if not token:
        return None
    return resolve_principal(token)


@login_manager.unauthorized_handler
def unauthorized():
    raise UnauthorizedError('You must be logged in to access this resource.')


def has_role(principal, required_role: str) -> bool:
    """Capability check: does the principal's type match the route's role?"""
    return getattr(principal, 'principal_type', None) == required_role


def roles_required(role: str):
    """
    Decorator to protect routes for one principal type ('user' or 'admin').

    Ensures:
    1. A valid bearer token was supplied (via login_required)
    2. The principal type matches ``role``

    Raises ForbiddenError (403) on mismatch.
    """
    def decorator(f):
        @wraps(f)
        @login_required
        def decorated_function(*args, **kwargs):
            if not has_role(current_user, role):
                logger.warning(
                    f"Access denied to {request.path} for {current_user.get_id()} (requires {role})"
                )
                raise ForbiddenError('You do not have permission to access this resource.')
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def get_current_principal():
    """Unwrap flask-login's proxy so services receive the model instance."""
    return current_user._get_current_object()
