"""
Auth Service
Registration and login for users and admins, plus privileged admin creation.
"""

import logging
from typing import Dict, Any

from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash

from models import db, User, Admin, AdminRole
from services.errors import BadRequestError, ConflictError, UnauthorizedError
from utils.auth import create_access_token

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Salted one-way hash using the configured werkzeug method."""
    return generate_password_hash(password, method=current_app.config['PASSWORD_HASH_METHOD'])


def _email_taken(model, email: str) -> bool:
    return db.session.scalars(db.select(model).where(model.email == email)).first() is not None


def _authenticate(model, email: str, password: str):
    principal = db.session.scalars(db.select(model).where(model.email == email)).first()
    if principal is None or not check_password_hash(principal.password_hash, password):
        logger.warning(f"Failed {model.principal_type} login for {email}")
        raise BadRequestError('Invalid credentials')
    return principal


class AuthService:

    def register(self, credentials: Dict[str, Any]) -> User:
        email = credentials['email']
        if _email_taken(User, email):
            raise ConflictError('User with email already exists')

        user = User(
            first_name=credentials['first_name'],
            last_name=credentials['last_name'],
            email=email,
            password_hash=hash_password(credentials['password']),
        )
        db.session.add(user)
        db.session.commit()

        logger.info(f"User registered: {user.id} ({email})")
        return user

    def login(self, email: str, password: str) -> Dict[str, str]:
        user = _authenticate(User, email, password)
        logger.info(f"User {user.id} logged in")
        return {'accessToken': create_access_token(user)}

    def register_admin(self, credentials: Dict[str, Any]) -> Admin:
        email = credentials['email']
        if _email_taken(Admin, email):
            raise ConflictError('Admin with email address already exists')

        admin = Admin(
            full_name=credentials['full_name'],
            email=email,
            password_hash=hash_password(credentials['password']),
            role=credentials.get('role') or AdminRole.ADMIN.value,
        )
        db.session.add(admin)
        db.session.commit()

        logger.info(f"Admin registered: {admin.id} ({email}, {admin.role})")
        return admin

    def login_admin(self, email: str, password: str) -> Dict[str, str]:
        admin = _authenticate(Admin, email, password)
        logger.info(f"Admin {admin.id} logged in")
        return {'accessToken': create_access_token(admin)}

    def create_admin(self, caller, credentials: Dict[str, Any]) -> Admin:
        """Create another admin. Only a Super-Admin may do this."""
        acting_admin = db.session.get(Admin, caller.id) if isinstance(caller, Admin) else None
        if acting_admin is None or not acting_admin.is_super_admin:
            logger.warning(f"Admin creation refused for {getattr(caller, 'id', None)}")
            raise UnauthorizedError('You cannot create an admin')

        return self.register_admin(credentials)


auth_service = AuthService()
