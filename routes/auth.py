"""
Authentication Routes
User registration and login. Login answers with a bearer token.
"""

import logging
from flask import Blueprint

from services.auth_service import auth_service
from utils.api_response import success_response
from utils.request_validation import get_json_body, require_string, require_email, require_password

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/register', methods=['POST'])
def register():
    """Register a new user account."""
    body = get_json_body()
    credentials = {
        'first_name': require_string(body, 'firstName', 'First name'),
        'last_name': require_string(body, 'lastName', 'Last name'),
        'email': require_email(body),
        'password': require_password(body),
    }

    user = auth_service.register(credentials)
    return success_response('User registered successfully', user.to_dict(), 201)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange email and password for an access token."""
    body = get_json_body()
    email = require_email(body)
    password = require_string(body, 'password', 'Password')

    tokens = auth_service.login(email, password)
    return success_response('Login successful', tokens)
