"""
Registration, login and admin creation.
"""
import jwt
import pytest
from flask import current_app
from werkzeug.security import check_password_hash

from models import Admin, AdminRole, User
from services.auth_service import auth_service
from services.errors import BadRequestError, ConflictError, UnauthorizedError
from conftest import TEST_PASSWORD, unique_email


def _user_credentials(email):
    return {
        'first_name': 'Dana',
        'last_name': 'Doe',
        'email': email,
        'password': TEST_PASSWORD,
    }


def _admin_credentials(email, role=None):
    return {
        'full_name': 'Ops Admin',
        'email': email,
        'password': TEST_PASSWORD,
        'role': role,
    }


class TestUsers:

    def test_register_hashes_password(self, db_session):
        user = auth_service.register(_user_credentials(unique_email('dana')))

        stored = db_session.get(User, user.id)
        assert stored.password_hash != TEST_PASSWORD
        assert check_password_hash(stored.password_hash, TEST_PASSWORD)
        assert 'password' not in user.to_dict()
        assert 'passwordHash' not in user.to_dict()

    def test_duplicate_email_conflicts(self, db_session):
        email = unique_email('dana')
        auth_service.register(_user_credentials(email))

        with pytest.raises(ConflictError):
            auth_service.register(_user_credentials(email))

        assert db_session.query(User).filter_by(email=email).count() == 1

    def test_login_returns_token_with_claims(self, db_session):
        email = unique_email('dana')
        user = auth_service.register(_user_credentials(email))

        token = auth_service.login(email, TEST_PASSWORD)['accessToken']

        claims = jwt.decode(token, current_app.config['JWT_SECRET'], algorithms=['HS256'])
        assert claims['userId'] == user.id
        assert claims['email'] == email
        assert claims['type'] == 'user'
        assert claims['exp'] - claims['iat'] == current_app.config['JWT_EXPIRES_IN']

    @pytest.mark.parametrize('email_suffix, password', [
        ('', 'Wrong123!'),
        ('.unknown', TEST_PASSWORD),
    ])
    def test_bad_credentials(self, db_session, email_suffix, password):
        email = unique_email('dana')
        auth_service.register(_user_credentials(email))

        with pytest.raises(BadRequestError) as excinfo:
            auth_service.login(email + email_suffix, password)

        assert excinfo.value.message == 'Invalid credentials'

    def test_user_credentials_do_not_log_into_admin(self, db_session):
        email = unique_email('dana')
        auth_service.register(_user_credentials(email))

        with pytest.raises(BadRequestError):
            auth_service.login_admin(email, TEST_PASSWORD)


class TestAdmins:

    def test_register_defaults_to_admin_role(self, db_session):
        admin = auth_service.register_admin(_admin_credentials(unique_email('admin')))

        assert admin.role == AdminRole.ADMIN.value

    def test_duplicate_admin_email_conflicts(self, db_session):
        email = unique_email('admin')
        auth_service.register_admin(_admin_credentials(email))

        with pytest.raises(ConflictError):
            auth_service.register_admin(_admin_credentials(email))

    def test_admin_token_has_admin_type(self, db_session):
        email = unique_email('admin')
        auth_service.register_admin(_admin_credentials(email))

        token = auth_service.login_admin(email, TEST_PASSWORD)['accessToken']

        claims = jwt.decode(token, current_app.config['JWT_SECRET'], algorithms=['HS256'])
        assert claims['type'] == 'admin'

    def test_super_admin_creates_admin(self, db_session, super_admin):
        email = unique_email('created')

        created = auth_service.create_admin(super_admin, _admin_credentials(email, 'Admin'))

        assert db_session.get(Admin, created.id).email == email

    def test_plain_admin_cannot_create_admin(self, db_session, admin):
        email = unique_email('created')

        with pytest.raises(UnauthorizedError):
            auth_service.create_admin(admin, _admin_credentials(email))

        assert db_session.query(Admin).filter_by(email=email).count() == 0

    def test_user_cannot_create_admin(self, db_session, creator):
        with pytest.raises(UnauthorizedError):
            auth_service.create_admin(creator, _admin_credentials(unique_email('created')))
