"""
Root pytest configuration and fixtures for unit and integration tests.

Service tests use ``db_session`` (which keeps an app context pushed for the
test). HTTP tests use ``client`` and the ``api`` helpers only, so each request
gets its own app context and its own resolved principal.
"""
import os
import sys
import uuid
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Test configuration
os.environ['FLASK_ENV'] = 'testing'
os.environ['SOCKETIO_ASYNC_MODE'] = 'threading'

TEST_PASSWORD = 'Password123!'


def unique_email(prefix: str) -> str:
    return f'{prefix}_{str(uuid.uuid4())[:8]}@example.com'


@pytest.fixture(scope='function')
def app():
    """Fresh application and in-memory database for every test."""
    from app import create_app
    from config import TestingConfig
    from models import db

    test_app = create_app(TestingConfig)

    yield test_app

    with test_app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create a test client for the Flask application."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Database session inside an app context held for the whole test."""
    from models import db

    with app.app_context():
        yield db.session
        db.session.rollback()
        db.session.remove()


@pytest.fixture
def make_user(db_session):
    """Factory creating users with unique emails and a known password."""
    from models import User
    from services.auth_service import hash_password

    def _make_user(first_name='Test', last_name='User', email=None):
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email or unique_email(first_name.lower()),
            password_hash=hash_password(TEST_PASSWORD),
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_admin(db_session):
    from models import Admin, AdminRole
    from services.auth_service import hash_password

    def _make_admin(role=AdminRole.ADMIN.value, email=None):
        admin = Admin(
            full_name='Test Admin',
            email=email or unique_email('admin'),
            password_hash=hash_password(TEST_PASSWORD),
            role=role,
        )
        db_session.add(admin)
        db_session.commit()
        return admin

    return _make_admin


@pytest.fixture
def creator(make_user):
    return make_user('Alice', 'Owner')


@pytest.fixture
def assignee(make_user):
    return make_user('Bob', 'Assignee')


@pytest.fixture
def outsider(make_user):
    return make_user('Carol', 'Outsider')


@pytest.fixture
def admin(make_admin):
    return make_admin()


@pytest.fixture
def super_admin(make_admin):
    from models import AdminRole
    return make_admin(role=AdminRole.SUPER_ADMIN.value)


@pytest.fixture
def make_task(db_session):
    """Factory creating tasks directly in the store."""
    from datetime import datetime
    from models import Task

    def _make_task(creator, title='Write report', due_date=None, tags=None, status='To-Do', assigned_to=None):
        task = Task(
            title=title,
            description=f'{title} description',
            due_date=due_date or datetime(2030, 1, 1),
            status=status,
            tags=list(tags or []),
            creator=creator,
            assigned_to=assigned_to,
        )
        db_session.add(task)
        db_session.commit()
        return task

    return _make_task


class ApiHelper:
    """Registers and logs in principals over HTTP and builds auth headers."""

    def __init__(self, client):
        self.client = client

    def register_user(self, first_name='Test', email=None):
        email = email or unique_email(first_name.lower())
        response = self.client.post('/auth/register', json={
            'firstName': first_name,
            'lastName': 'Tester',
            'email': email,
            'password': TEST_PASSWORD,
        })
        assert response.status_code == 201, response.get_json()
        user = response.get_json()['data']
        user['headers'] = self.login('/auth/login', email)
        return user

    def register_admin(self, role='Admin'):
        email = unique_email('admin')
        response = self.client.post('/admin/register', json={
            'fullName': 'Test Admin',
            'email': email,
            'password': TEST_PASSWORD,
            'role': role,
        })
        assert response.status_code == 201, response.get_json()
        admin = response.get_json()['data']
        admin['headers'] = self.login('/admin/login', email)
        return admin

    def login(self, path, email):
        response = self.client.post(path, json={'email': email, 'password': TEST_PASSWORD})
        assert response.status_code == 200, response.get_json()
        token = response.get_json()['data']['accessToken']
        return {'Authorization': f'Bearer {token}'}

    def create_task(self, owner, **overrides):
        payload = {
            'title': 'A',
            'description': 'Task description',
            'dueDate': '2030-01-01',
            'tags': ['x'],
        }
        payload.update(overrides)
        response = self.client.post('/tasks', json=payload, headers=owner['headers'])
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']


@pytest.fixture
def api(client):
    return ApiHelper(client)
