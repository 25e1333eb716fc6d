"""
Test configuration and shared fixtures for LapTrack tests.

This file contains:
- Centralized test configuration
- Shared fixtures used across multiple test files
- Common test utilities
"""

import pytest
from datetime import date
from laptrack import create_app
from laptrack.models import db, User, Laptop, Employee
from laptrack.utils.auth_utils import hash_password, generate_access_token


# Centralized test configuration
TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'SECRET_KEY': 'test-secret-key',
    'JWT_SECRET_KEY': 'test-jwt-secret-key',
    'REFRESH_TOKEN_SECRET': 'test-refresh-secret-key',
    'JWT_ACCESS_TOKEN_EXPIRES': 900,
    'JWT_REFRESH_TOKEN_EXPIRES': 3600,
    'BCRYPT_LOG_ROUNDS': 4,
    'RATELIMIT_ENABLED': False,
    'RATELIMIT_STORAGE_URI': 'memory://',
    'RATELIMIT_DEFAULT': '1000 per minute',
    'AUTH_RATE_LIMIT': '1000 per minute',
    'CORS_ORIGINS': '*',
    'DEFAULT_PAGE_SIZE': 20,
    'MAX_PAGE_SIZE': 100,
    'MAX_CONTENT_LENGTH': 1024 * 1024,
    'LOG_LEVEL': 'WARNING',
    'ENV_NAME': 'testing',
}

TEST_PASSWORD = 'TestPass123!'


def bearer(token):
    """Authorization header for a raw token"""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def app():
    """Create and configure a new app instance for each test."""
    app = create_app(TEST_CONFIG)
    return app


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()


@pytest.fixture
def app_context(app):
    """Create an application context for database operations."""
    with app.app_context():
        yield


@pytest.fixture
def db_session(app_context):
    """Create a database session and clean up after tests."""
    db.create_all()
    yield db.session
    db.session.remove()
    db.drop_all()


@pytest.fixture
def test_user(db_session):
    """Create an active staff user for testing."""
    user = User(
        email='staff@example.com',
        password_hash=hash_password(TEST_PASSWORD),
        name='Staff Member'
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def admin_user(db_session):
    """Create an active admin user for testing."""
    user = User(
        email='admin@example.com',
        password_hash=hash_password(TEST_PASSWORD),
        name='Admin',
        role='admin'
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def disabled_user(db_session):
    """Create a disabled user for testing."""
    user = User(
        email='disabled@example.com',
        password_hash=hash_password(TEST_PASSWORD)
    )
    user.status = 'disabled'
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def auth_headers(test_user):
    """Bearer headers for the staff user."""
    return bearer(generate_access_token(test_user))


@pytest.fixture
def admin_headers(admin_user):
    """Bearer headers for the admin user."""
    return bearer(generate_access_token(admin_user))


@pytest.fixture
def laptop(db_session):
    """Create an available laptop."""
    laptop = Laptop(
        brand='Dell',
        model='Latitude 7440',
        serial_number='DL-0001',
        purchase_date=date(2024, 1, 15),
        processor='Intel i7',
        ram='16GB',
        storage='512GB SSD'
    )
    db_session.add(laptop)
    db_session.commit()
    return laptop


@pytest.fixture
def employee(db_session):
    """Create an active employee."""
    employee = Employee(
        first_name='Ada',
        last_name='Lovelace',
        email='ada@example.com',
        department='Engineering',
        position='Developer'
    )
    db_session.add(employee)
    db_session.commit()
    return employee
