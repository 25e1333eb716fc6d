"""
Rate limiting tests

Each test builds its own app with limiting switched on so the counters start
empty; the shared TEST_CONFIG keeps limiting off for every other module.
"""

import pytest
from laptrack import create_app
from laptrack.models import db
from conftest import TEST_CONFIG


@pytest.fixture
def limited_client():
    config = dict(TEST_CONFIG, RATELIMIT_ENABLED=True, AUTH_RATE_LIMIT='3 per minute',
                  RATELIMIT_DEFAULT='5 per minute')
    app = create_app(config)
    with app.app_context():
        db.create_all()
        yield app.test_client()
        db.session.remove()
        db.drop_all()


def bad_login(client):
    return client.post('/api/auth/login', json={'email': 'nobody@example.com', 'password': 'Wr0ngPass'})


def test_login_is_rate_limited(limited_client):
    for _ in range(3):
        assert bad_login(limited_client).status_code == 401

    response = bad_login(limited_client)
    assert response.status_code == 429
    assert response.json['success'] is False
    assert response.json['error'] == 'RATE_LIMITED'


def test_default_limit_applies_to_api(limited_client):
    statuses = [limited_client.get('/api/status').status_code for _ in range(6)]
    assert statuses[:5] == [200] * 5
    assert statuses[5] == 429


def test_health_and_metrics_are_exempt(limited_client):
    for _ in range(10):
        assert limited_client.get('/health').status_code == 200
        assert limited_client.get('/metrics').status_code == 200


def test_limits_are_per_client(limited_client):
    for _ in range(3):
        bad_login(limited_client)
    assert bad_login(limited_client).status_code == 429

    response = limited_client.post('/api/auth/login',
                                   json={'email': 'nobody@example.com', 'password': 'Wr0ngPass'},
                                   environ_base={'REMOTE_ADDR': '10.0.0.2'})
    assert response.status_code == 401
