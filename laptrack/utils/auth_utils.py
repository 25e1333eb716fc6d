"""
Authentication Utilities

FLOW OVERVIEW
- hash_password / verify_password → bcrypt with BCRYPT_LOG_ROUNDS.
- create_user / authenticate_user → user lifecycle helpers.
- generate_access_token / verify_access_token → short-lived JWT signed with JWT_SECRET_KEY.
- generate_refresh_token / verify_refresh_token → long-lived JWT signed with
  REFRESH_TOKEN_SECRET, persisted as RefreshToken so it can be rotated or revoked.
- get_bearer_token → extract the token from `Authorization: Bearer <jwt>`.
"""

import logging
from datetime import datetime, timedelta

import bcrypt
import jwt
from flask import current_app, request

from ..models import db, User, RefreshToken

logger = logging.getLogger(__name__)

JWT_ALGORITHM = 'HS256'


def hash_password(password):
    """Hash a password using bcrypt"""
    rounds = current_app.config.get('BCRYPT_LOG_ROUNDS', 12)
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password, password_hash):
    """Verify a password against its hash"""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # malformed stored hash
        return False


def create_user(email, password, name=None, role='staff'):
    """Create a new user with a hashed password"""
    if not email or not email.strip():
        raise ValueError("Email cannot be empty")
    if not password:
        raise ValueError("Password cannot be empty")

    user = User(email=email, password_hash=hash_password(password), name=name, role=role)
    db.session.add(user)
    db.session.commit()
    logger.info(f"Created {role} user {user.user_id}")
    return user


def authenticate_user(email, password):
    """Return the user for valid credentials, otherwise None"""
    user = User.query.filter_by(email=(email or '').strip().lower()).first()
    if user and verify_password(password, user.password_hash):
        return user
    return None


def generate_access_token(user):
    """Generate a signed access token for a user"""
    now = datetime.utcnow()
    payload = {
        'sub': user.user_id,
        'type': 'access',
        'role': user.role,
        'iat': now,
        'exp': now + timedelta(seconds=current_app.config['JWT_ACCESS_TOKEN_EXPIRES']),
    }
    return jwt.encode(payload, current_app.config['JWT_SECRET_KEY'], algorithm=JWT_ALGORITHM)


def generate_refresh_token(user):
    """Generate and persist a refresh token for a user"""
    expires_in = current_app.config['JWT_REFRESH_TOKEN_EXPIRES']
    record = RefreshToken(user.id, expires_in)
    db.session.add(record)
    db.session.commit()

    payload = {
        'sub': user.user_id,
        'type': 'refresh',
        'jti': record.jti,
        'iat': datetime.utcnow(),
        'exp': record.expires_at,
    }
    return jwt.encode(payload, current_app.config['REFRESH_TOKEN_SECRET'], algorithm=JWT_ALGORITHM)


def _decode(token, secret, expected_type):
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info(f"Rejected expired {expected_type} token")
        return None
    except jwt.InvalidTokenError:
        logger.info(f"Rejected invalid {expected_type} token")
        return None

    if payload.get('type') != expected_type or not payload.get('sub'):
        return None
    return payload


def verify_access_token(token):
    """Verify and decode an access token; None when invalid or expired"""
    return _decode(token, current_app.config['JWT_SECRET_KEY'], 'access')


def verify_refresh_token(token):
    """
    Verify a refresh token against its signature and stored record.

    Returns:
        (user, RefreshToken) for a valid, unrevoked token, otherwise (None, None)
    """
    payload = _decode(token, current_app.config['REFRESH_TOKEN_SECRET'], 'refresh')
    if payload is None:
        return None, None

    record = RefreshToken.query.filter_by(jti=payload.get('jti')).first()
    if record is None or not record.is_valid():
        return None, None

    user = User.query.filter_by(user_id=payload['sub']).first()
    if user is None or user.id != record.user_id:
        return None, None
    return user, record


def issue_token_pair(user):
    """Build the token response body returned by login and refresh"""
    return {
        'access_token': generate_access_token(user),
        'refresh_token': generate_refresh_token(user),
        'token_type': 'Bearer',
        'expires_in': current_app.config['JWT_ACCESS_TOKEN_EXPIRES'],
    }


def get_bearer_token():
    """Extract the bearer token from the Authorization header"""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def cleanup_expired_tokens():
    """Delete refresh tokens that are expired or revoked"""
    now = datetime.utcnow()
    removed = RefreshToken.query.filter(
        (RefreshToken.expires_at < now) | (RefreshToken.revoked.is_(True))
    ).delete(synchronize_session=False)
    db.session.commit()
    return removed
