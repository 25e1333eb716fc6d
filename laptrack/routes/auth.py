"""
Authentication Routes

FLOW OVERVIEW
- /api/auth/register [POST]
  • Validate email/password/name → create staff user → 201 with user.
- /api/auth/login [POST]
  • Verify credentials → issue access + refresh token pair.
- /api/auth/refresh [POST]
  • Verify stored refresh token → revoke it → issue a new pair (rotation).
- /api/auth/logout [POST]
  • Revoke the presented refresh token.
- /api/auth/me [GET]
  • Bearer-protected; return the current user.

Also defines the token_required / admin_required decorators used by every
resource blueprint. Auth endpoints carry the stricter AUTH_RATE_LIMIT.
"""

from functools import wraps
from flask import Blueprint, jsonify, g, current_app
from ..models import User
from ..extensions import limiter, auth_rate_limit
from ..utils.api_utils import request_validator
from ..utils.auth_utils import (
    create_user, authenticate_user, issue_token_pair,
    verify_access_token, verify_refresh_token, get_bearer_token
)
from ..utils.error_handlers import (
    ValidationError, AuthenticationError, PermissionDenied, ConflictError
)
from ..utils.validators import validate_email, validate_password_strength, sanitize_input

auth_bp = Blueprint('auth', __name__)


def token_required(f):
    """Decorator to require a valid bearer access token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = get_bearer_token()
        if not token:
            raise AuthenticationError('Authorization header with Bearer token required.')

        payload = verify_access_token(token)
        if payload is None:
            raise AuthenticationError('Invalid or expired token.')

        user = User.query.filter_by(user_id=payload['sub']).first()
        if user is None:
            raise AuthenticationError('User for this token no longer exists.')
        if not user.is_active():
            raise PermissionDenied('Account is disabled.')

        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator to require an authenticated admin"""
    @wraps(f)
    @token_required
    def decorated_function(*args, **kwargs):
        if not g.current_user.is_admin():
            raise PermissionDenied('Admin privileges required.')
        return f(*args, **kwargs)
    return decorated_function


@auth_bp.route('/register', methods=['POST'])
@limiter.limit(auth_rate_limit)
def register():
    """User registration endpoint"""
    data = request_validator.get_json_body()
    email = data.get('email', '')
    password = data.get('password', '')

    errors = {}
    email_result = validate_email(email)
    if not email_result.is_valid:
        errors['email'] = email_result.error_message
    password_result = validate_password_strength(password)
    if not password_result.is_valid:
        errors['password'] = password_result.error_message

    name = None
    if data.get('name') is not None:
        name_result = sanitize_input(data.get('name'), max_length=100)
        if name_result.is_valid:
            name = name_result.sanitized_value or None
        else:
            errors['name'] = name_result.error_message

    if errors:
        raise ValidationError('Validation failed', errors=errors)

    # Check if user already exists
    if User.query.filter_by(email=email_result.sanitized_value).first():
        raise ConflictError('User with this email already exists')

    user = create_user(email_result.sanitized_value, password, name=name)
    current_app.logger.info(f"Registered user {user.user_id}")
    return jsonify({'success': True, 'user': user.to_dict()}), 201


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(auth_rate_limit)
def login():
    """User login endpoint"""
    data = request_validator.get_json_body()
    email = data.get('email') or ''
    password = data.get('password') or ''

    if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
        raise ValidationError('Email and password are required')

    user = authenticate_user(email, password)
    if user is None:
        current_app.logger.warning(f"Failed login attempt for {email.strip().lower()}")
        raise AuthenticationError('Invalid email or password.')

    if not user.is_active():
        raise PermissionDenied('Account is disabled.')

    user.update_last_login()
    body = issue_token_pair(user)
    body['user'] = user.to_dict()
    return jsonify(body)


@auth_bp.route('/refresh', methods=['POST'])
@limiter.limit(auth_rate_limit)
def refresh():
    """Exchange a refresh token for a new token pair"""
    data = request_validator.get_json_body()
    token = data.get('refresh_token')
    if not token or not isinstance(token, str):
        raise ValidationError('refresh_token is required')

    user, record = verify_refresh_token(token)
    if user is None:
        raise AuthenticationError('Invalid or expired refresh token.')
    if not user.is_active():
        raise PermissionDenied('Account is disabled.')

    # rotation is single use; a concurrent refresh with the same token loses
    if not record.claim():
        raise AuthenticationError('Invalid or expired refresh token.')
    return jsonify(issue_token_pair(user))


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Revoke a refresh token"""
    data = request_validator.get_json_body()
    token = data.get('refresh_token')
    if not token or not isinstance(token, str):
        raise ValidationError('refresh_token is required')

    user, record = verify_refresh_token(token)
    if record is not None:
        record.revoke()
        current_app.logger.info(f"User {user.user_id} logged out")
    return jsonify({'success': True, 'message': 'Logged out successfully.'})


@auth_bp.route('/me', methods=['GET'])
@token_required
def me():
    """Return the authenticated user"""
    return jsonify({'user': g.current_user.to_dict()})
