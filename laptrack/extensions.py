"""
Flask extensions shared across the application.

Instances are created unbound here and initialized in create_app().
Rate limits come from app config (RATELIMIT_DEFAULT, RATELIMIT_STORAGE_URI,
RATELIMIT_ENABLED); auth routes add AUTH_RATE_LIMIT on top.
"""

from flask import current_app
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
cors = CORS()


def auth_rate_limit():
    """Limit string applied to authentication endpoints"""
    return current_app.config.get('AUTH_RATE_LIMIT', '10 per minute')
