"""
Model Utilities

This module contains shared columns and helper functions for the models package.
"""

import secrets
import string
import uuid
from datetime import datetime
from .database import db


def generate_user_id():
    """Generate a unique 12-character public user ID"""
    return ''.join(secrets.choice(string.ascii_uppercase + string.digits) for _ in range(12))


def generate_token_id():
    """Generate a unique identifier for a refresh token (JWT `jti`)"""
    return uuid.uuid4().hex


def isoformat(value):
    """Render a date/datetime for JSON output"""
    return value.isoformat() if value else None


class TimestampMixin:
    """Adds created_at / updated_at columns maintained by SQLAlchemy"""
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def update_from_dict(self, values):
        """Apply already-validated values to this record"""
        for key, value in values.items():
            setattr(self, key, value)
