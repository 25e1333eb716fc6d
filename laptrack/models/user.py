"""
User Models

This module contains the User and RefreshToken models used for API authentication.
"""

from datetime import datetime, timedelta
from .database import db
from .utils import generate_user_id, generate_token_id, isoformat


class User(db.Model):
    """API user who can sign in and manage inventory records"""
    __tablename__ = 'users'

    ROLES = ('admin', 'staff')
    STATUSES = ('active', 'disabled')

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(12), unique=True, nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False)
    name = db.Column(db.String(100))
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), default='staff', nullable=False)  # admin, staff
    status = db.Column(db.String(20), default='active', nullable=False)  # active, disabled
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login = db.Column(db.DateTime)

    refresh_tokens = db.relationship('RefreshToken', backref='user', lazy=True,
                                     cascade='all, delete-orphan')

    def __init__(self, email, password_hash, name=None, role='staff'):
        """Initialize a new user with a validated email"""
        from ..utils.validators import validate_email

        email_validation = validate_email(email)
        if not email_validation.is_valid:
            raise ValueError(email_validation.error_message)
        if not password_hash:
            raise ValueError("Password hash cannot be empty")
        if role not in self.ROLES:
            raise ValueError(f"Invalid role: {role}")

        self.email = email_validation.sanitized_value
        self.password_hash = password_hash
        self.name = name
        self.role = role
        self.status = 'active'
        self.user_id = generate_user_id()

    def __repr__(self):
        return f'<User {self.email}>'

    def is_active(self):
        """Check if user account is active"""
        return self.status == 'active'

    def is_admin(self):
        """Check if user has the admin role"""
        return self.role == 'admin'

    def update_last_login(self):
        """Update the last login timestamp"""
        self.last_login = datetime.utcnow()
        db.session.commit()

    def to_dict(self):
        """Public representation; never includes the password hash"""
        return {
            'user_id': self.user_id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'status': self.status,
            'created_at': isoformat(self.created_at),
            'last_login': isoformat(self.last_login),
        }


class RefreshToken(db.Model):
    """Issued refresh token, tracked so it can be rotated or revoked"""
    __tablename__ = 'refresh_tokens'

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(64), unique=True, nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    expires_at = db.Column(db.DateTime, nullable=False)
    revoked = db.Column(db.Boolean, default=False, nullable=False)

    def __init__(self, user_id, expires_in_seconds):
        """Initialize a new refresh token record"""
        self.user_id = user_id
        self.jti = generate_token_id()
        self.revoked = False
        self.expires_at = datetime.utcnow() + timedelta(seconds=expires_in_seconds)

    def is_valid(self):
        """Check if token is neither revoked nor expired"""
        return not self.revoked and datetime.utcnow() < self.expires_at

    def revoke(self):
        """Mark token as revoked"""
        self.revoked = True
        db.session.commit()

    def claim(self):
        """Revoke this token only if it is still live; False when another request got there first"""
        updated = RefreshToken.query.filter_by(id=self.id, revoked=False).update({'revoked': True})
        db.session.commit()
        return updated == 1
