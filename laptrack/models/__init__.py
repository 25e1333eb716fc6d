"""
Database Models Package

FLOW OVERVIEW
- Centralizes SQLAlchemy DB instance and model imports for convenient usage.
- Exposes: db, User, RefreshToken, Laptop, Employee, Assignment, Maintenance, Issue.
"""

from .database import db
from .user import User, RefreshToken
from .laptop import Laptop
from .employee import Employee
from .assignment import Assignment
from .maintenance import Maintenance
from .issue import Issue

__all__ = [
    'db',
    'User',
    'RefreshToken',
    'Laptop',
    'Employee',
    'Assignment',
    'Maintenance',
    'Issue'
]
