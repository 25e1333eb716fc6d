"""
Routes Package

This package contains all Flask route blueprints.
"""

from .main import main_bp
from .auth import auth_bp
from .laptops import laptops_bp
from .employees import employees_bp
from .assignments import assignments_bp
from .maintenance import maintenance_bp
from .issues import issues_bp

__all__ = [
    'main_bp',
    'auth_bp',
    'laptops_bp',
    'employees_bp',
    'assignments_bp',
    'maintenance_bp',
    'issues_bp'
]
