"""
Employee Model

Employees receive laptops through assignments and may report issues.
"""

from .database import db
from .utils import TimestampMixin, isoformat
from ..utils.validators import Field


class Employee(TimestampMixin, db.Model):
    """Employee who can hold laptops"""
    __tablename__ = 'employees'

    STATUSES = ('active', 'inactive')

    FIELDS = (
        Field('first_name', required=True, max_length=100),
        Field('last_name', required=True, max_length=100),
        Field('email', 'email', required=True, max_length=254),
        Field('department', required=True, max_length=100),
        Field('position', max_length=100),
        Field('phone', max_length=30),
        Field('status', choices=STATUSES),
    )

    FILTERS = ('department', 'status')

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False, index=True)
    department = db.Column(db.String(100), nullable=False)
    position = db.Column(db.String(100))
    phone = db.Column(db.String(30))
    status = db.Column(db.String(20), default='active', nullable=False)

    assignments = db.relationship('Assignment', back_populates='employee', lazy=True,
                                  cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Employee {self.email}>'

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'

    def is_active(self):
        return self.status == 'active'

    def has_active_assignment(self):
        from .assignment import Assignment
        return Assignment.query.filter_by(employee_id=self.id, status='active').first() is not None

    def to_dict(self):
        """Convert model to dictionary."""
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'full_name': self.full_name,
            'email': self.email,
            'department': self.department,
            'position': self.position,
            'phone': self.phone,
            'status': self.status,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
