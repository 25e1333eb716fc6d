"""
Assignment Model

FLOW OVERVIEW
- Links a Laptop to an Employee for a period of time.
- status 'active' while the employee holds the laptop, 'returned' afterwards.
- mark_returned(returned_date) closes the assignment and frees the laptop.
"""

from datetime import date
from .database import db
from .utils import TimestampMixin, isoformat
from ..utils.validators import Field


class Assignment(TimestampMixin, db.Model):
    """Laptop handed to an employee"""
    __tablename__ = 'assignments'

    STATUSES = ('active', 'returned')

    FIELDS = (
        Field('laptop_id', 'reference', required=True),
        Field('employee_id', 'reference', required=True),
        Field('assigned_date', 'date'),
        Field('expected_return_date', 'date'),
        Field('notes', 'text', max_length=2000),
    )

    FILTERS = ('status', 'laptop_id', 'employee_id')

    id = db.Column(db.Integer, primary_key=True)
    laptop_id = db.Column(db.Integer, db.ForeignKey('laptops.id'), nullable=False, index=True)
    employee_id = db.Column(db.Integer, db.ForeignKey('employees.id'), nullable=False, index=True)
    assigned_date = db.Column(db.Date, default=date.today, nullable=False)
    expected_return_date = db.Column(db.Date)
    returned_date = db.Column(db.Date)
    status = db.Column(db.String(20), default='active', nullable=False)
    notes = db.Column(db.Text)

    laptop = db.relationship('Laptop', back_populates='assignments')
    employee = db.relationship('Employee', back_populates='assignments')

    def __repr__(self):
        return f'<Assignment laptop={self.laptop_id} employee={self.employee_id} {self.status}>'

    def is_active(self):
        return self.status == 'active'

    def mark_returned(self, returned_date=None):
        """Close the assignment and put the laptop back in the pool"""
        self.status = 'returned'
        self.returned_date = returned_date or date.today()
        if self.laptop is not None and self.laptop.status == 'assigned':
            self.laptop.status = 'available'

    def to_dict(self):
        """Convert model to dictionary."""
        return {
            'id': self.id,
            'laptop_id': self.laptop_id,
            'employee_id': self.employee_id,
            'laptop_serial_number': self.laptop.serial_number if self.laptop else None,
            'employee_name': self.employee.full_name if self.employee else None,
            'assigned_date': isoformat(self.assigned_date),
            'expected_return_date': isoformat(self.expected_return_date),
            'returned_date': isoformat(self.returned_date),
            'status': self.status,
            'notes': self.notes,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
