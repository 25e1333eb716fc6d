"""
Issue Model

Problems reported against a laptop, optionally by an employee.
"""

from datetime import date
from .database import db
from .utils import TimestampMixin, isoformat
from ..utils.validators import Field


class Issue(TimestampMixin, db.Model):
    """Reported laptop issue"""
    __tablename__ = 'issues'

    PRIORITIES = ('low', 'medium', 'high', 'critical')
    STATUSES = ('open', 'in_progress', 'resolved', 'closed')
    CLOSED_STATUSES = ('resolved', 'closed')

    FIELDS = (
        Field('laptop_id', 'reference', required=True),
        Field('reported_by_id', 'reference'),
        Field('title', required=True, max_length=200),
        Field('description', 'text', required=True, max_length=5000),
        Field('priority', choices=PRIORITIES),
        Field('status', choices=STATUSES),
        Field('resolved_date', 'date'),
    )

    FILTERS = ('status', 'priority', 'laptop_id')

    id = db.Column(db.Integer, primary_key=True)
    laptop_id = db.Column(db.Integer, db.ForeignKey('laptops.id'), nullable=False, index=True)
    reported_by_id = db.Column(db.Integer, db.ForeignKey('employees.id'))
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    priority = db.Column(db.String(20), default='medium', nullable=False)
    status = db.Column(db.String(20), default='open', nullable=False)
    resolved_date = db.Column(db.Date)

    laptop = db.relationship('Laptop', back_populates='issues')
    reported_by = db.relationship('Employee')

    def __repr__(self):
        return f'<Issue {self.title!r} {self.status}>'

    def apply_status_effects(self):
        """Stamp resolved_date the first time the issue is closed out"""
        if self.status in self.CLOSED_STATUSES and self.resolved_date is None:
            self.resolved_date = date.today()

    def to_dict(self):
        """Convert model to dictionary."""
        return {
            'id': self.id,
            'laptop_id': self.laptop_id,
            'reported_by_id': self.reported_by_id,
            'title': self.title,
            'description': self.description,
            'priority': self.priority,
            'status': self.status,
            'resolved_date': isoformat(self.resolved_date),
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
