"""
Maintenance Model

FLOW OVERVIEW
- Service record for a laptop (repair, upgrade, cleaning, ...).
- apply_status_effects() keeps the laptop status in step:
  in_progress takes an available laptop out of the pool,
  completed stamps completed_date and puts it back.
- release(laptop) frees a laptop once no in-progress record holds it.
"""

from datetime import date
from .database import db
from .utils import TimestampMixin, isoformat
from ..utils.validators import Field


class Maintenance(TimestampMixin, db.Model):
    """Maintenance record for a laptop"""
    __tablename__ = 'maintenance'

    TYPES = ('repair', 'upgrade', 'cleaning', 'inspection', 'other')
    STATUSES = ('scheduled', 'in_progress', 'completed')

    FIELDS = (
        Field('laptop_id', 'reference', required=True),
        Field('maintenance_type', required=True, choices=TYPES),
        Field('description', 'text', required=True, max_length=2000),
        Field('cost', 'number', min_value=0),
        Field('performed_by', max_length=100),
        Field('scheduled_date', 'date'),
        Field('completed_date', 'date'),
        Field('status', choices=STATUSES),
    )

    FILTERS = ('status', 'laptop_id', 'maintenance_type')

    id = db.Column(db.Integer, primary_key=True)
    laptop_id = db.Column(db.Integer, db.ForeignKey('laptops.id'), nullable=False, index=True)
    maintenance_type = db.Column(db.String(20), nullable=False)
    description = db.Column(db.Text, nullable=False)
    cost = db.Column(db.Float)
    performed_by = db.Column(db.String(100))
    scheduled_date = db.Column(db.Date, default=date.today, nullable=False)
    completed_date = db.Column(db.Date)
    status = db.Column(db.String(20), default='scheduled', nullable=False)

    laptop = db.relationship('Laptop', back_populates='maintenance_records')

    def __repr__(self):
        return f'<Maintenance {self.maintenance_type} laptop={self.laptop_id} {self.status}>'

    def apply_status_effects(self):
        """Propagate this record's status onto its laptop"""
        laptop = self.laptop
        if self.status == 'in_progress':
            if laptop is not None and laptop.status == 'available':
                laptop.status = 'maintenance'
        elif self.status == 'completed':
            if self.completed_date is None:
                self.completed_date = date.today()
            self.release(laptop)

    def release(self, laptop):
        """Return a laptop held in maintenance by this record to the pool.

        The laptop stays in maintenance while another record for it is
        still in progress.
        """
        if laptop is None or laptop.status != 'maintenance':
            return
        other = Maintenance.query.filter(
            Maintenance.laptop_id == laptop.id,
            Maintenance.status == 'in_progress',
            Maintenance.id != self.id,
        ).first()
        if other is None:
            laptop.status = 'available'

    def to_dict(self):
        """Convert model to dictionary."""
        return {
            'id': self.id,
            'laptop_id': self.laptop_id,
            'maintenance_type': self.maintenance_type,
            'description': self.description,
            'cost': self.cost,
            'performed_by': self.performed_by,
            'scheduled_date': isoformat(self.scheduled_date),
            'completed_date': isoformat(self.completed_date),
            'status': self.status,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
