"""
Laptop Model

FLOW OVERVIEW
- One row per physical laptop; serial_number is unique.
- status tracks where the device is in its lifecycle:
  available -> assigned (via Assignment) / maintenance (via Maintenance) -> retired.
- FIELDS drives request validation for create and update.
"""

from .database import db
from .utils import TimestampMixin, isoformat
from ..utils.validators import Field


class Laptop(TimestampMixin, db.Model):
    """Tracked laptop"""
    __tablename__ = 'laptops'

    STATUSES = ('available', 'assigned', 'maintenance', 'retired')
    CONDITIONS = ('new', 'good', 'fair', 'poor')
    # set only by the assignment and maintenance workflows
    MANAGED_STATUSES = ('assigned', 'maintenance')

    FIELDS = (
        Field('brand', required=True, max_length=100),
        Field('model', required=True, max_length=100),
        Field('serial_number', required=True, max_length=100),
        Field('purchase_date', 'date'),
        Field('warranty_expiry', 'date'),
        Field('processor', max_length=100),
        Field('ram', max_length=50),
        Field('storage', max_length=50),
        Field('status', choices=STATUSES),
        Field('condition', choices=CONDITIONS),
        Field('notes', 'text', max_length=2000),
    )

    FILTERS = ('status', 'brand', 'condition')

    id = db.Column(db.Integer, primary_key=True)
    brand = db.Column(db.String(100), nullable=False)
    model = db.Column(db.String(100), nullable=False)
    serial_number = db.Column(db.String(100), unique=True, nullable=False, index=True)
    purchase_date = db.Column(db.Date)
    warranty_expiry = db.Column(db.Date)
    processor = db.Column(db.String(100))
    ram = db.Column(db.String(50))
    storage = db.Column(db.String(50))
    status = db.Column(db.String(20), default='available', nullable=False)
    condition = db.Column(db.String(20), default='good', nullable=False)
    notes = db.Column(db.Text)

    assignments = db.relationship('Assignment', back_populates='laptop', lazy=True,
                                  cascade='all, delete-orphan')
    maintenance_records = db.relationship('Maintenance', back_populates='laptop', lazy=True,
                                          cascade='all, delete-orphan')
    issues = db.relationship('Issue', back_populates='laptop', lazy=True,
                             cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Laptop {self.serial_number}>'

    def is_available(self):
        return self.status == 'available'

    def active_assignment(self):
        """Return the open assignment for this laptop, if any"""
        from .assignment import Assignment
        return Assignment.query.filter_by(laptop_id=self.id, status='active').first()

    def in_progress_maintenance(self):
        """Return the in-progress maintenance record for this laptop, if any"""
        from .maintenance import Maintenance
        return Maintenance.query.filter_by(laptop_id=self.id, status='in_progress').first()

    def to_dict(self):
        """Convert model to dictionary."""
        return {
            'id': self.id,
            'brand': self.brand,
            'model': self.model,
            'serial_number': self.serial_number,
            'purchase_date': isoformat(self.purchase_date),
            'warranty_expiry': isoformat(self.warranty_expiry),
            'processor': self.processor,
            'ram': self.ram,
            'storage': self.storage,
            'status': self.status,
            'condition': self.condition,
            'notes': self.notes,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
