"""
Maintenance Routes

FLOW OVERVIEW
- /api/maintenance [POST]
  • validate → create; in_progress takes an available laptop out of the pool.
- /api/maintenance [GET]         • paginated list; filters status, laptop_id, maintenance_type.
- /api/maintenance/<id> [GET]    • single record.
- /api/maintenance/<id> [PUT]    • partial update; completed puts the laptop back,
  as does leaving in_progress or moving to another laptop.
- /api/maintenance/<id> [DELETE] • admin only.
"""

from datetime import date
from flask import Blueprint, jsonify, current_app, g
from ..models import db, Maintenance, Laptop
from ..utils.api_utils import (
    request_validator, apply_filters, paginate, get_or_404, require_reference
)
from ..utils.error_handlers import ValidationError
from .auth import token_required, admin_required

maintenance_bp = Blueprint('maintenance', __name__)


def _check_dates(record):
    if record.completed_date and record.scheduled_date and record.completed_date < record.scheduled_date:
        raise ValidationError('Validation failed', errors={
            'completed_date': 'Must not be before scheduled_date'
        })


@maintenance_bp.route('', methods=['POST'])
@token_required
def create_maintenance():
    """Create a maintenance record"""
    values = request_validator.validate_model_payload(Maintenance)
    laptop = require_reference(Laptop, values['laptop_id'], 'laptop_id')
    if values.get('scheduled_date') is None:
        values['scheduled_date'] = date.today()

    record = Maintenance(**values)
    record.laptop = laptop
    _check_dates(record)
    record.apply_status_effects()
    db.session.add(record)
    db.session.commit()

    current_app.logger.info(
        f"User {g.current_user.user_id} logged {record.maintenance_type} for laptop {laptop.serial_number}"
    )
    return jsonify(record.to_dict()), 201


@maintenance_bp.route('', methods=['GET'])
@token_required
def list_maintenance():
    """List maintenance records"""
    query = apply_filters(Maintenance.query, Maintenance)
    return jsonify(paginate(query.order_by(Maintenance.scheduled_date.desc(), Maintenance.id.desc())))


@maintenance_bp.route('/<int:record_id>', methods=['GET'])
@token_required
def get_maintenance(record_id):
    """Get a maintenance record by id"""
    return jsonify(get_or_404(Maintenance, record_id, 'Maintenance record').to_dict())


@maintenance_bp.route('/<int:record_id>', methods=['PUT', 'PATCH'])
@token_required
def update_maintenance(record_id):
    """Update a maintenance record"""
    record = get_or_404(Maintenance, record_id, 'Maintenance record')
    values = request_validator.validate_model_payload(Maintenance, partial=True)
    previous_laptop = record.laptop
    was_in_progress = record.status == 'in_progress'

    if 'laptop_id' in values and values['laptop_id'] != record.laptop_id:
        record.laptop = require_reference(Laptop, values['laptop_id'], 'laptop_id')
    if 'scheduled_date' in values and values['scheduled_date'] is None:
        raise ValidationError('Validation failed', errors={'scheduled_date': 'This field is required'})

    record.update_from_dict(values)
    _check_dates(record)
    # a record leaving in_progress, or moving laptops, no longer holds the old laptop
    if was_in_progress and (record.laptop is not previous_laptop or record.status != 'in_progress'):
        record.release(previous_laptop)
    record.apply_status_effects()
    db.session.commit()
    return jsonify(record.to_dict())


@maintenance_bp.route('/<int:record_id>', methods=['DELETE'])
@admin_required
def delete_maintenance(record_id):
    """Delete a maintenance record"""
    record = get_or_404(Maintenance, record_id, 'Maintenance record')
    if record.status == 'in_progress':
        record.release(record.laptop)

    db.session.delete(record)
    db.session.commit()
    current_app.logger.info(f"User {g.current_user.user_id} deleted maintenance record {record_id}")
    return jsonify({'success': True, 'message': 'Maintenance record deleted'})
