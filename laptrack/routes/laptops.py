"""
Laptop Routes

FLOW OVERVIEW
- /api/laptops [POST]        • validate → create → 201.
- /api/laptops [GET]         • paginated list; filters status, brand, condition, search.
- /api/laptops/<id> [GET]    • single laptop.
- /api/laptops/<id> [PUT]    • partial update; serial number stays unique;
  assigned/maintenance status only changes through those workflows.
- /api/laptops/<id> [DELETE] • admin only; refused while an assignment is active.
- /api/laptops/<id>/history [GET]
  • laptop with its assignments, maintenance records and issues.
"""

from flask import Blueprint, jsonify, current_app, g, request
from sqlalchemy import or_
from ..models import db, Laptop
from ..utils.api_utils import (
    request_validator, apply_filters, paginate, get_or_404, commit_or_conflict
)
from ..utils.error_handlers import ConflictError, ValidationError
from .auth import token_required, admin_required

laptops_bp = Blueprint('laptops', __name__)

DUPLICATE_SERIAL = 'A laptop with this serial number already exists'


def _ensure_unique_serial(serial_number, exclude_id=None):
    query = Laptop.query.filter_by(serial_number=serial_number)
    if exclude_id is not None:
        query = query.filter(Laptop.id != exclude_id)
    if query.first() is not None:
        raise ConflictError(DUPLICATE_SERIAL)


def _refuse_managed_status(status):
    if status in Laptop.MANAGED_STATUSES:
        raise ValidationError('Validation failed', errors={
            'status': f"'{status}' is set by the assignment and maintenance endpoints"
        })


def _check_status_change(laptop, status):
    """Only available/retired may be set by hand, and never over an open workflow."""
    if status == laptop.status:
        return
    _refuse_managed_status(status)
    if laptop.status == 'assigned' and laptop.active_assignment() is not None:
        raise ConflictError('Laptop is assigned; return it before changing its status')
    if laptop.status == 'maintenance' and laptop.in_progress_maintenance() is not None:
        raise ConflictError('Laptop has maintenance in progress; complete it before changing its status')


@laptops_bp.route('', methods=['POST'])
@token_required
def create_laptop():
    """Create a laptop"""
    values = request_validator.validate_model_payload(Laptop)
    _refuse_managed_status(values.get('status'))
    _ensure_unique_serial(values['serial_number'])

    laptop = Laptop(**values)
    db.session.add(laptop)
    commit_or_conflict(DUPLICATE_SERIAL)

    current_app.logger.info(f"User {g.current_user.user_id} created laptop {laptop.serial_number}")
    return jsonify(laptop.to_dict()), 201


@laptops_bp.route('', methods=['GET'])
@token_required
def list_laptops():
    """List laptops"""
    query = apply_filters(Laptop.query, Laptop)

    search = request.args.get('search', '').strip()
    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(
            Laptop.brand.ilike(pattern),
            Laptop.model.ilike(pattern),
            Laptop.serial_number.ilike(pattern),
        ))

    return jsonify(paginate(query.order_by(Laptop.id)))


@laptops_bp.route('/<int:laptop_id>', methods=['GET'])
@token_required
def get_laptop(laptop_id):
    """Get a laptop by id"""
    return jsonify(get_or_404(Laptop, laptop_id).to_dict())


@laptops_bp.route('/<int:laptop_id>', methods=['PUT', 'PATCH'])
@token_required
def update_laptop(laptop_id):
    """Update a laptop"""
    laptop = get_or_404(Laptop, laptop_id)
    values = request_validator.validate_model_payload(Laptop, partial=True)

    if 'serial_number' in values and values['serial_number'] != laptop.serial_number:
        _ensure_unique_serial(values['serial_number'], exclude_id=laptop.id)
    if 'status' in values:
        _check_status_change(laptop, values['status'])

    laptop.update_from_dict(values)
    commit_or_conflict(DUPLICATE_SERIAL)
    return jsonify(laptop.to_dict())


@laptops_bp.route('/<int:laptop_id>', methods=['DELETE'])
@admin_required
def delete_laptop(laptop_id):
    """Delete a laptop and its history"""
    laptop = get_or_404(Laptop, laptop_id)
    if laptop.active_assignment() is not None:
        raise ConflictError('Laptop is currently assigned; return it before deleting')

    db.session.delete(laptop)
    db.session.commit()
    current_app.logger.info(f"User {g.current_user.user_id} deleted laptop {laptop_id}")
    return jsonify({'success': True, 'message': 'Laptop deleted'})


@laptops_bp.route('/<int:laptop_id>/history', methods=['GET'])
@token_required
def laptop_history(laptop_id):
    """Full history for one laptop"""
    laptop = get_or_404(Laptop, laptop_id)
    return jsonify({
        'laptop': laptop.to_dict(),
        'assignments': [a.to_dict() for a in sorted(laptop.assignments, key=lambda a: a.id)],
        'maintenance': [m.to_dict() for m in sorted(laptop.maintenance_records, key=lambda m: m.id)],
        'issues': [i.to_dict() for i in sorted(laptop.issues, key=lambda i: i.id)],
    })
