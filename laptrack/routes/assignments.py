"""
Assignment Routes

FLOW OVERVIEW
- /api/assignments [POST]
  • Laptop must be available and employee active → create → laptop becomes assigned.
- /api/assignments [GET]         • paginated list; filters status, laptop_id, employee_id.
- /api/assignments/<id> [GET]    • single assignment.
- /api/assignments/<id> [PUT]    • update dates/notes (laptop and employee are fixed).
- /api/assignments/<id>/return [POST]
  • Close an active assignment → laptop becomes available.
- /api/assignments/<id> [DELETE] • admin only; frees the laptop if still active.
"""

from datetime import date
from flask import Blueprint, jsonify, current_app, g, request
from ..models import db, Assignment, Laptop, Employee
from ..utils.api_utils import (
    request_validator, apply_filters, paginate, get_or_404, require_reference
)
from ..utils.error_handlers import ConflictError, ValidationError
from ..utils.validators import InputValidator
from .auth import token_required, admin_required

assignments_bp = Blueprint('assignments', __name__)

UPDATABLE_FIELDS = ('assigned_date', 'expected_return_date', 'notes')


def _check_dates(assignment):
    if (assignment.expected_return_date and assignment.assigned_date
            and assignment.expected_return_date < assignment.assigned_date):
        raise ValidationError('Validation failed', errors={
            'expected_return_date': 'Must not be before assigned_date'
        })


@assignments_bp.route('', methods=['POST'])
@token_required
def create_assignment():
    """Assign a laptop to an employee"""
    values = request_validator.validate_model_payload(Assignment)
    laptop = require_reference(Laptop, values['laptop_id'], 'laptop_id')
    employee = require_reference(Employee, values['employee_id'], 'employee_id')

    if not laptop.is_available():
        raise ConflictError(f'Laptop is not available (status: {laptop.status})')
    if not employee.is_active():
        raise ConflictError('Employee is not active')

    if values.get('assigned_date') is None:
        values['assigned_date'] = date.today()

    assignment = Assignment(**values)
    _check_dates(assignment)
    laptop.status = 'assigned'
    db.session.add(assignment)
    db.session.commit()

    current_app.logger.info(
        f"User {g.current_user.user_id} assigned laptop {laptop.serial_number} to employee {employee.id}"
    )
    return jsonify(assignment.to_dict()), 201


@assignments_bp.route('', methods=['GET'])
@token_required
def list_assignments():
    """List assignments"""
    query = apply_filters(Assignment.query, Assignment)
    return jsonify(paginate(query.order_by(Assignment.id)))


@assignments_bp.route('/<int:assignment_id>', methods=['GET'])
@token_required
def get_assignment(assignment_id):
    """Get an assignment by id"""
    return jsonify(get_or_404(Assignment, assignment_id).to_dict())


@assignments_bp.route('/<int:assignment_id>', methods=['PUT', 'PATCH'])
@token_required
def update_assignment(assignment_id):
    """Update assignment dates or notes"""
    assignment = get_or_404(Assignment, assignment_id)
    values = request_validator.validate_model_payload(Assignment, partial=True)

    moved = [name for name in ('laptop_id', 'employee_id')
             if name in values and values[name] != getattr(assignment, name)]
    if moved:
        raise ValidationError('Validation failed', errors={
            name: 'Cannot be changed; return the laptop and create a new assignment' for name in moved
        })

    assignment.update_from_dict({k: v for k, v in values.items() if k in UPDATABLE_FIELDS})
    if assignment.assigned_date is None:
        raise ValidationError('Validation failed', errors={'assigned_date': 'This field is required'})
    _check_dates(assignment)
    db.session.commit()
    return jsonify(assignment.to_dict())


@assignments_bp.route('/<int:assignment_id>/return', methods=['POST'])
@token_required
def return_assignment(assignment_id):
    """Mark an assignment as returned"""
    assignment = get_or_404(Assignment, assignment_id)
    if not assignment.is_active():
        raise ConflictError('Assignment has already been returned')

    returned_date = None
    data = request.get_json(silent=True) or {}
    if isinstance(data, dict) and data.get('returned_date'):
        result = InputValidator.parse_date(data['returned_date'])
        if not result.is_valid:
            raise ValidationError('Validation failed', errors={'returned_date': result.error_message})
        returned_date = result.sanitized_value
        if returned_date < assignment.assigned_date:
            raise ValidationError('Validation failed', errors={
                'returned_date': 'Must not be before assigned_date'
            })

    assignment.mark_returned(returned_date)
    db.session.commit()
    current_app.logger.info(f"User {g.current_user.user_id} closed assignment {assignment.id}")
    return jsonify(assignment.to_dict())


@assignments_bp.route('/<int:assignment_id>', methods=['DELETE'])
@admin_required
def delete_assignment(assignment_id):
    """Delete an assignment"""
    assignment = get_or_404(Assignment, assignment_id)
    if assignment.is_active() and assignment.laptop is not None and assignment.laptop.status == 'assigned':
        assignment.laptop.status = 'available'

    db.session.delete(assignment)
    db.session.commit()
    current_app.logger.info(f"User {g.current_user.user_id} deleted assignment {assignment_id}")
    return jsonify({'success': True, 'message': 'Assignment deleted'})
