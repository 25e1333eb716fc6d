"""
Employee Routes

FLOW OVERVIEW
- /api/employees [POST]        • validate → create → 201; email unique.
- /api/employees [GET]         • paginated list; filters department, status, search.
- /api/employees/<id> [GET]    • single employee.
- /api/employees/<id> [PUT]    • partial update.
- /api/employees/<id> [DELETE] • admin only; refused while holding a laptop.
- /api/employees/<id>/assignments [GET] • the employee's assignments.
"""

from flask import Blueprint, jsonify, current_app, g, request
from sqlalchemy import or_
from ..models import db, Employee, Assignment, Issue
from ..utils.api_utils import (
    request_validator, apply_filters, paginate, get_or_404, commit_or_conflict
)
from ..utils.error_handlers import ConflictError
from .auth import token_required, admin_required

employees_bp = Blueprint('employees', __name__)

DUPLICATE_EMAIL = 'An employee with this email already exists'


@employees_bp.route('', methods=['POST'])
@token_required
def create_employee():
    """Create an employee"""
    values = request_validator.validate_model_payload(Employee)
    if Employee.query.filter_by(email=values['email']).first():
        raise ConflictError(DUPLICATE_EMAIL)

    employee = Employee(**values)
    db.session.add(employee)
    commit_or_conflict(DUPLICATE_EMAIL)

    current_app.logger.info(f"User {g.current_user.user_id} created employee {employee.id}")
    return jsonify(employee.to_dict()), 201


@employees_bp.route('', methods=['GET'])
@token_required
def list_employees():
    """List employees"""
    query = apply_filters(Employee.query, Employee)

    search = request.args.get('search', '').strip()
    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(
            Employee.first_name.ilike(pattern),
            Employee.last_name.ilike(pattern),
            Employee.email.ilike(pattern),
        ))

    return jsonify(paginate(query.order_by(Employee.last_name, Employee.first_name, Employee.id)))


@employees_bp.route('/<int:employee_id>', methods=['GET'])
@token_required
def get_employee(employee_id):
    """Get an employee by id"""
    return jsonify(get_or_404(Employee, employee_id).to_dict())


@employees_bp.route('/<int:employee_id>', methods=['PUT', 'PATCH'])
@token_required
def update_employee(employee_id):
    """Update an employee"""
    employee = get_or_404(Employee, employee_id)
    values = request_validator.validate_model_payload(Employee, partial=True)

    if 'email' in values and values['email'] != employee.email:
        if Employee.query.filter(Employee.email == values['email'], Employee.id != employee.id).first():
            raise ConflictError(DUPLICATE_EMAIL)

    employee.update_from_dict(values)
    commit_or_conflict(DUPLICATE_EMAIL)
    return jsonify(employee.to_dict())


@employees_bp.route('/<int:employee_id>', methods=['DELETE'])
@admin_required
def delete_employee(employee_id):
    """Delete an employee"""
    employee = get_or_404(Employee, employee_id)
    if employee.has_active_assignment():
        raise ConflictError('Employee still holds a laptop; return it before deleting')

    # keep reported issues, drop the reporter link
    Issue.query.filter_by(reported_by_id=employee.id).update({'reported_by_id': None})
    db.session.delete(employee)
    db.session.commit()
    current_app.logger.info(f"User {g.current_user.user_id} deleted employee {employee_id}")
    return jsonify({'success': True, 'message': 'Employee deleted'})


@employees_bp.route('/<int:employee_id>/assignments', methods=['GET'])
@token_required
def employee_assignments(employee_id):
    """List assignments for an employee"""
    employee = get_or_404(Employee, employee_id)
    query = apply_filters(Assignment.query.filter_by(employee_id=employee.id), Assignment, ('status',))
    return jsonify(paginate(query.order_by(Assignment.assigned_date.desc(), Assignment.id.desc())))
