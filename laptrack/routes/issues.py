"""
Issue Routes

FLOW OVERVIEW
- /api/issues [POST]        • validate → create (laptop and optional reporter must exist).
- /api/issues [GET]         • paginated list; filters status, priority, laptop_id.
- /api/issues/<id> [GET]    • single issue.
- /api/issues/<id> [PUT]    • partial update; resolving stamps resolved_date.
- /api/issues/<id> [DELETE] • admin only.
"""

from flask import Blueprint, jsonify, current_app, g
from ..models import db, Issue, Laptop, Employee
from ..utils.api_utils import (
    request_validator, apply_filters, paginate, get_or_404, require_reference
)
from .auth import token_required, admin_required

issues_bp = Blueprint('issues', __name__)


@issues_bp.route('', methods=['POST'])
@token_required
def create_issue():
    """Report an issue"""
    values = request_validator.validate_model_payload(Issue)
    require_reference(Laptop, values['laptop_id'], 'laptop_id')
    if values.get('reported_by_id') is not None:
        require_reference(Employee, values['reported_by_id'], 'reported_by_id')

    issue = Issue(**values)
    issue.apply_status_effects()
    db.session.add(issue)
    db.session.commit()

    current_app.logger.info(
        f"User {g.current_user.user_id} reported {issue.priority} issue {issue.id} on laptop {issue.laptop_id}"
    )
    return jsonify(issue.to_dict()), 201


@issues_bp.route('', methods=['GET'])
@token_required
def list_issues():
    """List issues"""
    query = apply_filters(Issue.query, Issue)
    return jsonify(paginate(query.order_by(Issue.id.desc())))


@issues_bp.route('/<int:issue_id>', methods=['GET'])
@token_required
def get_issue(issue_id):
    """Get an issue by id"""
    return jsonify(get_or_404(Issue, issue_id).to_dict())


@issues_bp.route('/<int:issue_id>', methods=['PUT', 'PATCH'])
@token_required
def update_issue(issue_id):
    """Update an issue"""
    issue = get_or_404(Issue, issue_id)
    values = request_validator.validate_model_payload(Issue, partial=True)

    if values.get('laptop_id') is not None:
        require_reference(Laptop, values['laptop_id'], 'laptop_id')
    if values.get('reported_by_id') is not None:
        require_reference(Employee, values['reported_by_id'], 'reported_by_id')

    issue.update_from_dict(values)
    issue.apply_status_effects()
    db.session.commit()
    return jsonify(issue.to_dict())


@issues_bp.route('/<int:issue_id>', methods=['DELETE'])
@admin_required
def delete_issue(issue_id):
    """Delete an issue"""
    issue = get_or_404(Issue, issue_id)
    db.session.delete(issue)
    db.session.commit()
    current_app.logger.info(f"User {g.current_user.user_id} deleted issue {issue_id}")
    return jsonify({'success': True, 'message': 'Issue deleted'})
