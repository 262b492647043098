"""
Admin Routes
Admin registration/login, privileged admin creation, and task/comment
management that bypasses ownership checks.
"""

import logging
from flask import Blueprint, request

from models import AdminRole
from services.admin_service import admin_service
from services.auth_service import auth_service
from services.errors import ValidationError
from utils.auth import roles_required, get_current_principal
from utils.api_response import success_response
from utils.request_validation import (
    get_json_body,
    require_string,
    require_email,
    require_password,
    parse_status,
    parse_task_filter,
)

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


def _admin_credentials(body):
    role = body.get('role')
    if role is not None and role not in [r.value for r in AdminRole]:
        raise ValidationError(f"role must be one of: {', '.join(r.value for r in AdminRole)}")
    return {
        'full_name': require_string(body, 'fullName', 'Full name'),
        'email': require_email(body),
        'password': require_password(body),
        'role': role,
    }


@admin_bp.route('/register', methods=['POST'])
def register():
    admin = auth_service.register_admin(_admin_credentials(get_json_body()))
    return success_response('Admin registered successfully', admin.to_dict(), 201)


@admin_bp.route('/login', methods=['POST'])
def login():
    body = get_json_body()
    tokens = auth_service.login_admin(require_email(body), require_string(body, 'password', 'Password'))
    return success_response('Login successful', tokens)


@admin_bp.route('/create', methods=['POST'])
@roles_required('admin')
def create_admin():
    """Create another admin. Super-Admin only."""
    admin = auth_service.create_admin(get_current_principal(), _admin_credentials(get_json_body()))
    return success_response('Admin created successfully', admin.to_dict(), 201)


@admin_bp.route('/tasks', methods=['GET'])
@roles_required('admin')
def get_tasks():
    filters = parse_task_filter(request.args)
    tasks = admin_service.get_tasks(filters)
    return success_response(
        'Tasks retrieved successfully',
        [task.to_dict(include_comments=True) for task in tasks],
    )


@admin_bp.route('/tasks/<task_id>', methods=['GET'])
@roles_required('admin')
def get_task(task_id):
    task = admin_service.get_task_by_id(task_id)
    return success_response('Task retrieved successfully', task.to_dict())


@admin_bp.route('/tasks/<task_id>/status', methods=['PUT'])
@roles_required('admin')
def update_task_status(task_id):
    new_status = parse_status(get_json_body().get('newStatus'), 'newStatus')
    task = admin_service.update_task_status(task_id, new_status)
    return success_response('Task status updated successfully', task.to_dict())


@admin_bp.route('/tasks/<task_id>/comments', methods=['GET'])
@roles_required('admin')
def get_task_comments(task_id):
    comments = admin_service.get_task_comments(task_id)
    return success_response('Task comments retrieved successfully', [c.to_dict() for c in comments])


@admin_bp.route('/tasks/<task_id>/comments', methods=['DELETE'])
@roles_required('admin')
def delete_task_comment(task_id):
    comment_id = require_string(get_json_body(), 'commentId')
    admin_service.delete_task_comment(task_id, comment_id)
    return success_response('Comment deleted successfully')


@admin_bp.route('/tasks/<task_id>', methods=['DELETE'])
@roles_required('admin')
def delete_task(task_id):
    admin_service.delete_task_by_id(task_id)
    return success_response('Task deleted successfully')
