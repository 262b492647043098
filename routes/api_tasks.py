"""
Tasks API Routes
REST endpoints for task CRUD, status changes, tagging and assignment.
All routes require a user bearer token.
"""

import logging
from flask import Blueprint, request

from services.task_service import task_service
from utils.auth import roles_required, get_current_principal
from utils.api_response import success_response
from utils.request_validation import (
    get_json_body,
    parse_task_fields,
    parse_task_filter,
    parse_status,
    parse_tags,
    require_email,
)

logger = logging.getLogger(__name__)

api_tasks_bp = Blueprint('api_tasks', __name__, url_prefix='/tasks')


@api_tasks_bp.route('', methods=['POST'])
@roles_required('user')
def create_task():
    fields = parse_task_fields(get_json_body())
    task = task_service.create(get_current_principal(), fields)
    return success_response('Task created successfully', task.to_dict(), 201)


@api_tasks_bp.route('', methods=['GET'])
@roles_required('user')
def list_tasks():
    """List tasks with tag/status filters, sorting and pagination."""
    filters = parse_task_filter(request.args)
    tasks = task_service.find_all(filters)
    return success_response(
        'Tasks retrieved successfully',
        [task.to_dict(include_comments=True) for task in tasks],
    )


@api_tasks_bp.route('/<task_id>', methods=['GET'])
@roles_required('user')
def get_task(task_id):
    task = task_service.find_one(task_id)
    return success_response('Task retrieved successfully', task.to_dict(include_comments=True))


@api_tasks_bp.route('/<task_id>', methods=['PUT'])
@roles_required('user')
def update_task(task_id):
    """Partial update; only the creator may edit."""
    fields = parse_task_fields(get_json_body(), partial=True)
    task = task_service.update(get_current_principal(), task_id, fields)
    return success_response('Task updated successfully', task.to_dict())


@api_tasks_bp.route('/<task_id>/status', methods=['PUT'])
@roles_required('user')
def update_task_status(task_id):
    body = get_json_body()
    new_status = parse_status(body.get('newStatus'), 'newStatus')
    result = task_service.update_status(get_current_principal(), task_id, new_status)
    return success_response('Task status updated successfully', result)


@api_tasks_bp.route('/<task_id>/tags', methods=['PUT'])
@roles_required('user')
def add_task_tags(task_id):
    tags = parse_tags(get_json_body().get('tags'))
    merged = task_service.add_tags(task_id, tags)
    return success_response('Tags added successfully', merged)


@api_tasks_bp.route('/<task_id>/assign', methods=['PUT'])
@roles_required('user')
def assign_task(task_id):
    email = require_email(get_json_body())
    task = task_service.assign_task(task_id, email)
    return success_response('Task assigned successfully', task.to_dict())


@api_tasks_bp.route('/<task_id>', methods=['DELETE'])
@roles_required('user')
def delete_task(task_id):
    task_service.remove(get_current_principal(), task_id)
    return success_response('Task deleted successfully')
