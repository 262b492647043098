"""
User Routes
Endpoints scoped to the authenticated user.
"""

from flask import Blueprint

from services import user_service
from utils.auth import roles_required, get_current_principal
from utils.api_response import success_response

user_bp = Blueprint('user', __name__, url_prefix='/user')


@user_bp.route('/tasks', methods=['GET'])
@roles_required('user')
def get_user_tasks():
    """Tasks assigned to the caller."""
    tasks = user_service.get_tasks(get_current_principal())
    return success_response('User tasks retrieved', [task.to_dict() for task in tasks])
