from flask import Blueprint
from flask_login import login_required

from services.comment_service import comment_service
from utils.auth import get_current_principal
from utils.api_response import success_response
from utils.request_validation import get_json_body, require_string

comments_bp = Blueprint("comments", __name__, url_prefix="/tasks/<task_id>/comments")


@comments_bp.get("")
@login_required
def list_comments(task_id):
    comments = comment_service.list_comments(task_id)
    return success_response("Comments retrieved successfully", [c.to_dict() for c in comments])


@comments_bp.post("")
@login_required
def add_comment(task_id):
    content = require_string(get_json_body(), "content")
    comment = comment_service.create_comment(get_current_principal(), task_id, content)
    return success_response("Comment added successfully", comment.to_dict(), 201)


@comments_bp.put("/<comment_id>")
@login_required
def update_comment(task_id, comment_id):
    content = require_string(get_json_body(), "content")
    comment = comment_service.update_comment(get_current_principal(), comment_id, content)
    return success_response("Comment updated successfully", comment.to_dict())


@comments_bp.delete("/<comment_id>")
@login_required
def delete_comment(task_id, comment_id):
    comment_service.delete_comment(get_current_principal(), comment_id)
    return success_response("Comment deleted successfully")
