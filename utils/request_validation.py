"""
Request payload validation helpers.
Turn raw JSON bodies and query strings into clean values or raise ValidationError.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from dateutil import parser as date_parser
from flask import request
from werkzeug.exceptions import BadRequest

from models import TaskStatus
from services.errors import ValidationError

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
PASSWORD_PATTERN = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$')
PASSWORD_MESSAGE = (
    'Password must be at least 8 characters long and include at least one uppercase letter, '
    'one lowercase letter, one number, and one special character.'
)

SORT_ORDERS = ('ASC', 'DESC')

# (MAX_PAGE - 1) * MAX_PAGE_SIZE must fit a signed 64-bit OFFSET
MAX_PAGE_SIZE = 100
MAX_PAGE = 1_000_000

# Public sort keys -> Task attribute names
SORTABLE_FIELDS = {
    'title': 'title',
    'description': 'description',
    'dueDate': 'due_date',
    'status': 'status',
    'createdAt': 'created_at',
    'updatedAt': 'updated_at',
}


@dataclass
class TaskFilter:
    tag: Optional[str] = None
    status: Optional[str] = None
    page: int = 1
    limit: int = 10
    sort_by: Optional[str] = None
    sort_order: str = 'ASC'

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def get_json_body() -> Dict[str, Any]:
    """
    Return the JSON object body of the current request.

    An absent body reads as ``{}``; a body that is not valid JSON raises
    werkzeug's BadRequest.
    """
    body = request.get_json(silent=True)
    if body is None:
        if request.get_data(cache=True).strip():
            raise BadRequest('Malformed JSON body')
        body = {}
    if not isinstance(body, dict):
        raise ValidationError('Request body must be a JSON object')
    return body


def is_valid_email(email) -> bool:
    """Validate email format."""
    return isinstance(email, str) and EMAIL_PATTERN.match(email) is not None


def require_string(body: Dict[str, Any], field: str, label: Optional[str] = None) -> str:
    value = body.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label or field} is required")
    return value.strip()


def require_email(body: Dict[str, Any], field: str = 'email') -> str:
    email = body.get(field)
    if not email:
        raise ValidationError('Email is required')
    if not is_valid_email(email):
        raise ValidationError('Email must be a valid email address')
    return email.strip().lower()


def require_password(body: Dict[str, Any], field: str = 'password') -> str:
    password = body.get(field)
    if not isinstance(password, str) or not password:
        raise ValidationError('Password is required')
    if not PASSWORD_PATTERN.match(password):
        raise ValidationError(PASSWORD_MESSAGE)
    return password


def parse_status(value, field: str = 'status') -> str:
    if value not in TaskStatus.values():
        raise ValidationError(
            f"{field} must be one of the following values: {', '.join(TaskStatus.values())}"
        )
    return value


def parse_due_date(value) -> datetime:
    """Parse an ISO-8601 date into a naive UTC datetime."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError('dueDate must be a valid ISO 8601 date string')
    try:
        parsed = date_parser.isoparse(value.strip())
    except (ValueError, OverflowError):
        raise ValidationError('dueDate must be a valid ISO 8601 date string')
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_tags(value, field: str = 'tags') -> List[str]:
    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        raise ValidationError(f"{field} must be an array of strings")
    return value


def parse_task_fields(body: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Validate task create/update payloads.

    Args:
        body: JSON request body
        partial: when True only the provided fields are validated and returned

    Returns:
        Dict of Task attribute names to clean values
    """
    fields = {}

    for key in ('title', 'description'):
        if not partial or key in body:
            fields[key] = require_string(body, key)

    if not partial or 'dueDate' in body:
        if 'dueDate' not in body:
            raise ValidationError('dueDate is required')
        fields['due_date'] = parse_due_date(body['dueDate'])

    if body.get('status') is not None:
        fields['status'] = parse_status(body['status'])

    if body.get('tags') is not None:
        fields['tags'] = parse_tags(body['tags'])

    return fields


def _positive_int(args, name: str, default: int, maximum: int) -> int:
    raw = args.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number")
    if value < 1:
        raise ValidationError(f"{name} must be at least 1")
    if value > maximum:
        raise ValidationError(f"{name} must be at most {maximum}")
    return value


def parse_task_filter(args) -> TaskFilter:
    """Build a TaskFilter from query parameters (tag, status, page, limit, sortBy, sortOrder)."""
    status = args.get('status') or None
    if status is not None:
        parse_status(status)

    sort_by = args.get('sortBy') or None
    if sort_by is not None and sort_by not in SORTABLE_FIELDS:
        raise ValidationError(f"sortBy must be one of: {', '.join(SORTABLE_FIELDS)}")

    sort_order = (args.get('sortOrder') or 'ASC').upper()
    if sort_order not in SORT_ORDERS:
        raise ValidationError('sortOrder must be either ASC or DESC')

    return TaskFilter(
        tag=args.get('tag') or None,
        status=status,
        page=_positive_int(args, 'page', 1, MAX_PAGE),
        limit=_positive_int(args, 'limit', 10, MAX_PAGE_SIZE),
        sort_by=sort_by,
        sort_order=sort_order,
    )
