"""
Task Query Builder - Shared query logic for task listing

Used by both the user-facing and the admin task listings so that filtering,
ordering and pagination behave identically.
"""

from sqlalchemy import select, func, type_coerce
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import joinedload, selectinload

from models import db, Task
from utils.request_validation import TaskFilter, SORTABLE_FIELDS


class TaskQueryBuilder:
    """
    Builds task select statements from a TaskFilter.
    """

    @staticmethod
    def tag_clause(tag: str, dialect_name: str):
        """
        Array containment: the task's tag list includes ``tag``.

        PostgreSQL uses JSONB @>; other backends expand the JSON array with
        json_each and look for a matching element.
        """
        if dialect_name == 'postgresql':
            return type_coerce(Task.tags, JSONB).contains([tag])

        elements = func.json_each(Task.tags).table_valued('value')
        return select(elements.c.value).where(elements.c.value == tag).exists()

    @staticmethod
    def with_relationships(stmt):
        """Eager load assignee, creator and comments to avoid N+1 queries."""
        return stmt.options(
            joinedload(Task.assigned_to),
            joinedload(Task.creator),
            selectinload(Task.comments),
        )

    @staticmethod
    def get_filtered_tasks_query(filters: TaskFilter, dialect_name: str = None):
        """
        Args:
            filters: Parsed listing parameters
            dialect_name: Database dialect; defaults to the bound engine's

        Returns:
            SQLAlchemy select statement with filters, ordering and pagination applied
        """
        if dialect_name is None:
            dialect_name = db.engine.dialect.name

        stmt = TaskQueryBuilder.with_relationships(select(Task))

        if filters.tag:
            stmt = stmt.where(TaskQueryBuilder.tag_clause(filters.tag, dialect_name))

        if filters.status:
            stmt = stmt.where(Task.status == filters.status)

        # Default ordering is by due date; sortOrder applies either way
        column = getattr(Task, SORTABLE_FIELDS.get(filters.sort_by, 'due_date'))
        ordering = column.desc() if filters.sort_order == 'DESC' else column.asc()
        stmt = stmt.order_by(ordering, Task.id.asc())

        return stmt.offset(filters.offset).limit(filters.limit)

    @staticmethod
    def get_assigned_tasks_query(user_id: str):
        """Tasks assigned to a user, soonest due first."""
        stmt = TaskQueryBuilder.with_relationships(select(Task))
        return stmt.where(Task.assigned_to_id == user_id).order_by(Task.due_date.asc())
