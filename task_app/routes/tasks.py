"""
Owner-scoped task endpoints.

Every route requires a valid bearer token.  Routes addressing a single
task additionally pass through ``owner_only``, which loads the task and
rejects callers that did not create it.

Endpoints:
    GET    /tasks         - List the caller's tasks (page, limit, status)
    POST   /tasks         - Create a task owned by the caller
    GET    /tasks/<id>    - Retrieve one task
    PUT    /tasks/<id>    - Replace title/status, and description if given
    DELETE /tasks/<id>    - Delete a task
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, g, jsonify, request

from ..auth import owner_only, require_auth
from ..models import Task
from ..repositories import TaskRepository
from ..schemas import TaskIn, TaskListQuery, parse

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__)


@tasks_bp.route("", methods=["GET"])
@require_auth
def list_tasks() -> tuple[Response, int]:
    """
    List the authenticated user's tasks, newest first.

    Query parameters ``page`` and ``limit`` (both >= 1, defaults 1 and
    10) select the page; ``status`` optionally filters by status.  Each
    task embeds its author's public projection.
    """
    query = parse(TaskListQuery, request.args.to_dict())
    logger.info(
        "Listing tasks for user_id=%s page=%s limit=%s", g.identity.id, query.page, query.limit
    )

    tasks = TaskRepository().find_by_owner_paged(
        g.identity.id, query.page, query.limit, query.status
    )
    return jsonify([task.to_dict(include_author=True) for task in tasks]), 200


@tasks_bp.route("", methods=["POST"])
@require_auth
def create_task() -> tuple[Response, int]:
    """
    Create a new task for the authenticated user.

    The author is always the caller; ``id``, ``authorId`` and timestamps
    in the body are ignored.
    """
    body = parse(TaskIn, request.get_json(silent=True))
    task = Task(
        author_id=g.identity.id,
        title=body.title,
        description=body.description,
        status=body.status.value,
    )
    TaskRepository().insert(task)
    return jsonify(task.to_dict()), 201


@tasks_bp.route("/<task_id>", methods=["GET"])
@require_auth
@owner_only
def get_task(task_id: str) -> tuple[Response, int]:
    return jsonify(g.task.to_dict()), 200


@tasks_bp.route("/<task_id>", methods=["PUT"])
@require_auth
@owner_only
def update_task(task_id: str) -> tuple[Response, int]:
    """
    Update a task.

    ``title`` is required and ``status`` falls back to ``pending`` when
    omitted; ``description`` is only changed when it is present in the
    body.
    """
    body = parse(TaskIn, request.get_json(silent=True))
    changes = {"title": body.title, "status": body.status.value}
    if "description" in body.model_fields_set:
        changes["description"] = body.description

    task = TaskRepository().update(g.task, **changes)
    return jsonify(task.to_dict()), 200


@tasks_bp.route("/<task_id>", methods=["DELETE"])
@require_auth
@owner_only
def delete_task(task_id: str) -> tuple[Response, int]:
    TaskRepository().delete(g.task)
    return jsonify({"message": "Task deleted successfully"}), 200
