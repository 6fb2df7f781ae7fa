from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models import coalesce
from ..repositories import Repository, get_repository
from ..schemas import TaskCreate, TaskOut, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)

_NOT_FOUND = "Task not found"


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TaskOut],
    summary="List Tasks",
    description="List every task, newest first.",
    responses={
        200: {"description": "List retrieved successfully"},
    },
)
def list_tasks(repo: Repository = Depends(_get_repo)) -> List[TaskOut]:
    """
    List all tasks ordered by creation time, newest first.
    """
    return [TaskOut(**it) for it in repo.list_all()]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a new task and return the created resource.",
    responses={
        201: {"description": "Task created successfully"},
        400: {"description": "Validation error"},
    },
)
def create_task(payload: TaskCreate, repo: Repository = Depends(_get_repo)) -> TaskOut:
    """
    Create a new Task.
    """
    created = repo.create(payload)
    return TaskOut(**created)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}",
    response_model=TaskOut,
    summary="Update Task",
    description=(
        "Update fields of an existing task. Omitted fields keep their stored value."
    ),
    responses={
        200: {"description": "Task updated"},
        400: {"description": "Validation error"},
        404: {"description": "Task not found"},
    },
)
def update_task(
    task_id: str,
    payload: Optional[TaskUpdate] = None,
    repo: Repository = Depends(_get_repo),
) -> TaskOut:
    """
    Partial update of a Task. The payload is merged field by field onto the
    stored record and the full merged record is written back.
    """
    # A request without a body changes nothing
    changes = payload.changes() if payload is not None else {}
    logger.info("Update request for id %s: %s", task_id, changes)

    existing = repo.get(task_id)
    if existing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)

    updated = repo.update(task_id, coalesce(existing, changes))
    if updated is None:
        # Deleted between the lookup and the write
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return TaskOut(**updated)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Task",
    description="Delete a task by ID.",
    responses={
        204: {"description": "Task deleted"},
        404: {"description": "Task not found"},
    },
)
def delete_task(task_id: str, repo: Repository = Depends(_get_repo)) -> Response:
    """
    Delete a Task. Returns 204 on success, 404 if not found.
    """
    if repo.get(task_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    if not repo.delete(task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    logger.info("Deleted task %s", task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
