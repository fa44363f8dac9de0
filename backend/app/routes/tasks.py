import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.auth import get_current_user_id
from app.core.errors import DomainError
from app.database.deps import get_store
from app.database.stores import DataStore
from app.schemas.common import MessageOut
from app.schemas.task import (
    GroupedTasksOut,
    TaskAssign,
    TaskCreate,
    TaskListOut,
    TaskMessageOut,
    TaskStatusChange,
    TaskUpdate,
)
from app.services import dashboard, tasks as task_service
from app.services.task_filters import TaskFilter

logger = logging.getLogger("uvicorn.error")

router = APIRouter(
    prefix="/task",
    tags=["Task"],
    dependencies=[Depends(get_current_user_id)],
)


def get_task_filter(
    status: Optional[str] = None,
    team_id: Optional[str] = Query(default=None, alias="teamId"),
    user_id: Optional[str] = Query(default=None, alias="userId"),
    union: Optional[str] = None,
) -> TaskFilter:
    return TaskFilter(status=status, team_id=team_id, user_id=user_id, union=union)


@router.post("/", response_model=TaskMessageOut, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreate, store: DataStore = Depends(get_store)):
    return task_service.create_task(store, payload)


@router.get("/", response_model=TaskListOut)
def read_tasks(
    criteria: TaskFilter = Depends(get_task_filter),
    store: DataStore = Depends(get_store),
):
    try:
        return dashboard.list_tasks(store, criteria)
    except DomainError:
        raise
    except Exception:
        logger.exception("Failed to retrieve tasks")
        raise HTTPException(status_code=500, detail="Failed to retrieve tasks")


@router.get("/grouped", response_model=GroupedTasksOut)
def read_grouped_tasks(by: Optional[str] = None, store: DataStore = Depends(get_store)):
    return GroupedTasksOut(groups=dashboard.get_grouped_tasks(store, by))


@router.put("/{task_id}", response_model=TaskMessageOut)
def update_task(task_id: str, payload: TaskUpdate, store: DataStore = Depends(get_store)):
    return task_service.update_task(store, task_id, payload)


@router.patch("/{task_id}/assign", response_model=TaskMessageOut)
def assign_task(task_id: str, payload: TaskAssign, store: DataStore = Depends(get_store)):
    return task_service.assign_task(store, task_id, payload.user_id)


@router.patch("/{task_id}/status", response_model=TaskMessageOut)
def change_status(task_id: str, payload: TaskStatusChange, store: DataStore = Depends(get_store)):
    return task_service.change_status(store, task_id, payload.new_status)


@router.delete("/all", response_model=MessageOut)
def delete_all_tasks(store: DataStore = Depends(get_store)):
    return task_service.delete_all_tasks(store)


@router.delete("/{task_id}", response_model=TaskMessageOut)
def delete_task(task_id: str, store: DataStore = Depends(get_store)):
    return task_service.delete_task(store, task_id)
