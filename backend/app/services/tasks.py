import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import uuid4

from app.core.errors import InvalidArgumentError, TaskNotFoundError
from app.database.stores import DataStore, write_lock
from app.schemas.common import MessageOut
from app.schemas.task import Task, TaskCreate, TaskMessageOut, TaskStatus, TaskUpdate
from app.schemas.user import User

logger = logging.getLogger("uvicorn.error")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    now = utcnow()
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def _unique(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


def _find_index(tasks: List[Task], task_id: str) -> int:
    for index, task in enumerate(tasks):
        if task.task_id == task_id:
            return index
    raise TaskNotFoundError(task_id)


def create_task(store: DataStore, payload: TaskCreate) -> TaskMessageOut:
    if not payload.title:
        raise InvalidArgumentError("Missing required title")
    if not payload.user_id:
        raise InvalidArgumentError("Missing userId")
    if not isinstance(payload.user_ids, list):
        raise InvalidArgumentError("'userIds' must be an array")

    now = utcnow()
    task = Task(
        task_id=str(uuid4()),
        title=payload.title,
        description=payload.description,
        # default only when the key is absent; an explicit null is stored
        status=payload.status if "status" in payload.model_fields_set else TaskStatus.TODO.value,
        deadline=payload.deadline,
        user_ids=_unique([str(uid) for uid in payload.user_ids]),
        gitlab_issue_id=None,
        created_at=now,
        updated_at=now,
        creator=payload.user_id,
    )
    with write_lock:
        tasks = store.load_tasks()
        tasks.append(task)
        store.save_tasks(tasks)
    logger.info("Task created id=%s creator=%s", task.task_id, task.creator)
    return TaskMessageOut(message="Task created", task=task)


def update_task(store: DataStore, task_id: str, payload: TaskUpdate) -> TaskMessageOut:
    changes = payload.model_dump(exclude_unset=True)
    if "user_ids" in changes and changes["user_ids"] is not None:
        changes["user_ids"] = _unique(changes["user_ids"])

    with write_lock:
        tasks = store.load_tasks()
        index = _find_index(tasks, task_id)
        current = tasks[index]
        merged = current.model_dump()
        merged.update(changes)
        merged["updated_at"] = _next_timestamp(current.updated_at)
        tasks[index] = Task.model_validate(merged)
        store.save_tasks(tasks)
    logger.info("Task updated id=%s fields=%s", task_id, sorted(changes))
    return TaskMessageOut(message="Task updated", task=tasks[index])


def assign_task(store: DataStore, task_id: str, user_id: str) -> TaskMessageOut:
    with write_lock:
        tasks = store.load_tasks()
        task = tasks[_find_index(tasks, task_id)]
        if user_id not in task.user_ids:
            task.user_ids.append(user_id)
        task.updated_at = _next_timestamp(task.updated_at)
        store.save_tasks(tasks)
    logger.info("User %s assigned to task %s", user_id, task_id)
    return TaskMessageOut(message="User assigned to task", task=task)


def change_status(store: DataStore, task_id: str, new_status: Optional[str]) -> TaskMessageOut:
    with write_lock:
        tasks = store.load_tasks()
        task = tasks[_find_index(tasks, task_id)]
        task.status = new_status
        task.updated_at = _next_timestamp(task.updated_at)
        store.save_tasks(tasks)
    logger.info("Task %s status changed to %r", task_id, new_status)
    return TaskMessageOut(message="Task status updated", task=task)


def _detach_task(user: User, task_id: str) -> bool:
    changed = False
    if user.task_id == task_id:
        user.task_id = None
        changed = True
    remaining = [tid for tid in user.tasks if tid != task_id]
    if len(remaining) != len(user.tasks):
        user.tasks = remaining
        changed = True
    return changed


def _detach_all(user: User) -> bool:
    changed = False
    if user.task_id:
        user.task_id = None
        changed = True
    if user.tasks:
        user.tasks = []
        changed = True
    return changed


def delete_task(store: DataStore, task_id: str) -> TaskMessageOut:
    # The cascade below is not atomic with the task removal: if saving users
    # fails the task is already gone.
    with write_lock:
        tasks = store.load_tasks()
        deleted = tasks.pop(_find_index(tasks, task_id))
        store.save_tasks(tasks)

        users = store.load_users()
        changed = [user.user_id for user in users if _detach_task(user, task_id)]
        if changed:
            store.save_users(users)
    logger.info("Task deleted id=%s users_updated=%d", task_id, len(changed))
    return TaskMessageOut(message="Task deleted", task=deleted)


def delete_all_tasks(store: DataStore) -> MessageOut:
    with write_lock:
        tasks = store.load_tasks()
        if not tasks:
            return MessageOut(message="No tasks to delete")
        store.save_tasks([])

        users = store.load_users()
        changed = [user.user_id for user in users if _detach_all(user)]
        if changed:
            store.save_users(users)
    logger.info("All tasks deleted count=%d users_updated=%d", len(tasks), len(changed))
    return MessageOut(message="All tasks deleted")
