from typing import Dict, List

from app.core.errors import InvalidArgumentError, TaskNotFoundError
from app.database.stores import DataStore
from app.schemas.task import (
    CalendarEntry,
    Task,
    TaskListOut,
    TaskProgress,
    TaskStatus,
    TaskSummary,
)
from app.services.task_filters import TaskFilter, filter_mode, filter_tasks


PROGRESS_BY_STATUS = {
    TaskStatus.DONE.value: 100,
    TaskStatus.IN_PROGRESS.value: 50,
}
GROUP_BY_OPTIONS = ("status", "team")
UNKNOWN_STATUS_KEY = "Unknown"


def _filtered(store: DataStore, criteria: TaskFilter):
    tasks = store.load_tasks()
    if criteria.is_empty:
        return tasks
    return filter_tasks(tasks, store.load_teams(), criteria)


def list_tasks(store: DataStore, criteria: TaskFilter) -> TaskListOut:
    tasks = _filtered(store, criteria)
    return TaskListOut(message=f"Tasks retrieved ({filter_mode(criteria)} mode)", tasks=list(tasks))


def get_calendar_data(store: DataStore, criteria: TaskFilter) -> List[CalendarEntry]:
    return [
        CalendarEntry(task_id=task.task_id, title=task.title, deadline=task.deadline, status=task.status)
        for task in _filtered(store, criteria)
    ]


def get_task_summary(store: DataStore, criteria: TaskFilter) -> TaskSummary:
    tasks = _filtered(store, criteria)
    total = len(tasks)
    completed = sum(1 for task in tasks if task.status == TaskStatus.DONE.value)
    return TaskSummary(total=total, completed=completed, remaining=total - completed)


def get_task_progress(store: DataStore, task_id: str) -> TaskProgress:
    task = store.find_task_by_id(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return TaskProgress(
        task_id=task.task_id,
        title=task.title,
        status=task.status,
        progress_percent=PROGRESS_BY_STATUS.get(task.status, 0),
    )


def group_by_status(tasks: List[Task]) -> Dict[str, List[Task]]:
    groups: Dict[str, List[Task]] = {}
    for task in tasks:
        groups.setdefault(task.status or UNKNOWN_STATUS_KEY, []).append(task)
    return groups


def get_grouped_tasks(store: DataStore, by: str) -> Dict[str, List[Task]]:
    if by not in GROUP_BY_OPTIONS:
        raise InvalidArgumentError('Invalid grouping method. Use "status" or "team".')

    tasks = store.load_tasks()
    if by == "status":
        return group_by_status(tasks)

    # creator does not count towards team membership here
    groups: Dict[str, List[Task]] = {}
    for team in store.load_teams():
        members = set(team.members)
        groups[team.team_id] = [task for task in tasks if any(uid in members for uid in task.user_ids)]
    return groups
