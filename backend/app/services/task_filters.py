"""Status / team / user filtering over task collections.

Two combination modes exist. Intersection (the default) narrows the
candidate list one filter at a time and only looks at ``userIds``. Union
merges the per-filter matches and additionally counts the task ``creator``
as a match for the team and user filters. The two modes are deliberately
not symmetric; callers rely on both behaviours.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence

from app.core.errors import TeamNotFoundError
from app.schemas.task import Task
from app.schemas.team import Team

TaskPredicate = Callable[[Task], bool]


def parse_union_flag(value: Any) -> bool:
    """Only a real ``True`` or the literal string ``"true"`` select union mode."""
    return value is True or value == "true"


@dataclass(frozen=True)
class TaskFilter:
    status: Optional[str] = None
    team_id: Optional[str] = None
    user_id: Optional[str] = None
    union: Any = False

    @property
    def is_empty(self) -> bool:
        return not self.status and not self.team_id and not self.user_id

    @property
    def use_union(self) -> bool:
        return parse_union_flag(self.union)


def filter_mode(criteria: TaskFilter) -> str:
    return "union" if criteria.use_union else "intersection"


def resolve_team(teams: Iterable[Team], team_id: str) -> Team:
    for team in teams:
        if team.team_id == team_id:
            return team
    raise TeamNotFoundError(team_id)


def _has_member(task: Task, members: set) -> bool:
    return any(uid in members for uid in task.user_ids)


def _intersection_predicates(criteria: TaskFilter, members: Optional[set]) -> List[TaskPredicate]:
    predicates: List[TaskPredicate] = []
    if criteria.status:
        predicates.append(lambda t: t.status == criteria.status)
    if members is not None:
        predicates.append(lambda t: _has_member(t, members))
    if criteria.user_id:
        predicates.append(lambda t: criteria.user_id in t.user_ids)
    return predicates


def _union_predicates(criteria: TaskFilter, members: Optional[set]) -> List[TaskPredicate]:
    predicates: List[TaskPredicate] = []
    if criteria.status:
        predicates.append(lambda t: t.status == criteria.status)
    if members is not None:
        predicates.append(lambda t: _has_member(t, members) or (bool(t.creator) and t.creator in members))
    if criteria.user_id:
        predicates.append(lambda t: criteria.user_id in t.user_ids or t.creator == criteria.user_id)
    return predicates


def filter_tasks(tasks: Sequence[Task], teams: Iterable[Team], criteria: TaskFilter) -> Sequence[Task]:
    """Return the tasks selected by ``criteria``.

    With no status, team or user supplied the input sequence is returned
    as is. Raises ``TeamNotFoundError`` when ``team_id`` does not match a
    team. Union results keep input order and list each task once.
    """
    if criteria.is_empty:
        return tasks

    members = None
    if criteria.team_id:
        members = set(resolve_team(teams, criteria.team_id).members)

    if criteria.use_union:
        predicates = _union_predicates(criteria, members)
        seen = set()
        result = []
        for task in tasks:
            if task.task_id in seen or not any(match(task) for match in predicates):
                continue
            seen.add(task.task_id)
            result.append(task)
        return result

    filtered = list(tasks)
    for match in _intersection_predicates(criteria, members):
        filtered = [task for task in filtered if match(task)]
    return filtered
