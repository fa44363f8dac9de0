from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from app.schemas.common import CamelModel


# Deadlines that do not parse as a timestamp (e.g. "" in older records) are
# kept verbatim.
Deadline = Optional[Union[datetime, str]]


class TaskStatus(str, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class Task(CamelModel):
    # status is free text: unknown values are stored as given
    task_id: str = Field(alias="taskId")
    title: Optional[str] = None
    description: Optional[str] = None
    deadline: Deadline = Field(default=None, union_mode="left_to_right")
    status: Optional[str] = None
    user_ids: List[str] = Field(default_factory=list, alias="userIds")
    creator: Optional[str] = None
    gitlab_issue_id: Optional[Union[int, str]] = Field(default=None, alias="gitlabIssueId")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("user_ids", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class TaskCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    deadline: Deadline = Field(default=None, union_mode="left_to_right")
    status: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")
    # validated by the service so a non-list gets a 400 instead of a 422
    user_ids: Any = Field(default=None, alias="userIds")


class TaskUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    deadline: Deadline = Field(default=None, union_mode="left_to_right")
    status: Optional[str] = None
    user_ids: Optional[List[str]] = Field(default=None, alias="userIds")
    gitlab_issue_id: Optional[Union[int, str]] = Field(default=None, alias="gitlabIssueId")


class TaskAssign(CamelModel):
    user_id: str = Field(alias="userId")


class TaskStatusChange(CamelModel):
    new_status: Optional[str] = Field(default=None, alias="newStatus")


class TaskMessageOut(CamelModel):
    message: str
    task: Task


class TaskListOut(CamelModel):
    message: str
    tasks: List[Task]


class GroupedTasksOut(CamelModel):
    groups: Dict[str, List[Task]]


class CalendarEntry(CamelModel):
    task_id: str = Field(alias="taskId")
    title: Optional[str] = None
    deadline: Deadline = Field(default=None, union_mode="left_to_right")
    status: Optional[str] = None


class TaskSummary(CamelModel):
    total: int
    completed: int
    remaining: int


class TaskProgress(CamelModel):
    task_id: str = Field(alias="taskId")
    title: Optional[str] = None
    status: Optional[str] = None
    progress_percent: int
