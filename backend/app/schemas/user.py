from typing import List, Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel


class User(CamelModel):
    user_id: str = Field(alias="userId")
    name: Optional[str] = None
    email: Optional[str] = None
    # single-task back-reference kept from older records
    task_id: Optional[str] = Field(default=None, alias="taskId")
    tasks: List[str] = Field(default_factory=list)

    @field_validator("tasks", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class UserCreate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
