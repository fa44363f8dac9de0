from typing import List, Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel


class Team(CamelModel):
    team_id: str = Field(alias="teamId")
    name: Optional[str] = None
    members: List[str] = Field(default_factory=list)

    @field_validator("members", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class TeamCreate(CamelModel):
    name: Optional[str] = None
    members: List[str] = Field(default_factory=list)
