from sqlalchemy import JSON, Column, String

from app.database.base import Base


class Team(Base):
    __tablename__ = "teams"

    team_id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=True)
    members = Column(JSON, nullable=False, default=list)
