from sqlalchemy import JSON, Column, DateTime, String

from app.database.base import Base


class Task(Base):
    __tablename__ = "tasks"

    task_id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=True)
    description = Column(String, nullable=True)
    deadline = Column(String, nullable=True)
    status = Column(String, nullable=True)
    user_ids = Column(JSON, nullable=False, default=list)
    creator = Column(String, nullable=True, index=True)
    gitlab_issue_id = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
