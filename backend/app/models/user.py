from sqlalchemy import JSON, Column, String

from app.database.base import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    task_id = Column(String, nullable=True)
    tasks = Column(JSON, nullable=False, default=list)
