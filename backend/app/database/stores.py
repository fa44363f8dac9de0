from __future__ import annotations

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar

from sqlalchemy.orm import Session, sessionmaker

from app.models.task import Task as TaskRow
from app.models.team import Team as TeamRow
from app.models.user import User as UserRow
from app.schemas.task import Task
from app.schemas.team import Team
from app.schemas.user import User

logger = logging.getLogger("uvicorn.error")

T = TypeVar("T")

# Serialises read-modify-write cycles on the store within this process.
write_lock = threading.RLock()


class DataStore(ABC):
    """Whole-collection persistence for tasks, teams and users.

    ``save_*`` replaces the stored collection with the given sequence. Every
    ``load_*`` reads the persisted state again, so a read that follows a
    write within one operation observes that write.
    """

    @abstractmethod
    def load_tasks(self) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def save_tasks(self, tasks: list[Task]) -> None:
        raise NotImplementedError

    @abstractmethod
    def load_teams(self) -> list[Team]:
        raise NotImplementedError

    @abstractmethod
    def save_teams(self, teams: list[Team]) -> None:
        raise NotImplementedError

    @abstractmethod
    def load_users(self) -> list[User]:
        raise NotImplementedError

    @abstractmethod
    def save_users(self, users: list[User]) -> None:
        raise NotImplementedError

    def find_task_by_id(self, task_id: str) -> Optional[Task]:
        return next((task for task in self.load_tasks() if task.task_id == task_id), None)

    def find_team_by_id(self, team_id: str) -> Optional[Team]:
        return next((team for team in self.load_teams() if team.team_id == team_id), None)

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        return next((user for user in self.load_users() if user.user_id == user_id), None)


class _JsonCollection(Generic[T]):
    def __init__(self, path: Path, loader: Callable[[dict[str, Any]], T]) -> None:
        self._path = path
        self._loader = loader

    def load(self) -> list[T]:
        if not self._path.exists():
            return []
        text = self._path.read_text(encoding="utf-8")
        raw = json.loads(text or "[]")
        if not isinstance(raw, list):
            logger.warning("Ignoring %s: expected a JSON array", self._path)
            return []
        return [self._loader(item) for item in raw if isinstance(item, dict)]

    def save(self, items: list[Any]) -> None:
        payload = [item.model_dump(mode="json", by_alias=True) for item in items]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, self._path)


class JsonFileStore(DataStore):
    """Flat JSON files: ``tasks.json``, ``teams.json`` and ``users.json``."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self._lock = threading.RLock()
        self._tasks = _JsonCollection(self.data_dir / "tasks.json", Task.model_validate)
        self._teams = _JsonCollection(self.data_dir / "teams.json", Team.model_validate)
        self._users = _JsonCollection(self.data_dir / "users.json", User.model_validate)

    def load_tasks(self) -> list[Task]:
        with self._lock:
            return self._tasks.load()

    def save_tasks(self, tasks: list[Task]) -> None:
        with self._lock:
            self._tasks.save(tasks)

    def load_teams(self) -> list[Team]:
        with self._lock:
            return self._teams.load()

    def save_teams(self, teams: list[Team]) -> None:
        with self._lock:
            self._teams.save(teams)

    def load_users(self) -> list[User]:
        with self._lock:
            return self._users.load()

    def save_users(self, users: list[User]) -> None:
        with self._lock:
            self._users.save(users)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class SqlAlchemyStore(DataStore):
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def _replace_all(self, row_type, rows: list[Any]) -> None:
        db: Session = self._session_factory()
        try:
            db.query(row_type).delete()
            db.add_all(rows)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _query_all(self, row_type, order_by) -> list[Any]:
        db: Session = self._session_factory()
        try:
            return db.query(row_type).order_by(order_by).all()
        finally:
            db.close()

    # ---- tasks ----

    @staticmethod
    def _row_to_task(row: TaskRow) -> Task:
        return Task(
            task_id=row.task_id,
            title=row.title,
            description=row.description,
            deadline=row.deadline,
            status=row.status,
            user_ids=list(row.user_ids or []),
            creator=row.creator,
            gitlab_issue_id=row.gitlab_issue_id,
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
        )

    @staticmethod
    def _task_to_row(task: Task) -> TaskRow:
        return TaskRow(
            task_id=task.task_id,
            title=task.title,
            description=task.description,
            deadline=task.deadline.isoformat() if isinstance(task.deadline, datetime) else task.deadline,
            status=task.status,
            user_ids=list(task.user_ids),
            creator=task.creator,
            gitlab_issue_id=str(task.gitlab_issue_id) if task.gitlab_issue_id is not None else None,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    def load_tasks(self) -> list[Task]:
        return [self._row_to_task(row) for row in self._query_all(TaskRow, TaskRow.created_at.asc())]

    def save_tasks(self, tasks: list[Task]) -> None:
        self._replace_all(TaskRow, [self._task_to_row(task) for task in tasks])

    # ---- teams ----

    def load_teams(self) -> list[Team]:
        return [
            Team(team_id=row.team_id, name=row.name, members=list(row.members or []))
            for row in self._query_all(TeamRow, TeamRow.team_id.asc())
        ]

    def save_teams(self, teams: list[Team]) -> None:
        self._replace_all(
            TeamRow,
            [TeamRow(team_id=team.team_id, name=team.name, members=list(team.members)) for team in teams],
        )

    # ---- users ----

    def load_users(self) -> list[User]:
        return [
            User(
                user_id=row.user_id,
                name=row.name,
                email=row.email,
                task_id=row.task_id,
                tasks=list(row.tasks or []),
            )
            for row in self._query_all(UserRow, UserRow.user_id.asc())
        ]

    def save_users(self, users: list[User]) -> None:
        self._replace_all(
            UserRow,
            [
                UserRow(
                    user_id=user.user_id,
                    name=user.name,
                    email=user.email,
                    task_id=user.task_id,
                    tasks=list(user.tasks),
                )
                for user in users
            ],
        )
