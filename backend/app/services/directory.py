import logging
from typing import List
from uuid import uuid4

from app.core.errors import TeamNotFoundError, UserNotFoundError
from app.database.stores import DataStore, write_lock
from app.schemas.team import Team, TeamCreate
from app.schemas.user import User, UserCreate

logger = logging.getLogger("uvicorn.error")


def list_teams(store: DataStore) -> List[Team]:
    return store.load_teams()


def get_team(store: DataStore, team_id: str) -> Team:
    team = store.find_team_by_id(team_id)
    if team is None:
        raise TeamNotFoundError(team_id)
    return team


def create_team(store: DataStore, payload: TeamCreate) -> Team:
    team = Team(team_id=str(uuid4()), name=payload.name, members=list(dict.fromkeys(payload.members)))
    with write_lock:
        teams = store.load_teams()
        teams.append(team)
        store.save_teams(teams)
    logger.info("Team created id=%s members=%d", team.team_id, len(team.members))
    return team


def list_users(store: DataStore) -> List[User]:
    return store.load_users()


def get_user(store: DataStore, user_id: str) -> User:
    user = store.find_user_by_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def create_user(store: DataStore, payload: UserCreate) -> User:
    user = User(user_id=str(uuid4()), name=payload.name, email=payload.email, task_id=None, tasks=[])
    with write_lock:
        users = store.load_users()
        users.append(user)
        store.save_users(users)
    logger.info("User created id=%s", user.user_id)
    return user
