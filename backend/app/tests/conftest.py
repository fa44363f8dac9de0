import pytest

from app.database.stores import JsonFileStore
from app.schemas.task import Task
from app.schemas.team import Team
from app.schemas.user import User


@pytest.fixture
def store(tmp_path):
    return JsonFileStore(tmp_path / "data")


@pytest.fixture
def make_task():
    def factory(task_id: str, **fields) -> Task:
        fields.setdefault("title", f"Task {task_id}")
        fields.setdefault("status", "To Do")
        return Task(task_id=task_id, **fields)

    return factory


@pytest.fixture
def seeded_store(store, make_task):
    """Two teams, three users and four tasks covering the filter edge cases.

    t4 is created by a member of team-b but assigned to nobody in it.
    """
    store.save_teams([
        Team(team_id="team-a", name="Alpha", members=["alice", "bob"]),
        Team(team_id="team-b", name="Beta", members=["carol"]),
    ])
    store.save_users([
        User(user_id="alice", task_id="t1", tasks=["t1", "t2"]),
        User(user_id="bob", tasks=["t2"]),
        User(user_id="carol", task_id="t3", tasks=["t3"]),
    ])
    store.save_tasks([
        make_task("t1", status="Done", user_ids=["alice"], creator="alice"),
        make_task("t2", status="In Progress", user_ids=["alice", "bob"], creator="bob"),
        make_task("t3", status="To Do", user_ids=["carol"], creator="alice"),
        make_task("t4", status="Done", user_ids=[], creator="carol"),
    ])
    return store
