from fastapi import APIRouter, Depends, status

from app.core.auth import get_current_user_id
from app.database.deps import get_store
from app.database.stores import DataStore
from app.schemas.team import Team, TeamCreate
from app.services import directory

router = APIRouter(
    prefix="/team",
    tags=["Team"],
    dependencies=[Depends(get_current_user_id)],
)


@router.get("/", response_model=list[Team])
def list_teams(store: DataStore = Depends(get_store)):
    return directory.list_teams(store)


@router.post("/", response_model=Team, status_code=status.HTTP_201_CREATED)
def create_team(payload: TeamCreate, store: DataStore = Depends(get_store)):
    return directory.create_team(store, payload)


@router.get("/{team_id}", response_model=Team)
def read_team(team_id: str, store: DataStore = Depends(get_store)):
    return directory.get_team(store, team_id)
