from fastapi import APIRouter, Depends, status

from app.core.auth import get_current_user_id
from app.database.deps import get_store
from app.database.stores import DataStore
from app.schemas.user import User, UserCreate
from app.services import directory

router = APIRouter(
    prefix='/user',
    tags=['User'],
    dependencies=[Depends(get_current_user_id)],
)


@router.get('/', response_model=list[User])
def list_users(store: DataStore = Depends(get_store)):
    return directory.list_users(store)


@router.post('/', response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, store: DataStore = Depends(get_store)):
    return directory.create_user(store, payload)


@router.get('/{user_id}', response_model=User)
def read_user(user_id: str, store: DataStore = Depends(get_store)):
    return directory.get_user(store, user_id)
