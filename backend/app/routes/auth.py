from fastapi import APIRouter, Depends

from app.core.auth import get_current_user_id
from app.database.deps import get_store
from app.database.stores import DataStore
from app.schemas.user import User
from app.services import directory

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=User)
def me(
    current_user_id: str = Depends(get_current_user_id),
    store: DataStore = Depends(get_store),
):
    return directory.get_user(store, current_user_id)
