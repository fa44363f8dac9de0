from fastapi import APIRouter, Depends

from app.core.auth import get_current_user_id
from app.database.deps import get_store
from app.database.stores import DataStore
from app.routes.tasks import get_task_filter
from app.schemas.task import CalendarEntry, TaskProgress, TaskSummary
from app.services import dashboard
from app.services.task_filters import TaskFilter

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(get_current_user_id)],
)


@router.get("/calendar", response_model=list[CalendarEntry])
def read_calendar(
    criteria: TaskFilter = Depends(get_task_filter),
    store: DataStore = Depends(get_store),
):
    return dashboard.get_calendar_data(store, criteria)


@router.get("/summary", response_model=TaskSummary)
def read_summary(
    criteria: TaskFilter = Depends(get_task_filter),
    store: DataStore = Depends(get_store),
):
    return dashboard.get_task_summary(store, criteria)


@router.get("/task-progress/{task_id}", response_model=TaskProgress)
def read_task_progress(task_id: str, store: DataStore = Depends(get_store)):
    return dashboard.get_task_progress(store, task_id)
