from app.models.task import Task  # noqa: F401
from app.models.team import Team  # noqa: F401
from app.models.user import User  # noqa: F401
