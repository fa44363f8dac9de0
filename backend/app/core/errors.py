class DomainError(Exception):
    """Base class for caller-input failures raised by the services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(DomainError):
    pass


class NotFoundError(DomainError):
    entity = "Entity"

    def __init__(self, identifier: str | None = None):
        super().__init__(f"{self.entity} not found")
        self.identifier = identifier


class TaskNotFoundError(NotFoundError):
    entity = "Task"


class TeamNotFoundError(NotFoundError):
    entity = "Team"


class UserNotFoundError(NotFoundError):
    entity = "User"
