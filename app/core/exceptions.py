# app/core/exceptions.py

from enum import Enum


class ErrorCode(str, Enum):
    """Машиночитаемые коды ошибок API."""
    TEAM_EXISTS = "TEAM_EXISTS"
    PR_EXISTS = "PR_EXISTS"
    PR_MERGED = "PR_MERGED"
    NOT_ASSIGNED = "NOT_ASSIGNED"
    NO_CANDIDATE = "NO_CANDIDATE"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class BaseAppException(Exception):
    """Базовый класс для всех кастомных исключений сервиса."""
    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str = "App exception", **context):
        super().__init__(message)
        self.message = message
        # ids, которых касается ошибка (team_name, user_id, pull_request_id, ...)
        self.context = context

# ==== NotFound ====

class NotFoundError(BaseAppException):
    """Ошибка отсутствия ресурса."""
    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, message: str = "Resource not found", **context):
        super().__init__(message, **context)

class TeamNotFound(NotFoundError):
    """Ошибка: команда не найдена."""
    def __init__(self, team_name: str):
        super().__init__(f"team '{team_name}' not found", team_name=team_name)

class UserNotFound(NotFoundError):
    """Ошибка: пользователь не найден."""
    def __init__(self, user_id: str):
        super().__init__(f"user '{user_id}' not found", user_id=user_id)

class PullRequestNotFound(NotFoundError):
    """Ошибка: PR не найден."""
    def __init__(self, pull_request_id: str):
        super().__init__(f"PR '{pull_request_id}' not found", pull_request_id=pull_request_id)

# ==== Дубликаты ====

class AlreadyExistsError(BaseAppException):
    """Ошибка: ресурс с таким ключом уже существует."""
    status_code = 409

class TeamExistsError(AlreadyExistsError):
    """Ошибка: команда с таким именем уже существует."""
    code = ErrorCode.TEAM_EXISTS
    status_code = 400

    def __init__(self, team_name: str):
        super().__init__("team_name already exists", team_name=team_name)

class PullRequestExistsError(AlreadyExistsError):
    """Ошибка: PR с таким id уже существует."""
    code = ErrorCode.PR_EXISTS

    def __init__(self, pull_request_id: str):
        super().__init__("PR id already exists", pull_request_id=pull_request_id)

# ==== Состояние PR / ревьюверы ====

class PullRequestMergedError(BaseAppException):
    """Ошибка: изменение ревьюверов у уже смёрженного PR."""
    code = ErrorCode.PR_MERGED
    status_code = 409

    def __init__(self, pull_request_id: str):
        super().__init__("cannot reassign on merged PR", pull_request_id=pull_request_id)

class ReviewerNotAssignedError(BaseAppException):
    """Ошибка: пользователь не назначен ревьювером этого PR."""
    code = ErrorCode.NOT_ASSIGNED
    status_code = 409

    def __init__(self, pull_request_id: str, user_id: str):
        super().__init__(
            "reviewer is not assigned to this PR",
            pull_request_id=pull_request_id,
            user_id=user_id,
        )

class NoCandidateError(BaseAppException):
    """Ошибка: в команде нет активного кандидата на замену."""
    code = ErrorCode.NO_CANDIDATE
    status_code = 409

    def __init__(self, pull_request_id: str, user_id: str):
        super().__init__(
            "no active replacement candidate in team",
            pull_request_id=pull_request_id,
            user_id=user_id,
        )
