#app/schemas/user.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List
from app.schemas.pull_request import PullRequestShort

class UserRead(BaseModel):
    """
    UserRead — схема для выдачи пользователя (response).
    """
    user_id: str
    username: str
    team_name: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)

class UserResponse(BaseModel):
    user: UserRead

class SetIsActiveRequest(BaseModel):
    """
    SetIsActiveRequest — включение/выключение пользователя как ревьювера.
    """
    user_id: str = Field(..., min_length=1, examples=["u2"])
    is_active: bool = Field(..., description="Новое значение флага активности")

class UserReviewsResponse(BaseModel):
    """
    UserReviewsResponse — PR, где пользователь назначен ревьювером.
    """
    user_id: str
    pull_requests: List[PullRequestShort] = Field(default_factory=list)
