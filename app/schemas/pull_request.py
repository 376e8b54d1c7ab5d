#app/schemas/pull_request.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
from app.models.pull_request import PRStatus

class PullRequestShort(BaseModel):
    """
    PullRequestShort — краткая схема PR (для списков).
    """
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PRStatus

    model_config = ConfigDict(from_attributes=True)

class PullRequestRead(PullRequestShort):
    """
    PullRequestRead — PR с ревьюверами и датами (в JSON: createdAt/mergedAt).
    """
    assigned_reviewers: List[str] = Field(default_factory=list, description="ID ревьюверов в порядке назначения")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    merged_at: Optional[datetime] = Field(None, alias="mergedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

class PullRequestResponse(BaseModel):
    pr: PullRequestRead

class PullRequestCreate(BaseModel):
    """
    PullRequestCreate — создание PR; ревьюверы назначаются автоматически.
    """
    pull_request_id: str = Field(..., min_length=1, examples=["pr-1001"])
    pull_request_name: str = Field(..., min_length=1, examples=["Add search"])
    author_id: str = Field(..., min_length=1, examples=["u1"])

class PullRequestMerge(BaseModel):
    pull_request_id: str = Field(..., min_length=1, examples=["pr-1001"])

class ReassignRequest(BaseModel):
    """
    ReassignRequest — заменить конкретного ревьювера на другого из его команды.
    """
    pull_request_id: str = Field(..., min_length=1, examples=["pr-1001"])
    old_user_id: str = Field(..., min_length=1, examples=["u2"])

class ReassignResponse(BaseModel):
    pr: PullRequestRead
    replaced_by: str = Field(..., description="ID нового ревьювера")
