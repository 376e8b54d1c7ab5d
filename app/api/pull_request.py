#app/api/pull_request.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.schemas.pull_request import (
    PullRequestCreate,
    PullRequestMerge,
    PullRequestRead,
    PullRequestResponse,
    ReassignRequest,
    ReassignResponse,
)
from app.schemas.response import ErrorResponse
from app.services import pull_request as pr_service
from app.services.assignment import ReviewerPicker
from app.dependencies import get_db, get_reviewer_picker

router = APIRouter(prefix="/pullRequest", tags=["PullRequests"])

@router.post(
    "/create",
    response_model=PullRequestResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_pr_api(
    data: PullRequestCreate,
    db: Session = Depends(get_db),
    picker: ReviewerPicker = Depends(get_reviewer_picker),
):
    """
    Create a PR and auto-assign up to two active reviewers from the author's team.
    """
    pr = pr_service.create_pr(db, data.pull_request_id, data.pull_request_name, data.author_id, picker)
    return PullRequestResponse(pr=PullRequestRead.model_validate(pr))

@router.post("/merge", response_model=PullRequestResponse, responses={404: {"model": ErrorResponse}})
def merge_pr_api(
    data: PullRequestMerge,
    db: Session = Depends(get_db),
):
    """
    Mark a PR as MERGED. Idempotent.
    """
    pr = pr_service.merge_pr(db, data.pull_request_id)
    return PullRequestResponse(pr=PullRequestRead.model_validate(pr))

@router.post(
    "/reassign",
    response_model=ReassignResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def reassign_reviewer_api(
    data: ReassignRequest,
    db: Session = Depends(get_db),
    picker: ReviewerPicker = Depends(get_reviewer_picker),
):
    """
    Replace one reviewer with a random active member of that reviewer's team.
    """
    pr, replaced_by = pr_service.reassign_reviewer(db, data.pull_request_id, data.old_user_id, picker)
    return ReassignResponse(pr=PullRequestRead.model_validate(pr), replaced_by=replaced_by)

@router.get("/get", response_model=PullRequestResponse, responses={404: {"model": ErrorResponse}})
def read_pr(
    pull_request_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    pr = pr_service.get_pr(db, pull_request_id)
    return PullRequestResponse(pr=PullRequestRead.model_validate(pr))
