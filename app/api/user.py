#app/api/user.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.schemas.user import UserRead, UserResponse, SetIsActiveRequest, UserReviewsResponse
from app.schemas.pull_request import PullRequestShort
from app.schemas.response import ErrorResponse
from app.services.user import set_user_active
from app.services.pull_request import get_user_reviews
from app.dependencies import get_db

router = APIRouter(prefix="/users", tags=["Users"])

@router.post("/setIsActive", response_model=UserResponse, responses={404: {"model": ErrorResponse}})
def set_is_active(
    data: SetIsActiveRequest,
    db: Session = Depends(get_db),
):
    """
    Set the user's active flag. Inactive users are never picked as reviewers.
    """
    user = set_user_active(db, data.user_id, data.is_active)
    return UserResponse(user=UserRead.model_validate(user))

@router.get("/getReview", response_model=UserReviewsResponse)
def get_reviews(
    user_id: str = Query(..., min_length=1, description="ID пользователя"),
    db: Session = Depends(get_db),
):
    """
    PRs where the user is currently assigned as a reviewer, newest first.
    """
    prs = get_user_reviews(db, user_id)
    return UserReviewsResponse(
        user_id=user_id,
        pull_requests=[PullRequestShort.model_validate(pr) for pr in prs],
    )
