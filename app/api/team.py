#app/api/team.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.schemas.team import (
    TeamCreate,
    TeamRead,
    TeamResponse,
    TeamDeactivateRequest,
    TeamDeactivateResponse,
)
from app.schemas.response import ErrorResponse
from app.services import team as team_service
from app.services.assignment import ReviewerPicker
from app.dependencies import get_db, get_reviewer_picker

router = APIRouter(prefix="/team", tags=["Teams"])

@router.post(
    "/add",
    response_model=TeamResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_team_api(
    data: TeamCreate,
    db: Session = Depends(get_db),
):
    """
    Create a team and upsert its members into it.
    """
    members = [member.model_dump() for member in data.members]
    team = team_service.create_team(db, data.team_name, members)
    return TeamResponse(team=TeamRead.model_validate(team))

@router.get("/get", response_model=TeamRead, responses={404: {"model": ErrorResponse}})
def read_team(
    team_name: str = Query(..., min_length=1, description="Название команды"),
    db: Session = Depends(get_db),
):
    """
    Get a team with its members.
    """
    return TeamRead.model_validate(team_service.get_team(db, team_name))

@router.post("/deactivate", response_model=TeamDeactivateResponse, responses={404: {"model": ErrorResponse}})
def deactivate_team_api(
    data: TeamDeactivateRequest,
    db: Session = Depends(get_db),
    picker: ReviewerPicker = Depends(get_reviewer_picker),
):
    """
    Deactivate all active members and reassign their open reviews where possible.
    Per-PR failures are reported in the body, not as an error status.
    """
    return team_service.deactivate_team(db, data.team_name, picker)
