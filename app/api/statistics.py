#app/api/statistics.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.schemas.statistics import StatisticsRead
from app.crud.pull_request import get_statistics
from app.dependencies import get_db

router = APIRouter(tags=["Statistics"])

@router.get("/statistics", response_model=StatisticsRead)
def read_statistics(db: Session = Depends(get_db)):
    """
    PR counts by status and the top-10 reviewers by current assignments.
    """
    return get_statistics(db)
