#app/schemas/statistics.py
from pydantic import BaseModel, Field
from typing import List

class ReviewerStat(BaseModel):
    user_id: str
    username: str
    review_count: int = Field(..., description="Текущее число назначений ревьювером")

class StatisticsRead(BaseModel):
    """
    StatisticsRead — агрегаты по PR и топ-10 ревьюверов.
    """
    total_prs: int
    open_prs: int
    merged_prs: int
    top_reviewers: List[ReviewerStat] = Field(default_factory=list)
