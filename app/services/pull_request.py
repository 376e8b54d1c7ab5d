#app/services/pull_request.py
import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from app.crud import pull_request as pr_crud
from app.crud.user import get_user, get_active_members
from app.models.pull_request import PullRequest
from app.services.assignment import ReviewerPicker, select_initial_reviewers, select_replacement
from app.core.settings import settings
from app.core.exceptions import PullRequestExistsError, PullRequestNotFound, UserNotFound

logger = logging.getLogger("Reviewers.PullRequests")


def create_pr(db: Session, pr_id: str, name: str, author_id: str, picker: ReviewerPicker) -> PullRequest:
    """
    Create an OPEN PR and auto-assign up to MAX_REVIEWERS active teammates of the author.
    """
    if pr_crud.pr_exists(db, pr_id):
        raise PullRequestExistsError(pr_id)
    author = get_user(db, author_id)
    if author is None:
        raise UserNotFound(author_id)

    pool = get_active_members(db, author.team_name, exclude_user_id=author_id)
    reviewers = select_initial_reviewers(
        [member.user_id for member in pool], picker, max_count=settings.MAX_REVIEWERS
    )
    if not reviewers:
        logger.info(f"PR '{pr_id}': no active teammates of '{author_id}' in '{author.team_name}', created without reviewers")
    return pr_crud.create_pr(db, pr_id, name, author_id, reviewers)


def merge_pr(db: Session, pr_id: str) -> PullRequest:
    """
    Mark PR as MERGED. Merging an already merged PR returns it untouched.
    """
    pr = pr_crud.get_pr(db, pr_id)
    if pr is None:
        raise PullRequestNotFound(pr_id)
    if pr.is_merged:
        return pr
    return pr_crud.merge_pr(db, pr)


def reassign_reviewer(db: Session, pr_id: str, old_user_id: str, picker: ReviewerPicker) -> Tuple[PullRequest, str]:
    """
    Swap one reviewer for a random active member of their team.
    Returns the updated PR and the id of the new reviewer.
    """
    _, new_user_id = select_replacement(db, pr_id, old_user_id, picker)
    pr = pr_crud.reassign_reviewer(db, pr_id, old_user_id, new_user_id)
    return pr, new_user_id


def get_pr(db: Session, pr_id: str) -> PullRequest:
    pr = pr_crud.get_pr(db, pr_id)
    if pr is None:
        raise PullRequestNotFound(pr_id)
    return pr


def get_user_reviews(db: Session, user_id: str) -> List[PullRequest]:
    return pr_crud.get_prs_by_reviewer(db, user_id)
