#app/services/team.py
import logging
from typing import List

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.crud import team as team_crud
from app.crud import pull_request as pr_crud
from app.crud.user import get_user
from app.models.team import Team
from app.models.pull_request import PullRequest
from app.schemas.team import TeamDeactivateResponse
from app.services.assignment import ReviewerPicker, pick_replacement
from app.core.exceptions import TeamNotFound, ReviewerNotAssignedError, PullRequestMergedError

logger = logging.getLogger("Reviewers.Team")


def create_team(db: Session, team_name: str, members: List[dict]) -> Team:
    return team_crud.create_team(db, team_name, members)


def get_team(db: Session, team_name: str) -> Team:
    team = team_crud.get_team(db, team_name)
    if team is None:
        raise TeamNotFound(team_name)
    return team


def _replace_one_deactivated(db: Session, pr: PullRequest, deactivated: set, picker: ReviewerPicker) -> bool:
    """
    Walk reviewers in assignment order and replace the first deactivated one
    that has a candidate. True once a swap is committed.
    """
    for reviewer_id in list(pr.assigned_reviewers):
        if reviewer_id not in deactivated:
            continue
        reviewer = get_user(db, reviewer_id)
        if reviewer is None:
            continue
        new_reviewer_id = pick_replacement(db, pr, reviewer_id, reviewer.team_name, picker)
        if new_reviewer_id is None:
            continue
        try:
            pr_crud.reassign_reviewer(db, pr.pull_request_id, reviewer_id, new_reviewer_id)
        except ReviewerNotAssignedError:
            # PR changed under us; try the next deactivated reviewer
            continue
        except PullRequestMergedError:
            return False
        return True
    return False


def deactivate_team(db: Session, team_name: str, picker: ReviewerPicker) -> TeamDeactivateResponse:
    """
    Deactivate every active member of a team, then try to move their open reviews.

    Best effort: for each open PR reviewed by a just-deactivated user, the
    first deactivated reviewer (in assignment order) that has an eligible
    replacement is swapped and the PR counts as reassigned. A PR where nobody
    can be replaced keeps its reviewers and counts as failed. One PR failing
    never stops the others.
    """
    if not team_crud.team_exists(db, team_name):
        raise TeamNotFound(team_name)

    deactivated_ids = team_crud.deactivate_team_members(db, team_name)
    if not deactivated_ids:
        return TeamDeactivateResponse(team_name=team_name)

    deactivated = set(deactivated_ids)
    reassigned: List[str] = []
    failed: List[str] = []

    for pr_id in pr_crud.get_open_prs_for_reviewers(db, deactivated_ids):
        try:
            pr = pr_crud.get_pr(db, pr_id)
            if pr is None or pr.is_merged:
                replaced = False
            else:
                replaced = _replace_one_deactivated(db, pr, deactivated, picker)
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Store error while reassigning reviewers of PR '{pr_id}'")
            replaced = False
        if replaced:
            reassigned.append(pr_id)
        else:
            failed.append(pr_id)

    logger.info(
        f"Team '{team_name}' deactivated: {len(deactivated_ids)} user(s), "
        f"{len(reassigned)} PR(s) reassigned, {len(failed)} failed"
    )
    return TeamDeactivateResponse(
        team_name=team_name,
        deactivated_users=deactivated_ids,
        reassigned_prs=reassigned,
        failed_reassignments=failed,
    )
