#app/services/assignment.py
"""
Reviewer selection rules.

Everything random goes through a ReviewerPicker so the request layer can share
one process-wide instance while tests inject a seeded or stubbed one.
"""
import random
import logging
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from sqlalchemy.orm import Session

from app.crud.pull_request import get_pr
from app.crud.user import get_user, get_active_members
from app.models.pull_request import PullRequest
from app.core.exceptions import (
    PullRequestNotFound,
    PullRequestMergedError,
    ReviewerNotAssignedError,
    UserNotFound,
    NoCandidateError,
)

logger = logging.getLogger("Reviewers.Assignment")

DEFAULT_MAX_REVIEWERS = 2


class ReviewerPicker:
    """Random source for reviewer selection. Seeded once, never reseeded per call."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random(seed)

    def sample(self, user_ids: Sequence[str], count: int) -> List[str]:
        """Random permutation of user_ids truncated to count."""
        count = max(0, min(count, len(user_ids)))
        permutation = self._rng.sample(list(user_ids), len(user_ids))
        return permutation[:count]

    def choice(self, user_ids: Sequence[str]) -> str:
        return self._rng.choice(list(user_ids))


def select_initial_reviewers(
    candidate_ids: Sequence[str],
    picker: ReviewerPicker,
    max_count: int = DEFAULT_MAX_REVIEWERS,
) -> List[str]:
    """
    Pick up to max_count distinct reviewers from the candidate pool.

    The pool is expected to be the active members of the author's team without
    the author. An empty pool yields an empty list (a solo team is fine).
    """
    unique_ids = list(dict.fromkeys(candidate_ids))
    if not unique_ids:
        return []
    return picker.sample(unique_ids, max_count)


def eligible_replacements(candidate_ids: Iterable[str], excluded: Set[str]) -> List[str]:
    """Candidates left after removing excluded ids, order preserved."""
    return [user_id for user_id in candidate_ids if user_id not in excluded]


def replacement_exclusions(pr: PullRequest, old_reviewer_id: str) -> Set[str]:
    """Old reviewer, PR author and everyone currently assigned."""
    excluded = {old_reviewer_id, pr.author_id}
    excluded.update(pr.assigned_reviewers)
    return excluded


def pick_replacement(
    db: Session,
    pr: PullRequest,
    old_reviewer_id: str,
    team_name: str,
    picker: ReviewerPicker,
) -> Optional[str]:
    """
    Random active member of team_name eligible to replace old_reviewer_id on pr,
    or None when nobody is left.
    """
    members = get_active_members(db, team_name)
    candidates = eligible_replacements(
        (member.user_id for member in members),
        replacement_exclusions(pr, old_reviewer_id),
    )
    if not candidates:
        return None
    return picker.choice(candidates)


def select_replacement(
    db: Session,
    pr_id: str,
    old_reviewer_id: str,
    picker: ReviewerPicker,
) -> Tuple[PullRequest, str]:
    """
    Validate a reassignment request and choose the new reviewer.

    Checks run in a fixed order and the first failure wins: PR exists, PR is
    still OPEN, old reviewer is assigned to it, old reviewer is a known user.
    The replacement comes from the old reviewer's team, which is not
    necessarily the author's. Nothing is written here.
    """
    pr = get_pr(db, pr_id)
    if pr is None:
        raise PullRequestNotFound(pr_id)
    if pr.is_merged:
        raise PullRequestMergedError(pr_id)
    if old_reviewer_id not in pr.assigned_reviewers:
        raise ReviewerNotAssignedError(pr_id, old_reviewer_id)
    old_reviewer = get_user(db, old_reviewer_id)
    if old_reviewer is None:
        raise UserNotFound(old_reviewer_id)

    new_reviewer_id = pick_replacement(db, pr, old_reviewer_id, old_reviewer.team_name, picker)
    if new_reviewer_id is None:
        logger.warning(
            f"No replacement for '{old_reviewer_id}' on PR '{pr_id}' in team '{old_reviewer.team_name}'"
        )
        raise NoCandidateError(pr_id, old_reviewer_id)
    return pr, new_reviewer_id
