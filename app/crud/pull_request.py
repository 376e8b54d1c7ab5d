#app/crud/pull_request.py
from sqlalchemy import select, delete, func, case
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any, Iterable
import logging

from app.models.pull_request import PullRequest, PullRequestReviewer, PRStatus
from app.models.user import User
from app.core.exceptions import PullRequestExistsError, PullRequestMergedError, ReviewerNotAssignedError

logger = logging.getLogger("Reviewers.PullRequests")

TOP_REVIEWERS_LIMIT = 10

def pr_exists(db: Session, pr_id: str) -> bool:
    """
    Проверить, существует ли PR.
    """
    return db.get(PullRequest, pr_id) is not None

def get_pr(db: Session, pr_id: str) -> Optional[PullRequest]:
    """
    Получить PR (с ревьюверами) по ID; None, если его нет.
    """
    return db.get(PullRequest, pr_id)

def create_pr(db: Session, pr_id: str, name: str, author_id: str, reviewer_ids: List[str]) -> PullRequest:
    """
    Создать PR в статусе OPEN вместе со ссылками на ревьюверов (один commit).
    """
    pr = PullRequest(
        pull_request_id=pr_id,
        pull_request_name=name,
        author_id=author_id,
        status=PRStatus.OPEN,
        created_at=datetime.now(timezone.utc),
    )
    pr.reviewer_links = [PullRequestReviewer(user_id=user_id) for user_id in reviewer_ids]
    db.add(pr)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error while creating PR '{pr_id}': {e}")
        raise PullRequestExistsError(pr_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while creating PR '{pr_id}': {e}")
        raise
    db.refresh(pr)
    logger.info(f"Created PR '{pr_id}' by '{author_id}' with reviewers {reviewer_ids}")
    return pr

def merge_pr(db: Session, pr: PullRequest) -> PullRequest:
    """
    Перевести PR в MERGED и проставить merged_at.
    """
    pr.status = PRStatus.MERGED
    pr.merged_at = datetime.now(timezone.utc)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error merging PR '{pr.pull_request_id}': {e}")
        raise
    db.refresh(pr)
    logger.info(f"Merged PR '{pr.pull_request_id}'")
    return pr

def reassign_reviewer(db: Session, pr_id: str, old_user_id: str, new_user_id: str) -> PullRequest:
    """
    Заменить ревьювера: удалить старую ссылку и добавить новую одной транзакцией.
    Ссылка удаляется, только пока PR в статусе OPEN. Если PR успели смержить,
    транзакция откатывается с PullRequestMergedError; если старая ссылка уже
    исчезла (конкурентная замена), с ReviewerNotAssignedError.
    """
    open_pr = select(PullRequest.pull_request_id).where(
        PullRequest.pull_request_id == pr_id,
        PullRequest.status == PRStatus.OPEN,
    )
    try:
        result = db.execute(
            delete(PullRequestReviewer)
            .where(
                PullRequestReviewer.pull_request_id.in_(open_pr),
                PullRequestReviewer.user_id == old_user_id,
            )
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount == 0:
            db.rollback()
            current = db.get(PullRequest, pr_id)
            if current is not None and current.is_merged:
                logger.warning(f"PR '{pr_id}' was merged before reviewer '{old_user_id}' could be replaced")
                raise PullRequestMergedError(pr_id)
            logger.warning(f"Reviewer '{old_user_id}' vanished from PR '{pr_id}' before reassignment")
            raise ReviewerNotAssignedError(pr_id, old_user_id)
        db.add(PullRequestReviewer(pull_request_id=pr_id, user_id=new_user_id))
        db.commit()
    except IntegrityError as e:
        # new_user_id уже назначен конкурентным запросом
        db.rollback()
        logger.warning(f"Integrity error while reassigning on PR '{pr_id}': {e}")
        raise ReviewerNotAssignedError(pr_id, old_user_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while reassigning on PR '{pr_id}': {e}")
        raise
    pr = db.get(PullRequest, pr_id)
    # коллекция reviewer_links в identity map устарела после bulk delete
    db.expire(pr)
    logger.info(f"PR '{pr_id}': reviewer '{old_user_id}' replaced by '{new_user_id}'")
    return pr

def get_prs_by_reviewer(db: Session, user_id: str) -> List[PullRequest]:
    """
    PR, где пользователь назначен ревьювером (сначала новые).
    """
    query = (
        select(PullRequest)
        .join(PullRequestReviewer, PullRequestReviewer.pull_request_id == PullRequest.pull_request_id)
        .where(PullRequestReviewer.user_id == user_id)
        .order_by(PullRequest.created_at.desc(), PullRequest.pull_request_id)
    )
    return list(db.scalars(query))

def get_open_prs_for_reviewers(db: Session, user_ids: Iterable[str]) -> List[str]:
    """
    ID открытых PR, у которых хотя бы один ревьювер из user_ids.
    """
    user_ids = list(user_ids)
    if not user_ids:
        return []
    query = (
        select(PullRequest.pull_request_id)
        .join(PullRequestReviewer, PullRequestReviewer.pull_request_id == PullRequest.pull_request_id)
        .where(PullRequest.status == PRStatus.OPEN, PullRequestReviewer.user_id.in_(user_ids))
        .distinct()
        .order_by(PullRequest.pull_request_id)
    )
    return list(db.scalars(query))

def get_statistics(db: Session) -> Dict[str, Any]:
    """
    Счётчики PR по статусам и топ-10 ревьюверов по числу текущих назначений.
    """
    total, open_count, merged_count = db.execute(
        select(
            func.count(PullRequest.pull_request_id),
            func.coalesce(func.sum(case((PullRequest.status == PRStatus.OPEN, 1), else_=0)), 0),
            func.coalesce(func.sum(case((PullRequest.status == PRStatus.MERGED, 1), else_=0)), 0),
        )
    ).one()

    review_count = func.count(PullRequestReviewer.id).label("review_count")
    rows = db.execute(
        select(User.user_id, User.username, review_count)
        .join(PullRequestReviewer, PullRequestReviewer.user_id == User.user_id)
        .group_by(User.user_id, User.username)
        .order_by(review_count.desc(), User.user_id)
        .limit(TOP_REVIEWERS_LIMIT)
    ).all()

    return {
        "total_prs": int(total),
        "open_prs": int(open_count),
        "merged_prs": int(merged_count),
        "top_reviewers": [
            {"user_id": row.user_id, "username": row.username, "review_count": int(row.review_count)}
            for row in rows
        ],
    }
