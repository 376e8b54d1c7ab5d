import pytest
from sqlalchemy.orm import Session

from app.crud import pull_request as crud_pr
from app.models.pull_request import PRStatus
from app.services.assignment import select_replacement
from app.core.exceptions import PullRequestExistsError, PullRequestMergedError, ReviewerNotAssignedError

def test_create_pr_persists_reviewers_in_order(db: Session, backend_team):
    pr = crud_pr.create_pr(db, "pr-1", "Feature", "u1", ["u3", "u2"])
    assert pr.status == PRStatus.OPEN
    assert pr.assigned_reviewers == ["u3", "u2"]
    assert crud_pr.pr_exists(db, "pr-1")
    assert crud_pr.get_pr(db, "pr-1").assigned_reviewers == ["u3", "u2"]

def test_create_pr_duplicate_id_maps_integrity_error(db: Session, backend_team):
    crud_pr.create_pr(db, "pr-1", "Feature", "u1", ["u2"])
    db.expunge_all()
    with pytest.raises(PullRequestExistsError):
        crud_pr.create_pr(db, "pr-1", "Again", "u1", [])
    assert crud_pr.get_pr(db, "pr-1").pull_request_name == "Feature"

def test_merge_pr(db: Session, backend_team, make_pr):
    pr = make_pr("pr-1", "u1", ["u2"])
    merged = crud_pr.merge_pr(db, pr)
    assert merged.status == PRStatus.MERGED
    assert merged.merged_at is not None

def test_reassign_reviewer_appends_new_reviewer(db: Session, make_team, make_pr):
    make_team("backend", active=["u1", "u2", "u3", "u4"])
    make_pr("pr-1", "u1", ["u2", "u3"])
    pr = crud_pr.reassign_reviewer(db, "pr-1", "u2", "u4")
    assert pr.assigned_reviewers == ["u3", "u4"]

def test_reassign_reviewer_zero_rows_rolls_back(db: Session, make_team, make_pr):
    make_team("backend", active=["u1", "u2", "u3", "u4"])
    make_pr("pr-1", "u1", ["u2"])
    with pytest.raises(ReviewerNotAssignedError):
        crud_pr.reassign_reviewer(db, "pr-1", "u3", "u4")
    assert crud_pr.get_pr(db, "pr-1").assigned_reviewers == ["u2"]

def test_reassign_reviewer_refuses_merged_pr(db: Session, make_team, make_pr, picker):
    make_team("backend", active=["u1", "u2", "u3", "u4"])
    make_pr("pr-1", "u1", ["u2", "u3"])
    _, new_reviewer = select_replacement(db, "pr-1", "u2", picker)
    # merge lands between choosing the replacement and writing it
    crud_pr.merge_pr(db, crud_pr.get_pr(db, "pr-1"))
    with pytest.raises(PullRequestMergedError):
        crud_pr.reassign_reviewer(db, "pr-1", "u2", new_reviewer)
    pr = crud_pr.get_pr(db, "pr-1")
    assert pr.status == PRStatus.MERGED
    assert pr.assigned_reviewers == ["u2", "u3"]

def test_reassign_reviewer_to_already_assigned_user_rolls_back(db: Session, make_team, make_pr):
    make_team("backend", active=["u1", "u2", "u3"])
    make_pr("pr-1", "u1", ["u2", "u3"])
    with pytest.raises(ReviewerNotAssignedError):
        crud_pr.reassign_reviewer(db, "pr-1", "u2", "u3")
    # the delete was rolled back together with the failed insert
    assert crud_pr.get_pr(db, "pr-1").assigned_reviewers == ["u2", "u3"]

def test_get_prs_by_reviewer(db: Session, backend_team, make_pr):
    make_pr("pr-1", "u1", ["u2"])
    make_pr("pr-2", "u1", ["u3"])
    assert [pr.pull_request_id for pr in crud_pr.get_prs_by_reviewer(db, "u2")] == ["pr-1"]
    assert crud_pr.get_prs_by_reviewer(db, "u1") == []

def test_get_open_prs_for_reviewers(db: Session, backend_team, make_pr):
    make_pr("pr-1", "u1", ["u2", "u3"])
    make_pr("pr-2", "u1", ["u3"])
    merged = make_pr("pr-3", "u1", ["u2"])
    crud_pr.merge_pr(db, merged)
    make_pr("pr-4", "u2", ["u1"])
    assert crud_pr.get_open_prs_for_reviewers(db, ["u2", "u3"]) == ["pr-1", "pr-2"]
    assert crud_pr.get_open_prs_for_reviewers(db, []) == []

def test_get_statistics(db: Session, backend_team, make_pr):
    make_pr("pr-1", "u1", ["u2", "u3"])
    make_pr("pr-2", "u1", ["u2"])
    crud_pr.merge_pr(db, make_pr("pr-3", "u2", ["u3", "u1"]))
    crud_pr.create_pr(db, "pr-4", "No reviewers", "u3", [])
    stats = crud_pr.get_statistics(db)
    assert stats["total_prs"] == 4
    assert stats["open_prs"] == 3
    assert stats["merged_prs"] == 1
    assert stats["top_reviewers"] == [
        {"user_id": "u2", "username": "User u2", "review_count": 2},
        {"user_id": "u3", "username": "User u3", "review_count": 2},
        {"user_id": "u1", "username": "User u1", "review_count": 1},
    ]

def test_get_statistics_empty(db: Session):
    assert crud_pr.get_statistics(db) == {"total_prs": 0, "open_prs": 0, "merged_prs": 0, "top_reviewers": []}

def test_top_reviewers_limited_to_ten(db: Session, make_team, make_pr):
    reviewers = [f"r{i:02d}" for i in range(12)]
    make_team("big", active=["author"] + reviewers)
    for i, reviewer in enumerate(reviewers):
        make_pr(f"pr-{i}", "author", [reviewer])
    assert len(crud_pr.get_statistics(db)["top_reviewers"]) == 10
