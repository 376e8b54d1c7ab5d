#app/models/pull_request.py
import enum
from datetime import datetime, timezone
from typing import List
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Enum, Index, UniqueConstraint
)
from sqlalchemy.orm import relationship
from app.models.base import Base

class PRStatus(str, enum.Enum):
    OPEN = "OPEN"
    MERGED = "MERGED"

class PullRequest(Base):
    """
    PullRequest — PR с автором и упорядоченным набором ревьюверов.
    Переходы статуса: OPEN -> MERGED (терминальный).
    """
    __tablename__ = "pull_requests"

    pull_request_id: str = Column(String(255), primary_key=True, doc="Уникальный ID PR")
    pull_request_name: str = Column(String(255), nullable=False, doc="Название PR")
    author_id: str = Column(String(255), ForeignKey("users.user_id"), nullable=False, index=True, doc="ID автора")
    status: PRStatus = Column(
        Enum(PRStatus, name="pr_status", native_enum=False, length=20),
        default=PRStatus.OPEN,
        nullable=False,
        doc="Статус: OPEN или MERGED",
    )
    created_at: datetime = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False, doc="Дата создания")
    merged_at: datetime = Column(DateTime(timezone=True), nullable=True, doc="Дата merge (только для MERGED)")

    # --- Связи ---
    reviewer_links = relationship(
        "PullRequestReviewer",
        back_populates="pull_request",
        order_by="PullRequestReviewer.id",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_pull_requests_status", "status"),
    )

    @property
    def assigned_reviewers(self) -> List[str]:
        """ID ревьюверов в порядке назначения."""
        return [link.user_id for link in self.reviewer_links]

    @property
    def is_merged(self) -> bool:
        return self.status == PRStatus.MERGED

    def __repr__(self):
        return (
            f"<PullRequest(pull_request_id='{self.pull_request_id}', status={self.status}, "
            f"author_id='{self.author_id}', reviewers={self.assigned_reviewers})>"
        )

class PullRequestReviewer(Base):
    """
    Связь PR <-> ревьювер. Суррогатный id задаёт порядок назначения.
    """
    __tablename__ = "pr_reviewers"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    pull_request_id: str = Column(String(255), ForeignKey("pull_requests.pull_request_id", ondelete="CASCADE"), nullable=False)
    user_id: str = Column(String(255), ForeignKey("users.user_id"), nullable=False)
    assigned_at: datetime = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False, doc="Дата назначения")

    pull_request = relationship("PullRequest", back_populates="reviewer_links")

    __table_args__ = (
        UniqueConstraint("pull_request_id", "user_id", name="uq_pr_reviewers_pr_user"),
        Index("ix_pr_reviewers_user_id", "user_id"),
    )

    def __repr__(self):
        return f"<PullRequestReviewer(pull_request_id='{self.pull_request_id}', user_id='{self.user_id}')>"
