#app/models/user.py
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.models.base import Base

class User(Base):
    """
    User — участник ровно одной команды. Флаг is_active определяет,
    может ли пользователь назначаться ревьювером.
    """
    __tablename__ = "users"

    user_id: str = Column(String(255), primary_key=True, doc="Уникальный ID пользователя")
    username: str = Column(String(255), nullable=False, doc="Отображаемое имя")
    team_name: str = Column(String(255), ForeignKey("teams.team_name", ondelete="CASCADE"), nullable=False, doc="Команда пользователя")
    is_active: bool = Column(Boolean, default=True, nullable=False, doc="Может ли ревьюить")
    created_at: datetime = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False, doc="Дата создания")
    updated_at: datetime = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
        doc="Дата обновления",
    )

    # --- Связи ---
    team = relationship("Team", back_populates="members")

    __table_args__ = (
        Index("ix_users_team_active", "team_name", "is_active"),
    )

    def __repr__(self):
        return (
            f"<User(user_id='{self.user_id}', username='{self.username}', "
            f"team_name='{self.team_name}', is_active={self.is_active})>"
        )
