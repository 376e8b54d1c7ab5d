#app/models/team.py
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from app.models.base import Base

class Team(Base):
    """
    Team — команда разработчиков. Ключ — уникальное имя; не удаляется.
    """
    __tablename__ = "teams"

    team_name: str = Column(String(255), primary_key=True, doc="Уникальное название команды")
    created_at: datetime = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False, doc="Дата создания")

    # --- Связи ---
    members = relationship("User", back_populates="team", order_by="User.user_id")

    def __repr__(self):
        return f"<Team(team_name='{self.team_name}')>"
