#app/crud/team.py
from sqlalchemy import update
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from datetime import datetime, timezone
from typing import List, Optional
import logging

from app.models.team import Team
from app.models.user import User
from app.crud.user import stage_user_upsert
from app.core.exceptions import TeamExistsError

logger = logging.getLogger("Reviewers.Team")

def team_exists(db: Session, team_name: str) -> bool:
    """
    Проверить, существует ли команда.
    """
    return db.get(Team, team_name) is not None

def get_team(db: Session, team_name: str) -> Optional[Team]:
    """
    Получить команду (вместе с участниками) по имени; None, если её нет.
    """
    return db.get(Team, team_name)

def create_team(db: Session, team_name: str, members: List[dict]) -> Team:
    """
    Создать команду и upsert всех её участников одной транзакцией.
    Участник, уже состоящий в другой команде, переезжает в новую.
    """
    if team_exists(db, team_name):
        raise TeamExistsError(team_name)
    team = Team(team_name=team_name)
    db.add(team)
    # повторный user_id в одном запросе: побеждает последняя запись
    unique_members = {member["user_id"]: member for member in members}
    for member in unique_members.values():
        stage_user_upsert(db, {**member, "team_name": team_name})
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error while creating team '{team_name}': {e}")
        raise TeamExistsError(team_name)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while creating team '{team_name}': {e}")
        raise
    db.refresh(team)
    logger.info(f"Created team '{team.team_name}' with {len(members)} member(s)")
    return team

def deactivate_team_members(db: Session, team_name: str) -> List[str]:
    """
    Атомарно выключить is_active у всех активных участников команды.
    Возвращает ID пользователей, которые действительно были выключены.
    """
    try:
        result = db.execute(
            update(User)
            .where(User.team_name == team_name, User.is_active.is_(True))
            .values(is_active=False, updated_at=datetime.now(timezone.utc))
            .returning(User.user_id)
            .execution_options(synchronize_session="fetch")
        )
        user_ids = sorted(result.scalars().all())
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to deactivate members of team '{team_name}': {e}")
        raise
    logger.info(f"Deactivated {len(user_ids)} member(s) of team '{team_name}': {user_ids}")
    return user_ids
