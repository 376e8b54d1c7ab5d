#app/crud/user.py
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timezone
from typing import List, Optional
import logging

from app.models.user import User

logger = logging.getLogger("Reviewers.User")

def get_user(db: Session, user_id: str) -> Optional[User]:
    """
    Получить пользователя по ID; None, если его нет.
    """
    return db.get(User, user_id)

def stage_user_upsert(db: Session, data: dict) -> User:
    """
    Добавить/обновить пользователя в сессии без commit (last write wins).
    """
    user = db.get(User, data["user_id"])
    if user is None:
        user = User(user_id=data["user_id"])
        db.add(user)
    user.username = data["username"]
    user.team_name = data["team_name"]
    user.is_active = data.get("is_active", True)
    user.updated_at = datetime.now(timezone.utc)
    return user

def set_user_active(db: Session, user_id: str, is_active: bool) -> Optional[User]:
    """
    Выставить флаг активности. Возвращает None, если пользователя нет.
    """
    user = db.get(User, user_id)
    if user is None:
        return None
    user.is_active = is_active
    user.updated_at = datetime.now(timezone.utc)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error setting is_active={is_active} for user '{user_id}': {e}")
        raise
    db.refresh(user)
    logger.info(f"User '{user_id}' is_active={is_active}")
    return user

def get_active_members(db: Session, team_name: str, exclude_user_id: Optional[str] = None) -> List[User]:
    """
    Активные участники команды (по user_id), опционально без одного пользователя.
    """
    query = (
        select(User)
        .where(User.team_name == team_name, User.is_active.is_(True))
        .order_by(User.user_id)
    )
    if exclude_user_id is not None:
        query = query.where(User.user_id != exclude_user_id)
    return list(db.scalars(query))
