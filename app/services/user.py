#app/services/user.py
from sqlalchemy.orm import Session

from app.crud import user as user_crud
from app.models.user import User
from app.core.exceptions import UserNotFound


def set_user_active(db: Session, user_id: str, is_active: bool) -> User:
    """
    Toggle whether a user can be picked as a reviewer. Existing assignments stay.
    """
    user = user_crud.set_user_active(db, user_id, is_active)
    if user is None:
        raise UserNotFound(user_id)
    return user
