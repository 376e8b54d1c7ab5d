# app/dependencies.py

from typing import Generator
from sqlalchemy.orm import Session
from app.database import SessionLocal
from app.services.assignment import ReviewerPicker
from app.core.settings import settings

# Один источник случайности на процесс, сидится один раз при старте
reviewer_picker = ReviewerPicker(seed=settings.RANDOM_SEED)

def get_db() -> Generator[Session, None, None]:
    """
    Создает и возвращает сессию базы данных, гарантирует закрытие после использования.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_reviewer_picker() -> ReviewerPicker:
    """
    Возвращает общий для процесса ReviewerPicker (в тестах подменяется через dependency_overrides).
    """
    return reviewer_picker
