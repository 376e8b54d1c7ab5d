#app/models/base.py
"""
Общий declarative Base для ORM-моделей сервиса ревьюверов.

Все модели (Team, User, PullRequest, PullRequestReviewer) наследуются от него,
поэтому Base.metadata.create_all создаёт всю схему разом:
    from app.models.base import Base
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
