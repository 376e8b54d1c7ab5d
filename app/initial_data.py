# app/initial_data.py

import logging
from app.database import engine
from app.models.base import Base
import app.models  # noqa: F401  регистрирует все модели в Base.metadata

logger = logging.getLogger("Reviewers.InitialData")

def init_db(bind=None) -> None:
    """
    Создает таблицы, которых ещё нет (идемпотентно).
    """
    bind = bind or engine
    logger.info(f"Ensuring database schema on {bind.url.render_as_string(hide_password=True)}")
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema is up to date.")

def main() -> None:
    logger.info("Initializing database schema...")
    init_db()
    logger.info("Finished initial data setup.")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
