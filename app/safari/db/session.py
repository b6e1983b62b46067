from sqlalchemy import Engine, create_engine

from app.safari.core.config import settings


def build_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    return create_engine(database_url, echo=False, future=True, connect_args=connect_args)


engine = build_engine(settings.DATABASE_URL)
