from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from taskapi.config import settings

Base = declarative_base()


def build_engine(database_url: str, echo: bool = False):
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    connect_args = {'check_same_thread': False}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # In-memory databases live per connection, so every session must share one
        return create_engine(database_url, echo=echo, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(database_url, echo=echo, connect_args=connect_args)


engine = build_engine(settings.database_url, settings.database_echo)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
