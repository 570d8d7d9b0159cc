import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from taskapi.models.base import Base, engine as default_engine
from taskapi.models.entities import task  # noqa: F401  registers the tasks table

logger = logging.getLogger(__name__)

def create_tables(engine: Engine = default_engine) -> None:
    Base.metadata.create_all(bind=engine)

    inspector = inspect(engine)
    tables = inspector.get_table_names()
    logger.info(f"Tables in database: {tables}")
