from operator import eq
from typing import Callable, Generic, List, Optional, Type, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
import logging

from taskapi.core.exceptions import PersistenceError
from taskapi.models.base import Base

T = TypeVar('T', bound=Base)
R = TypeVar('R')

logger = logging.getLogger(__name__)

class BaseRepository(Generic[T]):
    """
    Async CRUD over a synchronous Session.

    Session calls run in the threadpool so a slow query does not block the
    event loop. A request's session is only ever used by one call at a time.
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    async def _run(self, operation: Callable[[], R], failure: str) -> R:
        try:
            return await run_in_threadpool(operation)
        except SQLAlchemyError as e:
            logger.error(f"{failure}: {str(e)}")
            self.db.rollback()
            raise PersistenceError(failure) from e

    async def get_by_id(self, entity_id: int) -> Optional[T]:
        entity = await self._run(
            lambda: self.db.query(self.model).filter(eq(self.model.id, entity_id)).first(),
            f"Failed to load {self.model.__name__} with id {entity_id}",
        )

        if entity is None:
            logger.warning(f"{self.model.__name__} with id {entity_id} not found")

        return entity

    async def get_all(self) -> List[T]:
        return await self._run(
            lambda: self.db.query(self.model).all(),
            f"Failed to list {self.model.__name__} entities",
        )

    async def exists_by_id(self, entity_id: int) -> bool:
        def exists() -> bool:
            query = self.db.query(self.model.id).filter(eq(self.model.id, entity_id))
            return bool(self.db.query(query.exists()).scalar())

        return await self._run(exists, f"Failed to check {self.model.__name__} with id {entity_id}")

    async def save(self, entity: T) -> T:
        def persist() -> T:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
            return entity

        saved = await self._run(persist, f"Failed to save {self.model.__name__}")
        logger.info(f"Saved {self.model.__name__} with id {saved.id}")
        return saved

    async def delete(self, entity: T) -> None:
        entity_id = entity.id

        def remove() -> None:
            self.db.delete(entity)
            self.db.commit()

        await self._run(remove, f"Failed to delete {self.model.__name__} with id {entity_id}")
        logger.info(f"Deleted {self.model.__name__} with id {entity_id}")

    async def delete_by_id(self, entity_id: int) -> bool:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False

        await self.delete(entity)
        return True
