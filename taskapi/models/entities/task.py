from sqlalchemy import Boolean, Column, Integer, String, false

from taskapi.models.base import Base

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class Task(Base):
    __tablename__ = 'tasks'
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    completed = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r} completed={self.completed}>"
