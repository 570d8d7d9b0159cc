from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from taskapi.models.entities.task import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH


class TaskDTO(BaseModel):
    """Boundary representation of a task, exchanged with API clients."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(None, description="Assigned by storage; ignored on create")
    title: str = Field("", validate_default=True)
    description: Optional[str] = Field(None)
    completed: bool = Field(False)

    @field_validator("title", mode="before")
    @classmethod
    def null_title_as_blank(cls, v):
        return "" if v is None else v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v or not v.strip():
            raise PydanticCustomError("title_blank", "Title is required")
        if len(v) > TITLE_MAX_LENGTH:
            raise PydanticCustomError(
                "title_too_long",
                "Title must be less than {max_length} characters",
                {"max_length": TITLE_MAX_LENGTH},
            )
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > DESCRIPTION_MAX_LENGTH:
            raise PydanticCustomError(
                "description_too_long",
                "Description must be less than {max_length} characters",
                {"max_length": DESCRIPTION_MAX_LENGTH},
            )
        return v
