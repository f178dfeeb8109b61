from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(UTC)


class Entity(BaseModel):
    """Base entity class with a store-generated integer identifier."""

    model_config = ConfigDict(validate_assignment=True)

    id: int | None = PydanticField(
        default=None,
        description="Identifier assigned by the store; None until persisted",
    )

    created_at: datetime = PydanticField(default_factory=utc_now)
    updated_at: datetime | None = PydanticField(default=None)


class EntityTable(SQLModel, table=False):
    """Base table class with an autoincrement integer primary key."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Identifier assigned by the store",
    )

    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime | None = Field(default=None, nullable=True)
