"""Common schema types."""

import math
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ResultStatusEnum(str, Enum):
    """Result status enum for API."""

    DID_NOT_START = "DidNotStart"
    FINISHED = "Finished"
    DNF = "DNF"


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    JSON uses camelCase, the convention of the web client; snake_case names
    are accepted on input as well.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TimestampSchema(BaseSchema):
    """Schema with timestamp fields."""

    created_at: datetime
    updated_at: datetime


class Page(BaseSchema, Generic[T]):
    """One page of a list endpoint."""

    items: list[T] = Field(default_factory=list)
    total_count: int
    page_number: int
    page_size: int

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @computed_field(alias="hasPreviousPage")
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @computed_field(alias="hasNextPage")
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages


class ApiResponse(BaseSchema, Generic[T]):
    """Envelope for mutating endpoints."""

    success: bool = True
    message: str | None = None
    data: T | None = None
    errors: list[str] = Field(default_factory=list)
