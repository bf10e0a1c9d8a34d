"""Shared Pydantic Schemas

Request/response models use camelCase on the wire and snake_case in
Python. Every response is wrapped in the same envelope.
"""
from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Base for API schemas: camelCase aliases, populate by either name."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope: ``{status, message, data}``."""
    status: int
    message: str
    data: T | None = None

    @classmethod
    def of(cls, status: int, message: str, data: T | None = None) -> ApiResponse[T]:
        return cls(status=status, message=message, data=data)
