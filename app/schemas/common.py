"""Common/shared schemas."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model that serializes snake_case fields as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DataResponse(CamelModel, Generic[T]):
    success: bool = True
    data: T


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class FailureResponse(BaseModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str
