"""API envelope schemas."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class FieldError(BaseModel):
    field: str
    error: str


class ErrorResponse(BaseModel):
    error: list[FieldError]
    status: int


class DataResponse(BaseModel, Generic[T]):
    data: T
    status: int
