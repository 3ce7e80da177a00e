"""Employee models shared with the upstream employee API."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class Employee(BaseModel):
    """Employee snapshot as returned by the upstream API.

    The upstream field names are kept as-is so the external JSON shape does
    not depend on any renaming here.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    employee_name: str
    employee_salary: int = Field(..., gt=0)
    employee_age: int | None = None
    employee_title: str | None = None
    employee_email: str | None = None


class CreateEmployeeRequest(BaseModel):
    name: str
    salary: int = Field(..., gt=0)
    age: int = Field(..., ge=16, le=75)
    title: str

    @field_validator("name", "title")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class DeleteEmployeeRequest(BaseModel):
    name: str


class UpstreamEnvelope(BaseModel, Generic[T]):
    """The ``{data, status}`` wrapper around every upstream response."""

    data: T | None = None
    status: str | None = None


class ErrorResponse(BaseModel):
    status: int
    message: str
    timestamp: int
