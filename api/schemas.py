"""Pydantic schemas for API request/response validation.

A person travels over the wire as one of three variants, told apart by the
``type`` field. ``PersonPayload`` is the discriminated union FastAPI uses to
parse request bodies and render responses.
"""

from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class AddressSchema(BaseModel):
    """Address body for PUT /person/{id}/address and nested in every person."""

    city: str = ""
    street: str = ""
    building: int | None = None


class PersonBase(BaseModel):
    """Fields shared by every person variant."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    birth_date: date = Field(alias="birthDate")
    address: AddressSchema = Field(default_factory=AddressSchema)


class PersonSchema(PersonBase):
    type: Literal["person"] = "person"


class ChildSchema(PersonBase):
    type: Literal["child"] = "child"
    hobby: str | None = None


class EmployeeSchema(PersonBase):
    type: Literal["employee"] = "employee"
    company: str | None = None
    salary: int | None = None


PersonPayload = Annotated[
    PersonSchema | ChildSchema | EmployeeSchema,
    Field(discriminator="type"),
]


class CityPopulationResponse(BaseModel):
    """Number of persons living in one city."""

    city: str
    population: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
