"""Person CRUD and query endpoints.

Route ordering note: literal path segments (/children, /city/, /name/, /ages/,
/salary/, /population/) are defined before the parameterized /{person_id}
routes to prevent routing conflicts.
"""

from typing import Annotated

from fastapi import APIRouter, Body, HTTPException

from core.database import DbSession, DbSessionReadOnly
from schemas import AddressSchema, CityPopulationResponse, PersonPayload
from services.persons_service import (
    PersonNotFoundError,
    add_person,
    find_children,
    find_employees_by_salary,
    find_person_by_id,
    find_persons_between_ages,
    find_persons_by_city,
    find_persons_by_name,
    get_cities_population,
    remove_person,
    update_person_address,
    update_person_name,
)

router = APIRouter(prefix="/person", tags=["persons"])

_NOT_FOUND = {404: {"description": "Person not found"}}


def _not_found(e: PersonNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=bool)
async def add_person_endpoint(
    db: DbSession,
    payload: Annotated[PersonPayload | None, Body()] = None,
) -> bool:
    """Add a person. Returns false if the id is already taken."""
    return await add_person(db, payload)


@router.get("/children", response_model=list[PersonPayload])
async def find_children_endpoint(db: DbSessionReadOnly):
    return await find_children(db)


@router.get("/city/{city}", response_model=list[PersonPayload])
async def find_persons_by_city_endpoint(city: str, db: DbSessionReadOnly):
    return await find_persons_by_city(db, city)


@router.get("/name/{name}", response_model=list[PersonPayload])
async def find_persons_by_name_endpoint(name: str, db: DbSessionReadOnly):
    return await find_persons_by_name(db, name)


@router.get("/ages/{min_age}/{max_age}", response_model=list[PersonPayload])
async def find_persons_between_ages_endpoint(
    min_age: int, max_age: int, db: DbSessionReadOnly
):
    """Persons whose age in whole years is within [min_age, max_age]."""
    return await find_persons_between_ages(db, min_age, max_age)


@router.get("/salary/{min_salary}/{max_salary}", response_model=list[PersonPayload])
async def find_employees_by_salary_endpoint(
    min_salary: int, max_salary: int, db: DbSessionReadOnly
):
    return await find_employees_by_salary(db, min_salary, max_salary)


@router.get("/population/city", response_model=list[CityPopulationResponse])
async def get_cities_population_endpoint(
    db: DbSessionReadOnly,
) -> list[CityPopulationResponse]:
    return await get_cities_population(db)


@router.get("/{person_id}", response_model=PersonPayload, responses=_NOT_FOUND)
async def find_person_endpoint(person_id: int, db: DbSessionReadOnly):
    try:
        return await find_person_by_id(db, person_id)
    except PersonNotFoundError as e:
        raise _not_found(e)


@router.delete("/{person_id}", response_model=PersonPayload, responses=_NOT_FOUND)
async def remove_person_endpoint(person_id: int, db: DbSession):
    """Delete a person and return its last representation."""
    try:
        return await remove_person(db, person_id)
    except PersonNotFoundError as e:
        raise _not_found(e)


@router.put(
    "/{person_id}/name/{name}", response_model=PersonPayload, responses=_NOT_FOUND
)
async def update_person_name_endpoint(person_id: int, name: str, db: DbSession):
    try:
        return await update_person_name(db, person_id, name)
    except PersonNotFoundError as e:
        raise _not_found(e)


@router.put("/{person_id}/address", response_model=PersonPayload, responses=_NOT_FOUND)
async def update_person_address_endpoint(
    person_id: int, address: AddressSchema, db: DbSession
):
    try:
        return await update_person_address(db, person_id, address)
    except PersonNotFoundError as e:
        raise _not_found(e)
