"""Person service for person-record business logic.

Routes pass in the request's AsyncSession; mutations rely on the session
dependency to commit or roll back as a unit.

Subtype handling is explicit on both sides: the wire variant's ``type`` tag
picks the entity class in ``to_entity`` and the entity's ``kind``
discriminator picks the wire variant in ``to_payload``.
"""

from datetime import MAXYEAR, MINYEAR, date

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from core.wide_event import set_wide_event_fields
from models import Address, Child, Employee, Person, PersonKind, today
from repositories.person_repository import PersonRepository
from schemas import (
    AddressSchema,
    ChildSchema,
    CityPopulationResponse,
    EmployeeSchema,
    PersonPayload,
    PersonSchema,
)

logger = get_logger(__name__)


class PersonNotFoundError(Exception):
    """Raised when an id-keyed operation targets a missing person."""

    def __init__(self, person_id: int):
        self.person_id = person_id
        super().__init__(f"Person {person_id} not found")


class UnknownPersonKindError(Exception):
    """Raised when a stored person has a kind with no wire variant."""


def _to_address(address: AddressSchema) -> Address:
    return Address(city=address.city, street=address.street, building=address.building)


def _to_address_schema(person: Person) -> AddressSchema:
    return AddressSchema(city=person.city, street=person.street, building=person.building)


def to_entity(payload: PersonPayload) -> Person:
    """Build the entity matching the payload's variant."""
    common = {
        "id": payload.id,
        "name": payload.name,
        "birth_date": payload.birth_date,
        "address": _to_address(payload.address),
    }
    match payload:
        case ChildSchema():
            return Child(**common, hobby=payload.hobby)
        case EmployeeSchema():
            return Employee(**common, company=payload.company, salary=payload.salary)
        case PersonSchema():
            return Person(**common)
    raise TypeError(f"Unsupported person payload: {type(payload).__name__}")


def to_payload(person: Person) -> PersonSchema | ChildSchema | EmployeeSchema:
    """Render a stored person as its own wire variant."""
    common = {
        "id": person.id,
        "name": person.name,
        "birth_date": person.birth_date,
        "address": _to_address_schema(person),
    }
    match person.kind:
        case PersonKind.PERSON.value:
            return PersonSchema(**common)
        case PersonKind.CHILD.value:
            return ChildSchema(**common, hobby=person.hobby)
        case PersonKind.EMPLOYEE.value:
            return EmployeeSchema(
                **common, company=person.company, salary=person.salary
            )
    raise UnknownPersonKindError(f"No wire variant for person kind {person.kind!r}")


def years_before(day: date, years: int) -> date:
    """Same calendar day ``years`` earlier; Feb 29 falls back to Feb 28.

    Years past the representable range clamp to ``date.min`` / ``date.max``.
    """
    year = day.year - years
    if year < MINYEAR:
        return date.min
    if year > MAXYEAR:
        return date.max
    try:
        return day.replace(year=year)
    except ValueError:
        return day.replace(year=year, day=28)


async def _get_or_raise(repo: PersonRepository, person_id: int) -> Person:
    person = await repo.get_by_id(person_id)
    if person is None:
        raise PersonNotFoundError(person_id)
    return person


async def add_person(db: AsyncSession, payload: PersonPayload | None) -> bool:
    """Persist a new person of the payload's subtype.

    Returns False, leaving the store untouched, when there is no payload or
    the id is already taken by a person of any subtype.
    """
    if payload is None:
        return False

    repo = PersonRepository(db)
    if await repo.exists(payload.id):
        logger.info("person.add.duplicate_id", person_id=payload.id)
        return False

    await repo.add(to_entity(payload))
    set_wide_event_fields(person_id=payload.id, person_kind=payload.type)
    logger.info("person.added", person_id=payload.id, kind=payload.type)
    return True


async def find_person_by_id(
    db: AsyncSession, person_id: int
) -> PersonSchema | ChildSchema | EmployeeSchema:
    repo = PersonRepository(db)
    person = await _get_or_raise(repo, person_id)
    return to_payload(person)


async def remove_person(
    db: AsyncSession, person_id: int
) -> PersonSchema | ChildSchema | EmployeeSchema:
    """Delete a person and return how it looked right before deletion."""
    repo = PersonRepository(db)
    person = await _get_or_raise(repo, person_id)
    removed = to_payload(person)
    await repo.delete(person)
    set_wide_event_fields(person_id=person_id, person_kind=removed.type)
    logger.info("person.removed", person_id=person_id, kind=removed.type)
    return removed


async def update_person_name(
    db: AsyncSession, person_id: int, name: str
) -> PersonSchema | ChildSchema | EmployeeSchema:
    """Replace the name only; address and subtype fields are kept."""
    repo = PersonRepository(db)
    person = await _get_or_raise(repo, person_id)
    person.name = name
    await db.flush()
    logger.info("person.name.updated", person_id=person_id)
    return to_payload(person)


async def update_person_address(
    db: AsyncSession, person_id: int, address: AddressSchema
) -> PersonSchema | ChildSchema | EmployeeSchema:
    """Replace the whole address; every other field is kept."""
    repo = PersonRepository(db)
    person = await _get_or_raise(repo, person_id)
    person.address = _to_address(address)
    await db.flush()
    logger.info("person.address.updated", person_id=person_id)
    return to_payload(person)


async def find_persons_by_city(
    db: AsyncSession, city: str
) -> list[PersonSchema | ChildSchema | EmployeeSchema]:
    repo = PersonRepository(db)
    return [to_payload(p) for p in await repo.find_by_city(city)]


async def find_persons_by_name(
    db: AsyncSession, name: str
) -> list[PersonSchema | ChildSchema | EmployeeSchema]:
    repo = PersonRepository(db)
    return [to_payload(p) for p in await repo.find_by_name(name)]


async def find_persons_between_ages(
    db: AsyncSession, min_age: int, max_age: int
) -> list[PersonSchema | ChildSchema | EmployeeSchema]:
    """Persons aged min_age..max_age whole years as of today (UTC).

    Born between ``today - max_age years`` and ``today - min_age years``,
    both inclusive.
    """
    current = today()
    date_from = years_before(current, max_age)
    date_to = years_before(current, min_age)

    repo = PersonRepository(db)
    persons = await repo.find_by_birth_date_between(date_from, date_to)
    return [to_payload(p) for p in persons]


async def find_employees_by_salary(
    db: AsyncSession, min_salary: int, max_salary: int
) -> list[PersonSchema | ChildSchema | EmployeeSchema]:
    repo = PersonRepository(db)
    employees = await repo.find_employees_by_salary(min_salary, max_salary)
    return [to_payload(e) for e in employees]


async def find_children(
    db: AsyncSession,
) -> list[PersonSchema | ChildSchema | EmployeeSchema]:
    repo = PersonRepository(db)
    return [to_payload(c) for c in await repo.find_children()]


async def get_cities_population(db: AsyncSession) -> list[CityPopulationResponse]:
    repo = PersonRepository(db)
    rows = await repo.get_cities_population()
    return [
        CityPopulationResponse(city=city, population=population)
        for city, population in rows
    ]
