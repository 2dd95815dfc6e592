"""Person repository for database operations."""

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Child, Employee, Person
from repositories.utils import log_slow_query


class PersonRepository:
    """Repository for Person database operations.

    Queries against ``Person`` return instances of the concrete subtype
    (``Person``, ``Child`` or ``Employee``) with their subtype columns loaded.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @log_slow_query("person_exists")
    async def exists(self, person_id: int) -> bool:
        result = await self.db.execute(select(Person.id).where(Person.id == person_id))
        return result.scalar_one_or_none() is not None

    @log_slow_query("get_person_by_id")
    async def get_by_id(self, person_id: int) -> Person | None:
        """Get a person by ID."""
        result = await self.db.execute(select(Person).where(Person.id == person_id))
        return result.scalar_one_or_none()

    async def add(self, person: Person) -> Person:
        """Stage a new person and flush so constraint errors surface here.

        Does NOT commit. Caller owns the transaction.
        """
        self.db.add(person)
        await self.db.flush()
        return person

    async def delete(self, person: Person) -> None:
        await self.db.delete(person)
        await self.db.flush()

    @log_slow_query("find_persons_by_city")
    async def find_by_city(self, city: str) -> list[Person]:
        result = await self.db.execute(
            select(Person).where(Person.city == city).order_by(Person.id)
        )
        return list(result.scalars().all())

    @log_slow_query("find_persons_by_name")
    async def find_by_name(self, name: str) -> list[Person]:
        result = await self.db.execute(
            select(Person).where(Person.name == name).order_by(Person.id)
        )
        return list(result.scalars().all())

    @log_slow_query("find_persons_by_birth_date")
    async def find_by_birth_date_between(
        self, date_from: date, date_to: date
    ) -> list[Person]:
        """Persons born within [date_from, date_to], both ends inclusive."""
        result = await self.db.execute(
            select(Person)
            .where(Person.birth_date.between(date_from, date_to))
            .order_by(Person.id)
        )
        return list(result.scalars().all())

    @log_slow_query("find_employees_by_salary")
    async def find_employees_by_salary(
        self, min_salary: int, max_salary: int
    ) -> list[Employee]:
        """Employees with salary within [min_salary, max_salary]."""
        result = await self.db.execute(
            select(Employee)
            .where(Employee.salary.between(min_salary, max_salary))
            .order_by(Employee.id)
        )
        return list(result.scalars().all())

    @log_slow_query("find_children")
    async def find_children(self) -> list[Child]:
        result = await self.db.execute(select(Child).order_by(Child.id))
        return list(result.scalars().all())

    @log_slow_query("get_cities_population")
    async def get_cities_population(self) -> list[tuple[str, int]]:
        """(city, count) for every city with at least one person."""
        result = await self.db.execute(
            select(Person.city, func.count(Person.id))
            .group_by(Person.city)
            .order_by(Person.city)
        )
        return [(city, count) for city, count in result.all()]
