"""Demo data for local development."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from schemas import AddressSchema, ChildSchema, EmployeeSchema, PersonSchema
from services.persons_service import add_person

logger = get_logger(__name__)

DEMO_PERSONS = (
    PersonSchema(
        id=1000,
        name="John",
        birth_date=date(1985, 4, 11),
        address=AddressSchema(city="Tel Aviv", street="Ben Gvirol", building=15),
    ),
    ChildSchema(
        id=2000,
        name="Mosche",
        birth_date=date(2018, 7, 5),
        address=AddressSchema(city="Ashkelon", street="Bar Kovha", building=21),
        hobby="hob goblin",
    ),
    EmployeeSchema(
        id=3000,
        name="Sarah",
        birth_date=date(1995, 11, 23),
        address=AddressSchema(city="Rehovot", street="Herzl", building=7),
        company="Motorola",
        salary=20000,
    ),
)


async def seed_demo_persons(db: AsyncSession) -> int:
    """Insert one person of each subtype. Ids already present are skipped.

    Does NOT commit. Returns how many persons were inserted.
    """
    inserted = 0
    for payload in DEMO_PERSONS:
        if await add_person(db, payload):
            inserted += 1
    logger.info("seed.demo_persons.done", inserted=inserted, total=len(DEMO_PERSONS))
    return inserted
