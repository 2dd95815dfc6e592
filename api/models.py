"""SQLAlchemy models for person records.

All subtypes share one ``persons`` table (single-table inheritance), so ids
are unique across base persons, children and employees. The ``kind`` column
is the discriminator; subtype columns are nullable and only filled for their
own subtype.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum as PyEnum

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, composite, mapped_column

from core.database import Base


def today() -> date:
    """Return current UTC date."""
    return datetime.now(UTC).date()


class PersonKind(str, PyEnum):
    """Concrete subtype of a person record.

    Values double as the ``type`` tag of the wire representation.
    """

    PERSON = "person"
    CHILD = "child"
    EMPLOYEE = "employee"


@dataclass
class Address:
    """Embedded address value. Has no identity outside its person."""

    city: str = ""
    street: str = ""
    building: int | None = None


class Person(Base):
    """Base person record."""

    __tablename__ = "persons"

    # Assigned by the caller, never generated
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    city: Mapped[str] = mapped_column(String(255), nullable=False, default="", index=True)
    street: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    building: Mapped[int | None] = mapped_column(Integer, nullable=True)

    address: Mapped[Address] = composite("city", "street", "building")

    __mapper_args__ = {
        "polymorphic_on": "kind",
        "polymorphic_identity": PersonKind.PERSON.value,
    }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} name={self.name!r}>"


class Child(Person):
    """Person with a hobby."""

    hobby: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __mapper_args__ = {
        "polymorphic_identity": PersonKind.CHILD.value,
        "polymorphic_load": "inline",
    }


class Employee(Person):
    """Person with an employer and a salary."""

    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    salary: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    __mapper_args__ = {
        "polymorphic_identity": PersonKind.EMPLOYEE.value,
        "polymorphic_load": "inline",
    }
