"""Repository layer for database operations.

Repositories encapsulate all database queries, keeping services free of SQL
and routes focused on HTTP handling.
"""

from repositories.person_repository import PersonRepository
from repositories.utils import log_slow_query

__all__ = [
    "PersonRepository",
    "log_slow_query",
]
