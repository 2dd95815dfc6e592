"""Service layer for business logic.

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (Database)

Services should:
- Contain the business rules (duplicate ids, partial updates, age windows)
- Orchestrate calls to repositories
- Convert ORM entities into wire schemas before returning them

Services should NOT:
- Directly execute SQL queries (use repositories)
- Know about HTTP request/response details (status codes, HTTPException)
- Commit; the session dependency owns the transaction
"""
