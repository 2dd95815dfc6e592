"""Tests for persons_routes over HTTP (httpx + ASGITransport)."""

import time_machine
from fastapi import FastAPI
from httpx import AsyncClient

from tests.factories import (
    ChildFactory,
    EmployeeFactory,
    PersonFactory,
    build_address,
    create_async,
)

CHILD_BODY = {
    "type": "child",
    "id": 2000,
    "name": "Mosche",
    "birthDate": "2018-07-05",
    "address": {"city": "Ashkelon", "street": "Bar Kovha", "building": 21},
    "hobby": "hob goblin",
}

EMPLOYEE_BODY = {
    "type": "employee",
    "id": 3000,
    "name": "Sarah",
    "birthDate": "1995-11-23",
    "address": {"city": "Rehovot", "street": "Herzl", "building": 7},
    "company": "Motorola",
    "salary": 20000,
}


async def _seed(app: FastAPI, factory_class, **kwargs):
    """Create a person within the app's session so endpoints can see it."""
    async with app.state.session_maker() as session:
        person = await create_async(factory_class, session, **kwargs)
        await session.commit()
    return person


class TestAddPerson:
    """Tests for POST /person."""

    async def test_add_then_get_returns_same_representation(self, client: AsyncClient):
        response = await client.post("/person", json=CHILD_BODY)

        assert response.status_code == 200
        assert response.json() is True

        response = await client.get("/person/2000")

        assert response.status_code == 200
        assert response.json() == CHILD_BODY

    async def test_duplicate_id_returns_false(self, client: AsyncClient):
        await client.post("/person", json=EMPLOYEE_BODY)

        response = await client.post(
            "/person", json={**EMPLOYEE_BODY, "name": "Someone Else"}
        )

        assert response.status_code == 200
        assert response.json() is False
        assert (await client.get("/person/3000")).json()["name"] == "Sarah"

    async def test_missing_type_tag_is_422(self, client: AsyncClient):
        body = {k: v for k, v in CHILD_BODY.items() if k != "type"}

        response = await client.post("/person", json=body)

        assert response.status_code == 422

    async def test_null_body_returns_false(self, client: AsyncClient):
        response = await client.post(
            "/person", content="null", headers={"content-type": "application/json"}
        )

        assert response.status_code == 200
        assert response.json() is False


class TestFindPerson:
    """Tests for GET /person/{id}."""

    async def test_returns_404_for_missing(self, client: AsyncClient):
        response = await client.get("/person/1")

        assert response.status_code == 404
        assert response.json()["detail"] == "Person 1 not found"

    async def test_renders_employee_fields(self, client: AsyncClient, app: FastAPI):
        employee = await _seed(app, EmployeeFactory, company="Acme", salary=9000)

        response = await client.get(f"/person/{employee.id}")

        data = response.json()
        assert data["type"] == "employee"
        assert data["company"] == "Acme"
        assert data["salary"] == 9000
        assert data["birthDate"] == employee.birth_date.isoformat()


class TestRemovePerson:
    """Tests for DELETE /person/{id}."""

    async def test_returns_removed_and_then_404(self, client: AsyncClient):
        await client.post("/person", json=CHILD_BODY)

        response = await client.delete("/person/2000")

        assert response.status_code == 200
        assert response.json() == CHILD_BODY
        assert (await client.get("/person/2000")).status_code == 404

    async def test_missing_is_404(self, client: AsyncClient):
        response = await client.delete("/person/77")

        assert response.status_code == 404


class TestUpdates:
    """Tests for PUT /person/{id}/name/{name} and /person/{id}/address."""

    async def test_update_name(self, client: AsyncClient):
        await client.post("/person", json=EMPLOYEE_BODY)

        response = await client.put("/person/3000/name/Sara")

        assert response.status_code == 200
        assert response.json() == {**EMPLOYEE_BODY, "name": "Sara"}
        assert (await client.get("/person/3000")).json()["name"] == "Sara"

    async def test_update_address(self, client: AsyncClient):
        await client.post("/person", json=CHILD_BODY)
        new_address = {"city": "Haifa", "street": "Hanamal", "building": 3}

        response = await client.put("/person/2000/address", json=new_address)

        assert response.status_code == 200
        assert response.json() == {**CHILD_BODY, "address": new_address}
        assert (await client.get("/person/2000")).json()["address"] == new_address

    async def test_update_name_missing_is_404(self, client: AsyncClient):
        response = await client.put("/person/5/name/Nobody")

        assert response.status_code == 404

    async def test_update_address_missing_is_404(self, client: AsyncClient):
        response = await client.put(
            "/person/5/address", json={"city": "X", "street": "Y", "building": 1}
        )

        assert response.status_code == 404


class TestQueries:
    """Tests for the collection endpoints."""

    async def test_find_by_city(self, client: AsyncClient, app: FastAPI):
        person = await _seed(app, PersonFactory, address=build_address(city="Acre"))
        child = await _seed(app, ChildFactory, address=build_address(city="Acre"))
        await _seed(app, EmployeeFactory, address=build_address(city="Lod"))

        response = await client.get("/person/city/Acre")

        assert response.status_code == 200
        data = response.json()
        assert [(p["id"], p["type"]) for p in data] == [
            (person.id, "person"),
            (child.id, "child"),
        ]

    async def test_find_by_name(self, client: AsyncClient, app: FastAPI):
        employee = await _seed(app, EmployeeFactory, name="Noa")
        await _seed(app, PersonFactory, name="Gil")

        response = await client.get("/person/name/Noa")

        assert [p["id"] for p in response.json()] == [employee.id]

    @time_machine.travel("2026-10-19")
    async def test_find_by_ages(self, client: AsyncClient):
        await client.post("/person", json=CHILD_BODY)  # 8 years old
        await client.post("/person", json=EMPLOYEE_BODY)  # 30 years old

        response = await client.get("/person/ages/5/10")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [2000]

    async def test_find_by_ages_with_huge_max_age(self, client: AsyncClient):
        await client.post("/person", json=CHILD_BODY)
        await client.post("/person", json=EMPLOYEE_BODY)

        response = await client.get("/person/ages/0/5000")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [2000, 3000]

    async def test_find_by_salary(self, client: AsyncClient, app: FastAPI):
        in_range = await _seed(app, EmployeeFactory, salary=15_000)
        await _seed(app, EmployeeFactory, salary=45_000)
        await _seed(app, ChildFactory)

        response = await client.get("/person/salary/10000/20000")

        data = response.json()
        assert [p["id"] for p in data] == [in_range.id]
        assert data[0]["type"] == "employee"

    async def test_find_children(self, client: AsyncClient, app: FastAPI):
        child = await _seed(app, ChildFactory)
        await _seed(app, PersonFactory)

        response = await client.get("/person/children")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [child.id]

    async def test_city_population(self, client: AsyncClient, app: FastAPI):
        await _seed(app, PersonFactory, address=build_address(city="city1"))
        await _seed(app, ChildFactory, address=build_address(city="city1"))
        await _seed(app, EmployeeFactory, address=build_address(city="city2"))

        response = await client.get("/person/population/city")

        assert response.status_code == 200
        assert sorted(response.json(), key=lambda c: c["city"]) == [
            {"city": "city1", "population": 2},
            {"city": "city2", "population": 1},
        ]

    async def test_empty_results_are_empty_lists(self, client: AsyncClient):
        assert (await client.get("/person/city/Nowhere")).json() == []
        assert (await client.get("/person/children")).json() == []
        assert (await client.get("/person/population/city")).json() == []


class TestRequestTiming:
    """RequestTimingMiddleware headers on person routes."""

    async def test_adds_request_id_and_duration(self, client: AsyncClient):
        response = await client.get("/person/children")

        assert "x-request-id" in response.headers
        assert float(response.headers["x-request-duration-ms"]) >= 0
