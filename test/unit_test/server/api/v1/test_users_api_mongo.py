"""
End-to-end tests for the user API over an in-memory MongoDB.

Requests flow through the real service and repository, so these tests cover
id generation, e-mail uniqueness and the query parameters of the list
endpoint.
"""

import pytest
from httpx import AsyncClient

from mongo_db_service.server.core import constant

pytestmark = pytest.mark.asyncio

USERS_API = constant.USERS_API


async def create_user(client: AsyncClient, **fields) -> dict:
    payload = {"name": "John Doe", "email": "john@example.com", "role": "USER"}
    payload.update(fields)
    response = await client.post(USERS_API, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_then_fetch(db_client: AsyncClient):
    created = await create_user(db_client, phone="+1 555 0100")

    response = await db_client.get(f"{USERS_API}/{created['id']}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["email"] == "john@example.com"
    assert data["phone"] == "+1 555 0100"
    assert data["status"] == "ACTIVE"
    assert data["createdAt"].endswith("Z")
    assert data["updatedAt"] is not None


async def test_create_sets_location_to_generated_id(db_client: AsyncClient):
    response = await db_client.post(USERS_API, json={"name": "John Doe", "email": "john@example.com", "role": "USER"})

    user_id = response.json()["data"]["id"]
    assert len(user_id) == 24
    assert response.headers["location"] == f"{USERS_API}/{user_id}"


async def test_create_with_client_chosen_id(db_client: AsyncClient):
    created = await create_user(db_client, id="john-1")

    assert created["id"] == "john-1"
    response = await db_client.get(f"{USERS_API}/john-1")
    assert response.status_code == 200


async def test_create_duplicate_email_conflicts(db_client: AsyncClient):
    await create_user(db_client)

    response = await db_client.post(USERS_API, json={"name": "Other", "email": "john@example.com", "role": "USER"})

    assert response.status_code == 409
    assert response.json()["message"] == "User already exists with email: john@example.com"


async def test_get_by_email(db_client: AsyncClient):
    created = await create_user(db_client)

    response = await db_client.get(f"{USERS_API}/email/john@example.com")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == created["id"]


async def test_get_unknown_user_is_not_found(db_client: AsyncClient):
    response = await db_client.get(f"{USERS_API}/000000000000000000000000")

    assert response.status_code == 404
    assert response.json()["message"] == "User not found: 000000000000000000000000"


async def test_update_replaces_fields_and_keeps_created_at(db_client: AsyncClient):
    created = await create_user(db_client)

    response = await db_client.put(
        f"{USERS_API}/{created['id']}",
        json={"name": "Jane Doe", "email": "jane@example.com", "role": "ADMIN", "status": "INACTIVE"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == created["id"]
    assert data["name"] == "Jane Doe"
    assert data["role"] == "ADMIN"
    assert data["status"] == "INACTIVE"
    assert data["createdAt"] == created["createdAt"]
    fetched = (await db_client.get(f"{USERS_API}/email/jane@example.com")).json()["data"]
    assert fetched["id"] == created["id"]


async def test_update_to_taken_email_conflicts(db_client: AsyncClient):
    await create_user(db_client)
    other = await create_user(db_client, name="Jane Doe", email="jane@example.com")

    response = await db_client.put(
        f"{USERS_API}/{other['id']}",
        json={"name": "Jane Doe", "email": "john@example.com", "role": "USER"},
    )

    assert response.status_code == 409


async def test_patch_changes_only_given_fields(db_client: AsyncClient):
    created = await create_user(db_client, address="1 Main St")

    response = await db_client.patch(f"{USERS_API}/{created['id']}", json={"status": "SUSPENDED"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "SUSPENDED"
    assert data["address"] == "1 Main St"
    assert data["name"] == "John Doe"


async def test_delete_removes_user(db_client: AsyncClient):
    created = await create_user(db_client)

    response = await db_client.delete(f"{USERS_API}/{created['id']}")

    assert response.status_code == 200
    assert response.json()["statusCode"] == 204
    assert (await db_client.get(f"{USERS_API}/{created['id']}")).status_code == 404
    assert (await db_client.delete(f"{USERS_API}/{created['id']}")).status_code == 404


async def test_list_filters(db_client: AsyncClient):
    await create_user(db_client, name="Alice Smith", email="alice@gmail.com", role="ADMIN")
    await create_user(db_client, name="Bob Stone", email="bob@example.com")
    await create_user(db_client, name="Carol Smithers", email="carol@gmail.com")

    everyone = (await db_client.get(USERS_API)).json()["data"]
    admins = (await db_client.get(USERS_API, params={"role": "ADMIN"})).json()["data"]
    smiths = (await db_client.get(USERS_API, params={"name": "SMITH"})).json()["data"]
    gmail_users = (await db_client.get(USERS_API, params={"emailDomain": "gmail.com", "role": "USER"})).json()["data"]
    second_page = (await db_client.get(USERS_API, params={"limit": 1, "offset": 1})).json()["data"]

    assert [u["name"] for u in everyone] == ["Alice Smith", "Bob Stone", "Carol Smithers"]
    assert [u["name"] for u in admins] == ["Alice Smith"]
    assert [u["name"] for u in smiths] == ["Alice Smith", "Carol Smithers"]
    assert [u["name"] for u in gmail_users] == ["Carol Smithers"]
    assert [u["name"] for u in second_page] == ["Bob Stone"]


async def test_list_accepts_snake_case_filters(db_client: AsyncClient):
    await create_user(db_client, name="Alice Smith", email="alice@gmail.com")
    await create_user(db_client, name="Bob Stone", email="bob@example.com")

    by_domain = (await db_client.get(USERS_API, params={"email_domain": "gmail.com"})).json()["data"]
    in_future = (await db_client.get(USERS_API, params={"created_after": "2999-01-01T00:00:00Z"})).json()["data"]
    in_past = (await db_client.get(USERS_API, params={"created_after": "2000-01-01T00:00:00Z"})).json()["data"]

    assert [u["name"] for u in by_domain] == ["Alice Smith"]
    assert in_future == []
    assert [u["name"] for u in in_past] == ["Alice Smith", "Bob Stone"]


async def test_list_created_after_camel_case(db_client: AsyncClient):
    await create_user(db_client)

    response = await db_client.get(USERS_API, params={"createdAfter": "2999-01-01T00:00:00Z"})

    assert response.json()["data"] == []


async def test_get_by_email_with_registered_spelling(db_client: AsyncClient):
    created = await create_user(db_client, email="John@Example.COM")

    response = await db_client.get(f"{USERS_API}/email/John@Example.COM")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == created["id"]
    assert response.json()["data"]["email"] == "John@example.com"


async def test_null_status_defaults_to_active(db_client: AsyncClient):
    created = await create_user(db_client, status=None)

    assert created["status"] == "ACTIVE"

    response = await db_client.put(
        f"{USERS_API}/{created['id']}",
        json={"name": "John Doe", "email": "john@example.com", "role": "ADMIN", "status": None},
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "ACTIVE"
