"""Tests for clients API endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

VALID_CLIENT = {
    "identificationNumber": "1234567890",
    "fullName": "Ana Lopez",
    "email": "Ana@Test.com",
    "phone": "+1 555 0000",
}


@pytest.mark.asyncio
async def test_create_and_get_client(api_client: AsyncClient) -> None:
    """Create client, normalize fields, and fetch it through the Location header."""
    create_response = await api_client.post(
        "/api/clients",
        json={**VALID_CLIENT, "fullName": "  Ana Lopez ", "email": "  Ana@Test.com "},
    )
    assert create_response.status_code == 201
    created = create_response.json()
    assert created["email"] == "ana@test.com"
    assert created["fullName"] == "Ana Lopez"
    assert created["phone"] == "+1 555 0000"
    assert created["updatedAt"] is None
    assert create_response.headers["Location"].endswith(f"/api/clients/{created['id']}")

    get_response = await api_client.get(create_response.headers["Location"])
    assert get_response.status_code == 200
    assert get_response.json()["identificationNumber"] == "1234567890"


@pytest.mark.asyncio
async def test_create_client_accepts_accented_names(api_client: AsyncClient) -> None:
    response = await api_client.post(
        "/api/clients", json={**VALID_CLIENT, "fullName": "María José Núñez"}
    )
    assert response.status_code == 201
    assert response.json()["fullName"] == "María José Núñez"


@pytest.mark.asyncio
async def test_create_client_rejects_invalid_fields(api_client: AsyncClient) -> None:
    """Every invalid field is reported in the field map."""
    response = await api_client.post(
        "/api/clients",
        json={
            "identificationNumber": "12345",
            "fullName": "Ana 2",
            "email": "not-an-email",
            "phone": "call me",
        },
    )
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert set(errors) == {"identificationNumber", "fullName", "email", "phone"}
    assert errors["identificationNumber"] == [
        "Identification number must be exactly 10 digits"
    ]


@pytest.mark.asyncio
async def test_create_client_rejects_misplaced_dots_in_email(api_client: AsyncClient) -> None:
    response = await api_client.post(
        "/api/clients", json={**VALID_CLIENT, "email": ".ana..lopez.@test.com"}
    )
    assert response.status_code == 400
    assert response.json()["errors"] == {"email": ["Email format is not valid"]}

    listing = await api_client.get("/api/clients")
    assert listing.json() == []


@pytest.mark.asyncio
async def test_create_client_missing_field_returns_400(api_client: AsyncClient) -> None:
    payload = {key: value for key, value in VALID_CLIENT.items() if key != "phone"}
    response = await api_client.post("/api/clients", json=payload)
    assert response.status_code == 400
    assert "phone" in response.json()["errors"]


@pytest.mark.asyncio
async def test_create_duplicate_client_reports_both_fields(api_client: AsyncClient) -> None:
    """Duplicate identification number and email are reported together."""
    await api_client.post("/api/clients", json=VALID_CLIENT)

    response = await api_client.post(
        "/api/clients", json={**VALID_CLIENT, "email": " ANA@test.COM "}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == 400
    assert set(body["errors"]) == {"identificationNumber", "email"}


@pytest.mark.asyncio
async def test_list_clients_sorted_and_searched(api_client: AsyncClient) -> None:
    """Search matches id number, name or email, case-insensitively."""
    await api_client.post("/api/clients", json=VALID_CLIENT)
    await api_client.post(
        "/api/clients",
        json={
            "identificationNumber": "0987654321",
            "fullName": "Bruno Diaz",
            "email": "bruno@mail.com",
            "phone": "555-1234",
        },
    )

    all_response = await api_client.get("/api/clients")
    assert [c["fullName"] for c in all_response.json()] == ["Ana Lopez", "Bruno Diaz"]

    by_name = await api_client.get("/api/clients", params={"search": "  BRUNO "})
    assert [c["fullName"] for c in by_name.json()] == ["Bruno Diaz"]

    by_number = await api_client.get("/api/clients", params={"search": "0987"})
    assert [c["fullName"] for c in by_number.json()] == ["Bruno Diaz"]

    by_email = await api_client.get("/api/clients", params={"search": "test.com"})
    assert [c["fullName"] for c in by_email.json()] == ["Ana Lopez"]


@pytest.mark.asyncio
async def test_list_clients_without_matches_is_empty(api_client: AsyncClient) -> None:
    await api_client.post("/api/clients", json=VALID_CLIENT)
    response = await api_client.get("/api/clients", params={"search": "zzz"})
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_update_client(api_client: AsyncClient) -> None:
    """PUT overwrites every field, normalizes, and stamps updatedAt."""
    created = (await api_client.post("/api/clients", json=VALID_CLIENT)).json()

    response = await api_client.put(
        f"/api/clients/{created['id']}",
        json={
            "identificationNumber": "1111111111",
            "fullName": " Ana María Lopez ",
            "email": "ANA.MARIA@Test.com",
            "phone": "(555) 000-1111",
        },
    )
    assert response.status_code == 204
    assert response.content == b""

    fetched = (await api_client.get(f"/api/clients/{created['id']}")).json()
    assert fetched["identificationNumber"] == "1111111111"
    assert fetched["fullName"] == "Ana María Lopez"
    assert fetched["email"] == "ana.maria@test.com"
    assert fetched["updatedAt"] is not None


@pytest.mark.asyncio
async def test_update_client_keeping_own_values_is_allowed(api_client: AsyncClient) -> None:
    created = (await api_client.post("/api/clients", json=VALID_CLIENT)).json()
    response = await api_client.put(f"/api/clients/{created['id']}", json=VALID_CLIENT)
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_update_client_duplicate_of_other_client(api_client: AsyncClient) -> None:
    await api_client.post("/api/clients", json=VALID_CLIENT)
    other = (
        await api_client.post(
            "/api/clients",
            json={
                "identificationNumber": "0987654321",
                "fullName": "Bruno Diaz",
                "email": "bruno@mail.com",
                "phone": "555-1234",
            },
        )
    ).json()

    response = await api_client.put(
        f"/api/clients/{other['id']}",
        json={**VALID_CLIENT, "identificationNumber": "0987654321"},
    )
    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"email"}


@pytest.mark.asyncio
async def test_update_unknown_client_returns_404(api_client: AsyncClient) -> None:
    response = await api_client.put("/api/clients/99999", json=VALID_CLIENT)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_client(api_client: AsyncClient) -> None:
    created = (await api_client.post("/api/clients", json=VALID_CLIENT)).json()

    response = await api_client.delete(f"/api/clients/{created['id']}")
    assert response.status_code == 204

    assert (await api_client.get(f"/api/clients/{created['id']}")).status_code == 404
    assert (await api_client.delete(f"/api/clients/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_get_client_not_found(api_client: AsyncClient) -> None:
    """Unknown client ID returns 404."""
    response = await api_client.get("/api/clients/99999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Client not found"


@pytest.mark.asyncio
async def test_request_id_is_echoed(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/clients", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
