from tests.conftest import INLINE_ADDRESS, auth_headers


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "healthy"


async def test_unknown_route_uses_envelope(client):
    response = await client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Route /api/nowhere not found"}


async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"
    assert "X-Process-Time" in response.headers


async def test_address_book(client, customer, other_customer):
    created = await client.post(
        "/api/addresses", json={**INLINE_ADDRESS, "isDefault": True}, headers=auth_headers(customer)
    )
    assert created.status_code == 201
    address = created.json()["data"]["address"]
    assert address["type"] == "both"
    assert address["isDefault"] is True

    second = await client.post(
        "/api/addresses", json={**INLINE_ADDRESS, "city": "Shelbyville", "isDefault": True},
        headers=auth_headers(customer),
    )
    assert second.status_code == 201

    listed = (await client.get("/api/addresses", headers=auth_headers(customer))).json()["data"]["addresses"]
    assert [a["city"] for a in listed] == ["Shelbyville", "Springfield"]
    assert [a["isDefault"] for a in listed] == [True, False]

    others = (await client.get("/api/addresses", headers=auth_headers(other_customer))).json()
    assert others["data"]["addresses"] == []


async def test_address_validation(client, customer):
    response = await client.post(
        "/api/addresses", json={"fullName": "No Street"}, headers=auth_headers(customer)
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"
