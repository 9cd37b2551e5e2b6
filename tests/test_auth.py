from datetime import timedelta
import uuid

from storefront.core.security import SecurityUtils
from tests.conftest import auth_headers


async def test_missing_token(client):
    response = await client.get("/api/wishlist")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "No token provided", "code": "UNAUTHORIZED"}
    assert response.headers["www-authenticate"] == "Bearer"


async def test_invalid_token(client):
    response = await client.get("/api/cart", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


async def test_expired_token(client, customer):
    token = SecurityUtils.create_access_token({"sub": str(customer.id)}, expires_delta=timedelta(seconds=-5))

    response = await client.get("/api/cart", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_EXPIRED"


async def test_unknown_or_inactive_user(client, factory):
    inactive = await factory.user(is_active=False)
    ghost_token = SecurityUtils.create_access_token({"sub": str(uuid.uuid4())})

    ghost = await client.get("/api/cart", headers={"Authorization": f"Bearer {ghost_token}"})
    disabled = await client.get("/api/cart", headers=auth_headers(inactive))

    assert ghost.status_code == 401
    assert disabled.status_code == 401


async def test_admin_routes_reject_customers(client, customer, admin):
    order_id = uuid.uuid4()

    as_customer = await client.put(
        f"/api/orders/{order_id}/status", json={"status": "shipped"}, headers=auth_headers(customer)
    )
    as_admin = await client.put(
        f"/api/orders/{order_id}/status", json={"status": "shipped"}, headers=auth_headers(admin)
    )

    assert as_customer.status_code == 403
    assert as_admin.status_code == 404
