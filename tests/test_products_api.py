from decimal import Decimal
import uuid

from tests.conftest import INLINE_ADDRESS, auth_headers


def product_payload(category, **overrides):
    payload = {
        "name": "Trail Runner",
        "description": "Lightweight running shoe",
        "price": "89.99",
        "stockQty": 12,
        "sku": f"TR-{uuid.uuid4().hex[:6]}",
        "brand": "Stride",
        "categoryId": str(category.id),
    }
    payload.update(overrides)
    return payload


async def test_list_products_paginates(client, factory, category):
    for index in range(3):
        await factory.product(category, name=f"Item {index}")

    response = await client.get("/api/products?page=1&limit=2")

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["products"]) == 2
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}


async def test_list_products_filters_and_sorts(client, factory, category):
    other_category = await factory.category("Books")
    await factory.product(category, price="5.00", name="Cheap Lamp")
    await factory.product(category, price="50.00", name="Desk Lamp")
    await factory.product(category, price="500.00", name="Chandelier")
    await factory.product(other_category, price="20.00", name="Lamp Manual")

    searched = await client.get("/api/products", params={"search": "lamp", "categoryId": str(category.id)})
    names = {p["name"] for p in searched.json()["data"]["products"]}
    assert names == {"Cheap Lamp", "Desk Lamp"}

    ranged = await client.get(
        "/api/products",
        params={"minPrice": "10", "maxPrice": "100", "sortBy": "price", "sortOrder": "asc"},
    )
    assert [p["name"] for p in ranged.json()["data"]["products"]] == ["Lamp Manual", "Desk Lamp"]

    by_name = await client.get("/api/products", params={"sortBy": "name", "sortOrder": "asc"})
    names = [p["name"] for p in by_name.json()["data"]["products"]]
    assert names == sorted(names)


async def test_limit_is_capped(client):
    response = await client.get("/api/products?limit=500")

    assert response.status_code == 400


async def test_get_product_detail(client, factory, category):
    product = await factory.product(category)
    variant = await factory.variant(product, price="11.00", stock_qty=1)

    response = await client.get(f"/api/products/{product.id}")

    assert response.status_code == 200
    detail = response.json()["data"]["product"]
    assert detail["category"]["id"] == str(category.id)
    assert detail["variants"][0]["id"] == str(variant.id)
    assert detail["images"][0]["isPrimary"] is True

    missing = await client.get(f"/api/products/{uuid.uuid4()}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Product not found"


async def test_create_product(client, admin, category):
    payload = product_payload(
        category,
        images=[{"url": "https://img.example.com/a.png"}, {"url": "https://img.example.com/b.png"}],
        variants=[{"name": "Size 10", "sku": "TR-10", "stockQty": 3, "attributes": {"size": "10"}}],
    )

    response = await client.post("/api/products", json=payload, headers=auth_headers(admin))

    assert response.status_code == 201
    product = response.json()["data"]["product"]
    assert product["slug"] == "trail-runner"
    assert Decimal(product["price"]) == Decimal("89.99")
    assert [(i["position"], i["isPrimary"]) for i in product["images"]] == [(1, True), (2, False)]
    assert product["variants"][0]["attributes"] == {"size": "10"}


async def test_create_product_slug_collision_gets_suffix(client, admin, category):
    first = await client.post("/api/products", json=product_payload(category), headers=auth_headers(admin))
    second = await client.post("/api/products", json=product_payload(category), headers=auth_headers(admin))

    assert first.status_code == 201
    assert second.status_code == 201
    assert second.json()["data"]["product"]["slug"] != first.json()["data"]["product"]["slug"]


async def test_create_product_rules(client, customer, admin, category):
    payload = product_payload(category, sku="DUP-1")

    forbidden = await client.post("/api/products", json=payload, headers=auth_headers(customer))
    assert forbidden.status_code == 403

    created = await client.post("/api/products", json=payload, headers=auth_headers(admin))
    assert created.status_code == 201

    duplicate = await client.post(
        "/api/products", json=product_payload(category, sku="DUP-1", name="Other"), headers=auth_headers(admin)
    )
    assert duplicate.status_code == 400
    assert duplicate.json()["code"] == "DUPLICATE_SKU"

    no_category = await client.post(
        "/api/products",
        json=product_payload(category, categoryId=str(uuid.uuid4())),
        headers=auth_headers(admin),
    )
    assert no_category.status_code == 404

    invalid = await client.post(
        "/api/products", json=product_payload(category, price="-1"), headers=auth_headers(admin)
    )
    assert invalid.status_code == 400
    assert invalid.json()["code"] == "VALIDATION_ERROR"
    assert any(d["field"] == "price" for d in invalid.json()["details"])


async def test_update_product(client, factory, admin, category):
    product = await factory.product(category, price="10.00")

    response = await client.put(
        f"/api/products/{product.id}",
        json={"price": "12.00", "stockQty": 7},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    updated = response.json()["data"]["product"]
    assert Decimal(updated["price"]) == Decimal("12.00")
    assert updated["stockQty"] == 7
    assert updated["name"] == product.name

    missing = await client.put(
        f"/api/products/{uuid.uuid4()}", json={"price": "1.00"}, headers=auth_headers(admin)
    )
    assert missing.status_code == 404


async def test_delete_product_cascades_cart_and_wishlist(client, factory, customer, admin, category):
    product = await factory.product(category)
    await factory.variant(product)
    await client.post(
        "/api/cart/items", json={"productId": str(product.id), "quantity": 1}, headers=auth_headers(customer)
    )
    await client.post("/api/wishlist", json={"productId": str(product.id)}, headers=auth_headers(customer))

    response = await client.delete(f"/api/products/{product.id}", headers=auth_headers(admin))

    assert response.status_code == 200
    assert (await client.get(f"/api/products/{product.id}")).status_code == 404
    cart = (await client.get("/api/cart", headers=auth_headers(customer))).json()["data"]["cart"]
    assert cart["items"] == []
    wishlist = (await client.get("/api/wishlist", headers=auth_headers(customer))).json()["data"]["wishlist"]
    assert wishlist["items"] == []


async def test_delete_ordered_product_conflicts(client, factory, customer, admin, category):
    product = await factory.product(category)
    await client.post(
        "/api/cart/items", json={"productId": str(product.id), "quantity": 1}, headers=auth_headers(customer)
    )
    await client.post(
        "/api/orders",
        json={"shippingAddress": INLINE_ADDRESS, "billingAddress": INLINE_ADDRESS, "paymentMethod": "card"},
        headers=auth_headers(customer),
    )

    response = await client.delete(f"/api/products/{product.id}", headers=auth_headers(admin))

    assert response.status_code == 409
    assert (await client.get(f"/api/products/{product.id}")).status_code == 200
