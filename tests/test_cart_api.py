from decimal import Decimal
import uuid

from tests.conftest import auth_headers


async def add(client, user, product, quantity=1, variant=None):
    body = {"productId": str(product.id), "quantity": quantity}
    if variant is not None:
        body["variantId"] = str(variant.id)
    return await client.post("/api/cart/items", json=body, headers=auth_headers(user))


async def test_get_cart_creates_empty_cart(client, customer):
    response = await client.get("/api/cart", headers=auth_headers(customer))

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    cart = body["data"]["cart"]
    assert cart["items"] == []
    assert cart["itemCount"] == 0
    assert Decimal(cart["subtotal"]) == Decimal("0")

    again = await client.get("/api/cart", headers=auth_headers(customer))
    assert again.json()["data"]["cart"]["id"] == cart["id"]


async def test_cart_requires_token(client):
    response = await client.get("/api/cart")

    assert response.status_code == 401
    assert response.json()["success"] is False


async def test_add_item(client, factory, customer, category):
    product = await factory.product(category, price="12.50", stock_qty=5)

    response = await add(client, customer, product, quantity=2)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Item added to cart"
    cart = body["data"]["cart"]
    assert cart["itemCount"] == 1
    line = cart["items"][0]
    assert line["quantity"] == 2
    assert Decimal(line["unitPrice"]) == Decimal("12.50")
    assert Decimal(line["priceAtAdd"]) == Decimal("12.50")
    assert Decimal(line["subtotal"]) == Decimal("25.00")
    assert line["product"]["name"] == product.name
    assert line["product"]["primaryImage"].startswith("https://img.example.com/")
    assert Decimal(cart["subtotal"]) == Decimal("25.00")


async def test_add_rejects_quantity_above_stock(client, factory, customer, category):
    product = await factory.product(category, stock_qty=3)

    response = await add(client, customer, product, quantity=4)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "INSUFFICIENT_STOCK"

    cart = (await client.get("/api/cart", headers=auth_headers(customer))).json()["data"]["cart"]
    assert cart["items"] == []


async def test_add_merges_into_existing_line(client, factory, customer, category):
    product = await factory.product(category, stock_qty=10)

    await add(client, customer, product, quantity=2)
    response = await add(client, customer, product, quantity=3)

    assert response.status_code == 201
    items = response.json()["data"]["cart"]["items"]
    assert len(items) == 1
    assert items[0]["quantity"] == 5


async def test_merge_checks_combined_quantity(client, factory, customer, category):
    product = await factory.product(category, stock_qty=5)

    await add(client, customer, product, quantity=3)
    response = await add(client, customer, product, quantity=3)

    assert response.status_code == 400
    cart = (await client.get("/api/cart", headers=auth_headers(customer))).json()["data"]["cart"]
    assert cart["items"][0]["quantity"] == 3


async def test_variant_price_and_stock_apply(client, factory, customer, category):
    product = await factory.product(category, price="10.00", stock_qty=50)
    variant = await factory.variant(product, price="14.00", stock_qty=2)

    rejected = await add(client, customer, product, quantity=3, variant=variant)
    assert rejected.status_code == 400

    response = await add(client, customer, product, quantity=2, variant=variant)
    assert response.status_code == 201
    line = response.json()["data"]["cart"]["items"][0]
    assert line["variantId"] == str(variant.id)
    assert line["variant"]["name"] == "Large"
    assert Decimal(line["unitPrice"]) == Decimal("14.00")


async def test_variant_and_plain_lines_are_separate(client, factory, customer, category):
    product = await factory.product(category, stock_qty=10)
    variant = await factory.variant(product)

    await add(client, customer, product, quantity=1)
    response = await add(client, customer, product, quantity=1, variant=variant)

    assert len(response.json()["data"]["cart"]["items"]) == 2


async def test_add_unknown_product_or_foreign_variant(client, factory, customer, category):
    product = await factory.product(category)
    other = await factory.product(category)
    foreign_variant = await factory.variant(other)

    missing = await client.post(
        "/api/cart/items",
        json={"productId": str(uuid.uuid4()), "quantity": 1},
        headers=auth_headers(customer),
    )
    assert missing.status_code == 404

    mismatched = await add(client, customer, product, variant=foreign_variant)
    assert mismatched.status_code == 404


async def test_quantity_bounds_are_validated(client, factory, customer, category):
    product = await factory.product(category, stock_qty=500)

    zero = await add(client, customer, product, quantity=0)
    too_many = await add(client, customer, product, quantity=101)

    assert zero.status_code == 400
    assert zero.json()["code"] == "VALIDATION_ERROR"
    assert too_many.status_code == 400


async def test_update_item(client, factory, customer, category):
    product = await factory.product(category, stock_qty=4)
    line = (await add(client, customer, product)).json()["data"]["cart"]["items"][0]

    response = await client.put(
        f"/api/cart/items/{line['id']}", json={"quantity": 4}, headers=auth_headers(customer)
    )
    assert response.status_code == 200
    assert response.json()["data"]["cart"]["items"][0]["quantity"] == 4

    over = await client.put(
        f"/api/cart/items/{line['id']}", json={"quantity": 5}, headers=auth_headers(customer)
    )
    assert over.status_code == 400


async def test_update_missing_item(client, customer):
    response = await client.put(
        f"/api/cart/items/{uuid.uuid4()}", json={"quantity": 1}, headers=auth_headers(customer)
    )

    assert response.status_code == 404


async def test_other_users_line_is_forbidden(client, factory, customer, other_customer, category):
    product = await factory.product(category)
    line = (await add(client, customer, product)).json()["data"]["cart"]["items"][0]

    update = await client.put(
        f"/api/cart/items/{line['id']}", json={"quantity": 2}, headers=auth_headers(other_customer)
    )
    remove = await client.delete(f"/api/cart/items/{line['id']}", headers=auth_headers(other_customer))

    assert update.status_code == 403
    assert remove.status_code == 403
    cart = (await client.get("/api/cart", headers=auth_headers(customer))).json()["data"]["cart"]
    assert cart["items"][0]["quantity"] == 1


async def test_remove_item_is_idempotent(client, factory, customer, category):
    product = await factory.product(category)
    line = (await add(client, customer, product)).json()["data"]["cart"]["items"][0]

    first = await client.delete(f"/api/cart/items/{line['id']}", headers=auth_headers(customer))
    second = await client.delete(f"/api/cart/items/{line['id']}", headers=auth_headers(customer))

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["success"] is True
    cart = (await client.get("/api/cart", headers=auth_headers(customer))).json()["data"]["cart"]
    assert cart["items"] == []


async def test_clear_cart_keeps_cart(client, factory, customer, category):
    first = await factory.product(category)
    second = await factory.product(category)
    cart_id = (await add(client, customer, first)).json()["data"]["cart"]["id"]
    await add(client, customer, second)

    response = await client.delete("/api/cart", headers=auth_headers(customer))

    assert response.status_code == 200
    assert response.json()["message"] == "Cart cleared"
    cart = (await client.get("/api/cart", headers=auth_headers(customer))).json()["data"]["cart"]
    assert cart["id"] == cart_id
    assert cart["items"] == []


async def test_subtotal_follows_current_price(client, factory, session_factory, customer, category):
    product = await factory.product(category, price="10.00")
    await add(client, customer, product, quantity=2)

    async with session_factory() as session:
        stored = await session.get(type(product), product.id)
        stored.price = Decimal("15.00")
        await session.commit()

    cart = (await client.get("/api/cart", headers=auth_headers(customer))).json()["data"]["cart"]
    line = cart["items"][0]
    assert Decimal(line["priceAtAdd"]) == Decimal("10.00")
    assert Decimal(line["unitPrice"]) == Decimal("15.00")
    assert Decimal(cart["subtotal"]) == Decimal("30.00")
