import uuid


async def test_list_categories_with_counts(client, factory):
    parent = await factory.category("Home")
    child = await factory.category("Kitchen", parent=parent)
    await factory.product(child)
    await factory.product(child)

    response = await client.get("/api/categories")

    assert response.status_code == 200
    categories = {c["id"]: c for c in response.json()["data"]["categories"]}
    assert categories[str(parent.id)]["productCount"] == 0
    assert [c["id"] for c in categories[str(parent.id)]["children"]] == [str(child.id)]
    assert categories[str(child.id)]["parentId"] == str(parent.id)
    assert categories[str(child.id)]["parent"]["slug"] == parent.slug
    assert categories[str(child.id)]["productCount"] == 2


async def test_get_category(client, factory):
    parent = await factory.category("Home")
    child = await factory.category("Kitchen", parent=parent)
    product = await factory.product(child)

    response = await client.get(f"/api/categories/{child.id}")

    assert response.status_code == 200
    category = response.json()["data"]["category"]
    assert category["parent"]["id"] == str(parent.id)
    assert category["children"] == []
    assert [p["id"] for p in category["products"]] == [str(product.id)]

    missing = await client.get(f"/api/categories/{uuid.uuid4()}")
    assert missing.status_code == 404


async def test_category_products_by_slug_or_id(client, factory, category):
    for index in range(3):
        await factory.product(category, name=f"Thing {index}")

    by_slug = await client.get(f"/api/categories/{category.slug}/products?limit=2")
    by_id = await client.get(f"/api/categories/{category.id}/products")

    assert by_slug.status_code == 200
    data = by_slug.json()["data"]
    assert data["category"]["id"] == str(category.id)
    assert len(data["products"]) == 2
    assert data["pagination"]["total"] == 3
    assert len(by_id.json()["data"]["products"]) == 3

    missing = await client.get("/api/categories/no-such-category/products")
    assert missing.status_code == 404
