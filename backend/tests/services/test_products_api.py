"""Products API — CRUD, filtering and named sort orders.

Invariants:
    - POST validates name length, category enum and non-negative price/stock
    - GET list honours category filter, offset/limit and the sort table
    - PATCH writes only provided fields; explicit nulls on required fields rejected
    - DELETE refuses products that orders reference
"""

import uuid


def _product(**overrides):
    body = {
        "name": "Trail Shoe",
        "description": "Grippy outsole",
        "category": "SPORTS",
        "price": 89.0,
        "stock": 12,
    }
    body.update(overrides)
    return body


async def test_create_product_returns_201(client):
    res = await client.post("/api/v1/products", json=_product())

    assert res.status_code == 201
    data = res.json()
    assert data["name"] == "Trail Shoe"
    assert data["category"] == "SPORTS"
    assert data["stock"] == 12
    uuid.UUID(data["id"])


async def test_create_product_rejects_unknown_category(client):
    res = await client.post("/api/v1/products", json=_product(category="TOYS"))

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_product_rejects_negative_stock(client):
    res = await client.post("/api/v1/products", json=_product(stock=-1))

    assert res.status_code == 400


async def test_create_product_rejects_long_name(client):
    res = await client.post("/api/v1/products", json=_product(name="x" * 61))

    assert res.status_code == 400


async def test_get_product_and_404(client, make_product):
    product_id = await make_product(name="Kettle", category="KITCHENWARE")

    found = await client.get(f"/api/v1/products/{product_id}")
    missing = await client.get(f"/api/v1/products/{uuid.uuid4()}")

    assert found.status_code == 200
    assert found.json()["name"] == "Kettle"
    assert missing.status_code == 404


async def test_list_products_filters_by_category(client, make_product):
    await make_product(name="Kettle", category="KITCHENWARE")
    await make_product(name="Ball", category="SPORTS")

    res = await client.get("/api/v1/products", params={"category": "KITCHENWARE"})

    assert res.status_code == 200
    assert [p["name"] for p in res.json()] == ["Kettle"]


async def test_list_products_price_orders(client, make_product):
    await make_product(name="Mid", price=20.0)
    await make_product(name="Cheap", price=5.0)
    await make_product(name="Dear", price=90.0)

    lowest = await client.get("/api/v1/products", params={"order": "priceLowest"})
    highest = await client.get("/api/v1/products", params={"order": "priceHighest"})

    assert [p["name"] for p in lowest.json()] == ["Cheap", "Mid", "Dear"]
    assert [p["name"] for p in highest.json()] == ["Dear", "Mid", "Cheap"]


async def test_list_products_paginates(client, make_product):
    for price in (1.0, 2.0, 3.0):
        await make_product(name=f"P{int(price)}", price=price)

    res = await client.get(
        "/api/v1/products",
        params={"order": "priceLowest", "offset": 1, "limit": 1},
    )

    assert [p["name"] for p in res.json()] == ["P2"]


async def test_list_products_rejects_oversized_limit(client):
    res = await client.get("/api/v1/products", params={"limit": 1000})

    assert res.status_code == 400


async def test_patch_product_updates_only_given_fields(client, make_product):
    product_id = await make_product(name="Kettle", price=30.0, stock=4)

    res = await client.patch(
        f"/api/v1/products/{product_id}", json={"price": 25.0},
    )

    assert res.status_code == 200
    assert res.json()["price"] == 25.0
    assert res.json()["name"] == "Kettle"
    assert res.json()["stock"] == 4


async def test_patch_product_rejects_null_name(client, make_product):
    product_id = await make_product()

    res = await client.patch(f"/api/v1/products/{product_id}", json={"name": None})

    assert res.status_code == 400


async def test_delete_product(client, make_product):
    product_id = await make_product()

    res = await client.delete(f"/api/v1/products/{product_id}")

    assert res.status_code == 200
    assert (await client.get(f"/api/v1/products/{product_id}")).status_code == 404


async def test_delete_ordered_product_returns_409(client, buyer_id, make_product):
    product_id = await make_product(stock=5)
    await client.post("/api/v1/orders", json={
        "buyer_id": str(buyer_id),
        "line_items": [
            {"product_id": str(product_id), "quantity": 1, "unit_price": 10.0},
        ],
    })

    res = await client.delete(f"/api/v1/products/{product_id}")

    assert res.status_code == 409
    assert res.json()["error"]["code"] == "RESOURCE_IN_USE"
