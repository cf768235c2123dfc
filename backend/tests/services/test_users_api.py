"""Users API — profile CRUD, saved-product toggle and order history.

Invariants:
    - POST creates user + preference together (201); duplicate email → 409
    - GET list honours oldest/newest; unknown order values fall back to newest
    - PATCH updates profile fields and preference independently
    - DELETE cascades the user's orders
    - Saved-products POST toggles membership
"""

import uuid

from sqlalchemy import func, select

from storefront.models.order import Order


def _user(email="grace@example.com", **overrides):
    body = {
        "email": email,
        "first_name": "Grace",
        "last_name": "Hopper",
        "address": "1 Compiler Way",
        "preference": {"receive_email": False},
    }
    body.update(overrides)
    return body


async def test_create_user_returns_201_with_preference(client):
    res = await client.post("/api/v1/users", json=_user())

    assert res.status_code == 201
    data = res.json()
    assert data["email"] == "grace@example.com"
    assert data["preference"] == {"receive_email": False}


async def test_create_user_rejects_invalid_email(client):
    res = await client.post("/api/v1/users", json=_user(email="not-an-email"))

    assert res.status_code == 400


async def test_create_user_rejects_duplicate_email(client, seed_user):
    res = await client.post("/api/v1/users", json=_user(email="buyer@example.com"))

    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_RESOURCE"


async def test_get_user_and_404(client, buyer_id):
    found = await client.get(f"/api/v1/users/{buyer_id}")
    missing = await client.get(f"/api/v1/users/{uuid.uuid4()}")

    assert found.status_code == 200
    assert found.json()["preference"] == {"receive_email": True}
    assert missing.status_code == 404


async def test_list_users_orders(client):
    await client.post("/api/v1/users", json=_user(email="first@example.com"))
    await client.post("/api/v1/users", json=_user(email="second@example.com"))

    oldest = await client.get("/api/v1/users", params={"order": "oldest"})
    newest = await client.get("/api/v1/users", params={"order": "newest"})
    fallback = await client.get("/api/v1/users", params={"order": "priceLowest"})

    assert [u["email"] for u in oldest.json()] == [
        "first@example.com", "second@example.com",
    ]
    assert [u["email"] for u in newest.json()] == [
        "second@example.com", "first@example.com",
    ]
    assert fallback.json() == newest.json()


async def test_patch_user_profile_and_preference(client, buyer_id):
    res = await client.patch(
        f"/api/v1/users/{buyer_id}",
        json={"address": "7 New Street", "preference": {"receive_email": False}},
    )

    assert res.status_code == 200
    assert res.json()["address"] == "7 New Street"
    assert res.json()["first_name"] == "Ada"
    assert res.json()["preference"] == {"receive_email": False}


async def test_patch_user_rejects_taken_email(client, buyer_id):
    await client.post("/api/v1/users", json=_user(email="taken@example.com"))

    res = await client.patch(
        f"/api/v1/users/{buyer_id}", json={"email": "taken@example.com"},
    )

    assert res.status_code == 409


async def test_delete_user_cascades_orders(client, test_db, buyer_id, make_product):
    product_id = await make_product(stock=5)
    await client.post("/api/v1/orders", json={
        "buyer_id": str(buyer_id),
        "line_items": [
            {"product_id": str(product_id), "quantity": 1, "unit_price": 10.0},
        ],
    })

    res = await client.delete(f"/api/v1/users/{buyer_id}")

    assert res.status_code == 200
    assert (await client.get(f"/api/v1/users/{buyer_id}")).status_code == 404
    remaining = await test_db.scalar(select(func.count()).select_from(Order))
    assert remaining == 0


async def test_saved_products_toggle(client, buyer_id, make_product):
    product_id = await make_product(name="Kettle")
    url = f"/api/v1/users/{buyer_id}/saved-products"

    saved = await client.post(url, json={"product_id": str(product_id)})
    listed = await client.get(url)
    unsaved = await client.post(url, json={"product_id": str(product_id)})

    assert [p["name"] for p in saved.json()] == ["Kettle"]
    assert [p["id"] for p in listed.json()] == [str(product_id)]
    assert unsaved.json() == []


async def test_saved_products_unknown_product_returns_404(client, buyer_id):
    res = await client.post(
        f"/api/v1/users/{buyer_id}/saved-products",
        json={"product_id": str(uuid.uuid4())},
    )

    assert res.status_code == 404


async def test_user_orders_include_totals(client, buyer_id, make_product):
    product_id = await make_product(stock=10, price=4.0)
    await client.post("/api/v1/orders", json={
        "buyer_id": str(buyer_id),
        "line_items": [
            {"product_id": str(product_id), "quantity": 3, "unit_price": 4.0},
        ],
    })

    res = await client.get(f"/api/v1/users/{buyer_id}/orders")

    assert res.status_code == 200
    assert [o["total"] for o in res.json()] == [12.0]
