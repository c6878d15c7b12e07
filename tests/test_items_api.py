"""
Item API tests - listing filters and pagination, detail views, create/update/delete ownership.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from marketplace.db.models import ItemCategory, ItemCondition, ItemStatus, item_favorites


@pytest.mark.asyncio
async def test_list_items_empty(client: AsyncClient):
    response = await client.get("/api/items")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["items"] == []
    assert data["pagination"] == {"page": 1, "limit": 20, "total": 0, "pages": 0}


@pytest.mark.asyncio
async def test_create_item_requires_auth(client: AsyncClient, item_payload):
    response = await client.post("/api/items", json=item_payload)
    assert response.status_code == 401
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_create_item_with_auth(client: AsyncClient, auth_headers, test_user, item_payload):
    response = await client.post("/api/items", headers=auth_headers, json=item_payload)
    assert response.status_code == 201
    item = response.json()["item"]
    assert item["title"] == "Denim jacket"
    assert item["status"] == "active"
    assert item["views"] == 0
    assert item["favorites"] == []
    assert item["seller"] == {
        "id": test_user.id,
        "username": "seller",
        "avatar": "",
        "rating": 4.5,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("images", ["missing", None, [], ["  ", ""]])
async def test_create_item_without_images_is_rejected(client: AsyncClient, auth_headers, item_payload, images):
    if images == "missing":
        item_payload.pop("images")
    else:
        item_payload["images"] = images
    response = await client.post("/api/items", headers=auth_headers, json=item_payload)
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "At least one image is required"}


@pytest.mark.asyncio
async def test_create_item_ignores_seller_and_counters_from_body(
    client: AsyncClient, auth_headers, test_user, other_user, item_payload
):
    item_payload.update({"seller_id": other_user.id, "views": 99, "status": "sold"})
    response = await client.post("/api/items", headers=auth_headers, json=item_payload)
    assert response.status_code == 201
    item = response.json()["item"]
    assert item["seller"]["id"] == test_user.id
    assert item["views"] == 0
    assert item["status"] == "active"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field, value",
    [("price", -1), ("category", "Spaceships"), ("condition", "Broken"), ("title", "   ")],
)
async def test_create_item_validation(client: AsyncClient, auth_headers, item_payload, field, value):
    item_payload[field] = value
    response = await client.post("/api/items", headers=auth_headers, json=item_payload)
    assert response.status_code == 400
    assert response.json()["message"].startswith(field)


@pytest.mark.asyncio
async def test_get_item_increments_views_and_shows_seller_profile(client: AsyncClient, make_item):
    item = await make_item(title="Lamp")

    first = await client.get(f"/api/items/{item.id}")
    second = await client.get(f"/api/items/{item.id}")

    assert first.status_code == 200
    assert first.json()["item"]["views"] == 1
    assert second.json()["item"]["views"] == 2
    seller = second.json()["item"]["seller"]
    assert set(seller) == {"id", "username", "avatar", "rating", "location", "created_at"}
    assert seller["location"] == "Vilnius"


@pytest.mark.asyncio
async def test_get_missing_item(client: AsyncClient):
    response = await client.get("/api/items/999")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Item not found"}


@pytest.mark.asyncio
async def test_list_filters_by_category_and_active_status_sorted(client: AsyncClient, make_item):
    await make_item(title="Cheap shirt", price=5, category=ItemCategory.CLOTHING)
    await make_item(title="Pricey coat", price=120, category=ItemCategory.CLOTHING)
    await make_item(title="Mid dress", price=40, category=ItemCategory.CLOTHING)
    await make_item(title="Sold scarf", price=1, category=ItemCategory.CLOTHING, status=ItemStatus.SOLD)
    await make_item(title="Phone", price=60, category=ItemCategory.ELECTRONICS)

    response = await client.get("/api/items", params={"category": "Clothing", "sort": "price"})
    assert response.status_code == 200
    data = response.json()
    assert [i["title"] for i in data["items"]] == ["Cheap shirt", "Mid dress", "Pricey coat"]
    assert all(i["category"] == "Clothing" and i["status"] == "active" for i in data["items"])
    assert data["pagination"]["total"] == 3

    descending = await client.get("/api/items", params={"category": "Clothing", "sort": "-price"})
    assert [i["title"] for i in descending.json()["items"]] == ["Pricey coat", "Mid dress", "Cheap shirt"]


@pytest.mark.asyncio
async def test_list_filters_by_condition_and_price_range(client: AsyncClient, make_item):
    await make_item(title="A", price=10, condition=ItemCondition.GOOD)
    await make_item(title="B", price=50, condition=ItemCondition.GOOD)
    await make_item(title="C", price=50, condition=ItemCondition.NEW_WITH_TAGS)
    await make_item(title="D", price=500, condition=ItemCondition.GOOD)

    response = await client.get(
        "/api/items", params={"condition": "Good", "min_price": 20, "max_price": 100}
    )
    assert [i["title"] for i in response.json()["items"]] == ["B"]


@pytest.mark.asyncio
async def test_list_search_matches_title_description_and_brand(client: AsyncClient, make_item):
    await make_item(title="Red sneakers", description="Comfortable")
    await make_item(title="Jacket", description="Warm winter SNEAKER-style lining")
    await make_item(title="Boots", description="Leather", brand="Sneakerhead Co")
    await make_item(title="Sneaker cleaner", status=ItemStatus.HIDDEN)
    await make_item(title="Hat", description="Wool")

    response = await client.get("/api/items", params={"search": "sneaker", "sort": "title"})
    assert [i["title"] for i in response.json()["items"]] == ["Boots", "Jacket", "Red sneakers"]


@pytest.mark.asyncio
async def test_list_pagination(client: AsyncClient, make_item):
    for n in range(5):
        await make_item(title=f"Item {n}", price=n)

    response = await client.get("/api/items", params={"sort": "price", "page": 2, "limit": 2})
    data = response.json()
    assert [i["title"] for i in data["items"]] == ["Item 2", "Item 3"]
    assert data["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}


@pytest.mark.asyncio
async def test_list_default_sort_is_newest_first(client: AsyncClient, make_item):
    first = await make_item(title="Older")
    second = await make_item(title="Newer")
    response = await client.get("/api/items")
    assert [i["id"] for i in response.json()["items"]] == [second.id, first.id]


@pytest.mark.asyncio
async def test_list_rejects_unknown_sort_field(client: AsyncClient):
    response = await client.get("/api/items", params={"sort": "-password"})
    assert response.status_code == 400
    assert response.json()["message"] == "Unsupported sort field: password"


@pytest.mark.asyncio
async def test_list_rejects_oversized_page(client: AsyncClient):
    response = await client.get("/api/items", params={"limit": 1000})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_item_applies_whitelisted_fields_only(
    client: AsyncClient, auth_headers, test_user, other_user, make_item
):
    item = await make_item(title="Old title", price=10)
    response = await client.put(
        f"/api/items/{item.id}",
        headers=auth_headers,
        json={
            "title": "New title",
            "price": 15,
            "status": "reserved",
            "views": 1000,
            "seller_id": other_user.id,
            "favorites": [other_user.id],
        },
    )
    assert response.status_code == 200
    updated = response.json()["item"]
    assert updated["title"] == "New title"
    assert updated["price"] == 15
    assert updated["status"] == "reserved"
    assert updated["views"] == 0
    assert updated["seller"]["id"] == test_user.id
    assert updated["favorites"] == []


@pytest.mark.asyncio
async def test_update_item_rejects_empty_images(client: AsyncClient, auth_headers, make_item):
    item = await make_item()
    response = await client.put(f"/api/items/{item.id}", headers=auth_headers, json={"images": []})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_item_by_non_owner_is_forbidden(client: AsyncClient, other_headers, make_item):
    item = await make_item(title="Mine", price=10)
    response = await client.put(
        f"/api/items/{item.id}", headers=other_headers, json={"title": "Stolen", "price": 0}
    )
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Not authorized to update this item"}

    unchanged = (await client.get(f"/api/items/{item.id}")).json()["item"]
    assert unchanged["title"] == "Mine"
    assert unchanged["price"] == 10


@pytest.mark.asyncio
async def test_update_missing_item(client: AsyncClient, auth_headers):
    response = await client.put("/api/items/999", headers=auth_headers, json={"title": "x"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_item_by_non_owner_is_forbidden(client: AsyncClient, other_headers, make_item):
    item = await make_item()
    response = await client.delete(f"/api/items/{item.id}", headers=other_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized to delete this item"
    assert (await client.get(f"/api/items/{item.id}")).status_code == 200


@pytest.mark.asyncio
async def test_delete_item_by_owner(client: AsyncClient, auth_headers, make_item):
    item = await make_item()
    response = await client.delete(f"/api/items/{item.id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Item deleted"}
    assert (await client.get(f"/api/items/{item.id}")).status_code == 404


@pytest.mark.asyncio
async def test_list_by_seller_returns_active_items_newest_first(
    client: AsyncClient, test_user, other_user, make_item
):
    older = await make_item(title="Older")
    newer = await make_item(title="Newer")
    await make_item(title="Hidden", status=ItemStatus.HIDDEN)
    await make_item(title="Someone else's", seller_id=other_user.id)

    response = await client.get(f"/api/items/user/{test_user.id}")
    assert response.status_code == 200
    data = response.json()
    assert [i["id"] for i in data["items"]] == [newer.id, older.id]
    assert data["count"] == 2


@pytest.mark.asyncio
async def test_list_by_unknown_seller_is_empty(client: AsyncClient):
    response = await client.get("/api/items/user/12345")
    assert response.status_code == 200
    assert response.json() == {"success": True, "items": [], "count": 0}


@pytest.mark.asyncio
async def test_create_item_trims_image_urls_and_drops_blanks(client: AsyncClient, auth_headers, item_payload):
    item_payload["images"] = ["  https://img.market.io/a.jpg ", "   "]
    response = await client.post("/api/items", headers=auth_headers, json=item_payload)
    assert response.status_code == 201
    assert response.json()["item"]["images"] == ["https://img.market.io/a.jpg"]


@pytest.mark.asyncio
async def test_update_item_rejects_blank_images(client: AsyncClient, auth_headers, make_item):
    item = await make_item(images=["https://img.market.io/keep.jpg"])
    response = await client.put(f"/api/items/{item.id}", headers=auth_headers, json={"images": ["  "]})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "At least one image is required"}

    unchanged = (await client.get(f"/api/items/{item.id}")).json()["item"]
    assert unchanged["images"] == ["https://img.market.io/keep.jpg"]


@pytest.mark.asyncio
@pytest.mark.parametrize("term, expected", [("_", []), ("%", ["100% cotton shirt"])])
async def test_list_search_treats_wildcards_literally(client: AsyncClient, make_item, term, expected):
    await make_item(title="Hat", description="Wool")
    await make_item(title="100% cotton shirt", description="Soft")

    response = await client.get("/api/items", params={"search": term})
    assert response.status_code == 200
    assert [i["title"] for i in response.json()["items"]] == expected


@pytest.mark.asyncio
async def test_list_rejects_page_beyond_cap(client: AsyncClient):
    response = await client.get("/api/items", params={"page": 10**18})
    assert response.status_code == 400
    assert response.json()["message"].startswith("page")


@pytest.mark.asyncio
async def test_delete_item_removes_its_favorites(
    client: AsyncClient, session, auth_headers, other_headers, make_item
):
    item = await make_item()
    favorited = await client.post(f"/api/items/{item.id}/favorite", headers=other_headers)
    assert favorited.json()["is_favorited"] is True

    response = await client.delete(f"/api/items/{item.id}", headers=auth_headers)
    assert response.status_code == 200

    remaining = await session.scalar(select(func.count()).select_from(item_favorites))
    assert remaining == 0
