from app.api.dependencies import get_photo_service
from app.main import app


async def test_get_photo_includes_category_fields(client, make_category, make_photo):
    travel = await make_category("travel", display_name="Travel Photography")
    photo = await make_photo(
        travel,
        "Ancient Temple",
        location="Angkor Wat, Cambodia",
        photo_metadata={"iso": 800},
        dimensions="1920x1080",
    )

    response = await client.get(f"/api/photos/{photo.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["categoryId"] == travel.id
    assert body["categoryName"] == "Travel Photography"
    assert body["title"] == "Ancient Temple"
    assert body["metadata"] == {"iso": 800}
    assert body["likesCount"] == 0
    assert body["isFeatured"] is False


async def test_get_missing_photo_is_404(client):
    response = await client.get("/api/photos/999")
    assert response.status_code == 404


async def test_list_photos_with_and_without_paging(client, make_category, make_photo):
    nature = await make_category("nature")
    for i in range(3):
        await make_photo(nature, f"Photo {i}")

    assert len((await client.get("/api/photos")).json()) == 3
    assert len((await client.get("/api/photos", params={"page": 1, "size": 2})).json()) == 1


async def test_photos_by_category_paginates(client, make_category, make_photo):
    nature = await make_category("nature")
    for i in range(5):
        await make_photo(nature, f"Photo {i}")

    first = await client.get(f"/api/photos/category/{nature.id}", params={"page": 0, "size": 2})
    last = await client.get(f"/api/photos/category/{nature.id}", params={"page": 2, "size": 2})

    assert first.status_code == 200
    assert len(first.json()) == 2
    assert len(last.json()) == 1


async def test_invalid_paging_is_400(client, make_category):
    nature = await make_category("nature")

    response = await client.get(f"/api/photos/category/{nature.id}", params={"page": -1, "size": 2})
    assert response.status_code == 400

    response = await client.get(f"/api/photos/category/{nature.id}", params={"page": 0, "size": 0})
    assert response.status_code == 400

    response = await client.get(f"/api/photos/category/{nature.id}", params={"page": 10**17, "size": 100})
    assert response.status_code == 400


async def test_search(client, make_category, make_photo):
    travel = await make_category("travel")
    await make_photo(travel, "Ancient Temple")
    await make_photo(travel, "Mountain Vista")

    response = await client.get("/api/photos/search", params={"keyword": "TEMPLE"})

    assert response.status_code == 200
    assert [p["title"] for p in response.json()] == ["Ancient Temple"]


async def test_search_without_keyword_is_400(client):
    assert (await client.get("/api/photos/search")).status_code == 400
    assert (await client.get("/api/photos/search", params={"keyword": " "})).status_code == 400


async def test_location_and_featured(client, make_category, make_photo):
    travel = await make_category("travel")
    await make_photo(travel, "Ancient Temple", location="Angkor Wat, Cambodia", is_featured=True)
    await make_photo(travel, "Market Vendors", location="Marrakech, Morocco")

    response = await client.get("/api/photos/location", params={"location": "morocco"})
    assert [p["title"] for p in response.json()] == ["Market Vendors"]

    response = await client.get("/api/photos/featured")
    assert [p["title"] for p in response.json()] == ["Ancient Temple"]


async def test_popular_and_top(client, make_category, make_photo):
    nature = await make_category("nature")
    street = await make_category("street")
    await make_photo(nature, "Quiet", likes_count=1)
    await make_photo(nature, "Loved", likes_count=9)
    await make_photo(street, "Liked", likes_count=4)

    popular = [p["title"] for p in (await client.get("/api/photos/popular")).json()]
    top = [p["title"] for p in (await client.get("/api/photos/top")).json()]
    scoped = [p["title"] for p in (await client.get(f"/api/photos/category/{nature.id}/popular")).json()]

    assert popular == ["Loved", "Liked", "Quiet"]
    assert top == popular
    assert scoped == ["Loved", "Quiet"]


async def test_like_and_unlike(client, make_category, make_photo):
    nature = await make_category("nature")
    photo = await make_photo(nature, "Mountain Sunrise")

    response = await client.post(f"/api/photos/{photo.id}/like")
    assert response.status_code == 200
    assert response.json()["likesCount"] == 1

    response = await client.post(f"/api/photos/{photo.id}/unlike")
    assert response.status_code == 200
    assert response.json()["likesCount"] == 0

    response = await client.post(f"/api/photos/{photo.id}/unlike")
    assert response.status_code == 409
    assert (await client.get(f"/api/photos/{photo.id}")).json()["likesCount"] == 0


async def test_like_missing_photo_is_404(client):
    assert (await client.post("/api/photos/999/like")).status_code == 404
    assert (await client.post("/api/photos/999/unlike")).status_code == 404


async def test_create_update_delete_photo(client, make_category):
    nature = await make_category("nature")
    street = await make_category("street")

    response = await client.post(
        "/api/photos",
        json={
            "categoryId": nature.id,
            "title": "Mountain Sunrise",
            "filePath": "/images/mountain-sunrise.jpg",
            "metadata": {"aperture": "f/2.8"},
            "takenAt": "2024-05-01T06:30:00",
        },
    )
    assert response.status_code == 201
    created = response.json()
    assert created["categoryName"] == "Nature"
    assert created["metadata"] == {"aperture": "f/2.8"}

    response = await client.put(
        f"/api/photos/{created['id']}",
        json={"categoryId": street.id, "title": "Moved", "filePath": "/images/moved.jpg"},
    )
    assert response.status_code == 200
    assert response.json()["categoryName"] == "Street"
    assert response.json()["metadata"] is None

    assert (await client.delete(f"/api/photos/{created['id']}")).status_code == 204
    assert (await client.get(f"/api/photos/{created['id']}")).status_code == 404


async def test_create_photo_errors(client, make_category):
    nature = await make_category("nature")

    response = await client.post("/api/photos", json={"categoryId": 999, "title": "T", "filePath": "/a.jpg"})
    assert response.status_code == 404

    response = await client.post(
        "/api/photos",
        json={"categoryId": nature.id, "title": "t" * 201, "filePath": "/a.jpg"},
    )
    assert response.status_code == 422


async def test_unexpected_error_is_500(client):
    class FailingService:
        async def get_all_photos(self, page, size):
            raise RuntimeError("database is locked")

    app.dependency_overrides[get_photo_service] = lambda: FailingService()

    response = await client.get("/api/photos")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
