import pytest
from sqlalchemy import text

from inventory_service.app.models import Tag
from inventory_service.app.models.tags import DEFAULT_TAG_COLOR


def test_list_tags_includes_category(client, tags):
    response = client.get("/api/tags")

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data) == 14
    good = next(tag for tag in data if tag["name"] == "Good")
    assert good["color"] == "#2196f3"
    assert good["category"]["name"] == "Condition"
    assert good["categoryId"] == good["category"]["id"]


def test_list_tag_categories_sorted_by_name(client, tags):
    response = client.get("/api/tag-categories")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()["data"]] == ["Condition", "Location Type", "Status"]


def test_create_tag_with_default_color(client, auth_headers, tags):
    category = tags["Status"]["Available"].category

    response = client.post("/api/tags", headers=auth_headers, json={
        "name": "Lost", "categoryId": category.id, "description": "Cannot be found",
    })

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Lost"
    assert data["color"] == DEFAULT_TAG_COLOR
    assert data["category"]["name"] == "Status"


def test_create_tag_validation(client, auth_headers, tags):
    category_id = tags["Status"]["Available"].category_id

    missing = client.post("/api/tags", headers=auth_headers, json={"name": "Lost"})
    assert missing.status_code == 400
    assert missing.json()["message"] == "Name and category are required"

    bad_category = client.post("/api/tags", headers=auth_headers, json={"name": "Lost", "categoryId": "nope"})
    assert bad_category.status_code == 400
    assert bad_category.json()["message"] == "Invalid category"

    duplicate = client.post("/api/tags", headers=auth_headers, json={"name": "Available", "categoryId": category_id})
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "Tag already exists in this category"

    bad_color = client.post("/api/tags", headers=auth_headers,
                            json={"name": "Lost", "categoryId": category_id, "color": "red"})
    assert bad_color.status_code == 400
    assert bad_color.json()["error"] == "Validation error"


def test_same_name_allowed_in_other_category(client, auth_headers, tags):
    category_id = tags["Condition"]["Good"].category_id

    response = client.post("/api/tags", headers=auth_headers, json={"name": "Reserved", "categoryId": category_id})

    assert response.status_code == 201


def test_create_tag_requires_authentication(client, tags, db):
    before = db.query(Tag).count()

    response = client.post("/api/tags", json={"name": "Lost", "categoryId": tags["Status"]["Available"].category_id})

    assert response.status_code == 401
    assert db.query(Tag).count() == before


def test_update_tag_partial(client, auth_headers, tags):
    tag = tags["Condition"]["Fair"]

    response = client.patch(f"/api/tags/{tag.id}", headers=auth_headers, json={"color": "#123456"})
    data = response.json()["data"]
    assert response.status_code == 200
    assert data["name"] == "Fair"
    assert data["color"] == "#123456"
    assert data["description"] == "In fair condition"

    response = client.patch(f"/api/tags/{tag.id}", headers=auth_headers, json={"name": "", "description": None})
    data = response.json()["data"]
    assert data["name"] == "Fair"
    assert data["description"] is None


def test_update_tag_moves_category(client, auth_headers, tags):
    tag = tags["Condition"]["Fair"]
    status_category_id = tags["Status"]["Available"].category_id

    response = client.patch(f"/api/tags/{tag.id}", headers=auth_headers, json={"categoryId": status_category_id})
    assert response.json()["data"]["category"]["name"] == "Status"

    response = client.patch(f"/api/tags/{tag.id}", headers=auth_headers, json={"categoryId": "nope"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid category"


def test_update_tag_rejects_duplicate_name(client, auth_headers, tags):
    tag = tags["Condition"]["Fair"]

    response = client.patch(f"/api/tags/{tag.id}", headers=auth_headers, json={"name": "Good"})

    assert response.status_code == 400
    assert response.json()["message"] == "Tag already exists in this category"


def test_update_unknown_tag(client, auth_headers, tags):
    response = client.patch("/api/tags/missing", headers=auth_headers, json={"name": "X"})

    assert response.status_code == 404
    assert response.json()["message"] == "Tag not found"


@pytest.mark.parametrize("table, url, error", [
    ("tags", "/api/tags", "Failed to fetch tags"),
    ("tag_categories", "/api/tag-categories", "Failed to fetch tag categories"),
])
def test_list_reports_storage_failure(client, db, table, url, error):
    db.execute(text(f"DROP TABLE {table}"))
    db.commit()

    response = client.get(url)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == error
