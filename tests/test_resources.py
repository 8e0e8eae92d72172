import pytest

from inventory_service.app.models import AuditLog, ResourceInstance, ResourceInstanceTag


@pytest.fixture
def workshop(make_location, make_resource_model, make_resource, tags):
    shop = make_location("Shop")
    drawer = make_location("Drawer1", parent=shop, type_name="Drawer")
    drill = make_resource_model("Cordless Drill", manufacturer="DeWalt")
    saw = make_resource_model("Band Saw", description="Metal cutting saw")
    good = tags["Condition"]["Good"]
    resources = [
        make_resource(drill, shop, tags=[good], serial_number="D-1"),
        make_resource(drill, drawer, serial_number="D-2"),
        make_resource(saw, shop, serial_number="S-1"),
    ]
    return {"shop": shop, "drawer": drawer, "drill": drill, "saw": saw, "resources": resources}


def test_list_resources_paginates(client, workshop):
    response = client.get("/api/resources", params={"limit": 2})

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["resources"]) == 2
    assert data["total"] == 3
    assert data["limit"] == 2
    assert data["offset"] == 0
    assert data["hasMore"] is True

    data = client.get("/api/resources", params={"limit": 2, "offset": 2}).json()["data"]
    assert len(data["resources"]) == 1
    assert data["hasMore"] is False


def test_list_resources_includes_model_location_and_tags(client, workshop):
    data = client.get("/api/resources").json()["data"]

    by_serial = {r["serialNumber"]: r for r in data["resources"]}
    first = by_serial["D-1"]
    assert first["model"]["name"] == "Cordless Drill"
    assert first["location"]["path"] == "/Shop"
    assert [t["name"] for t in first["tags"]] == ["Good"]
    assert first["tags"][0]["category"]["name"] == "Condition"
    assert by_serial["D-2"]["tags"] == []


@pytest.mark.parametrize("params, error, message", [
    ({"limit": 0}, "Invalid limit parameter", "Limit must be between 1 and 100"),
    ({"limit": 101}, "Invalid limit parameter", "Limit must be between 1 and 100"),
    ({"offset": -1}, "Invalid offset parameter", "Offset must be 0 or greater"),
    ({"offset": 10 ** 20}, "Invalid offset parameter", "Offset must not exceed 2147483647"),
])
def test_list_resources_rejects_bad_pagination(client, params, error, message):
    response = client.get("/api/resources", params=params)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": error, "message": message}


def test_list_resources_search_covers_model_and_location(client, workshop):
    def serials(search):
        data = client.get("/api/resources", params={"search": search}).json()["data"]
        return sorted(r["serialNumber"] for r in data["resources"])

    assert serials("dewalt") == ["D-1", "D-2"]
    assert serials("metal cutting") == ["S-1"]
    assert serials("drawer1") == ["D-2"]
    assert serials("/shop") == ["D-1", "D-2", "S-1"]
    assert serials("nothing like this") == []


def test_create_resource(client, auth_headers, workshop, tags, db):
    good = tags["Condition"]["Good"]
    available = tags["Status"]["Available"]

    response = client.post("/api/resources", headers=auth_headers, json={
        "modelId": workshop["saw"].id,
        "locationId": workshop["drawer"].id,
        "serialNumber": "S-2",
        "tagIds": [good.id, available.id],
        "quantity": 2,
        "notes": "Blade needs replacing",
    })

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["model"]["name"] == "Band Saw"
    assert data["location"]["path"] == "/Shop/Drawer1"
    assert data["quantity"] == 2
    assert data["condition"] == "good"
    assert sorted(t["name"] for t in data["tags"]) == ["Available", "Good"]
    assert db.query(AuditLog).filter(AuditLog.entity_id == data["id"]).count() == 1


def test_create_resource_requires_model_and_location(client, auth_headers, workshop, db):
    response = client.post("/api/resources", headers=auth_headers, json={"locationId": workshop["shop"].id})

    assert response.status_code == 400
    assert response.json()["message"] == "Model and location are required"
    assert db.query(ResourceInstance).count() == 3


def test_create_resource_validates_references(client, auth_headers, workshop, db):
    cases = [
        ({"modelId": "nope", "locationId": workshop["shop"].id}, "Invalid resource model"),
        ({"modelId": workshop["saw"].id, "locationId": "nope"}, "Invalid location"),
        ({"modelId": workshop["saw"].id, "locationId": workshop["shop"].id, "tagIds": ["nope"]}, "Invalid tag"),
    ]
    for payload, message in cases:
        response = client.post("/api/resources", headers=auth_headers, json=payload)
        assert response.status_code == 400
        assert response.json()["message"] == message

    assert db.query(ResourceInstance).count() == 3


def test_create_resource_requires_authentication(client, workshop, db):
    response = client.post("/api/resources", json={
        "modelId": workshop["saw"].id, "locationId": workshop["shop"].id,
    })

    assert response.status_code == 401
    assert db.query(ResourceInstance).count() == 3


def test_update_resource_replaces_tags(client, auth_headers, workshop, tags, db):
    resource = workshop["resources"][0]
    broken = tags["Condition"]["Broken"]
    maintenance = tags["Status"]["In Maintenance"]

    response = client.patch(f"/api/resources/{resource.id}", headers=auth_headers,
                            json={"tagIds": [broken.id, maintenance.id]})

    assert response.status_code == 200
    assert sorted(t["name"] for t in response.json()["data"]["tags"]) == ["Broken", "In Maintenance"]
    linked = {row.tag_id for row in db.query(ResourceInstanceTag).filter(
        ResourceInstanceTag.instance_id == resource.id)}
    assert linked == {broken.id, maintenance.id}

    response = client.patch(f"/api/resources/{resource.id}", headers=auth_headers, json={"tagIds": []})
    assert response.json()["data"]["tags"] == []


def test_update_resource_keeps_omitted_fields(client, auth_headers, workshop):
    resource = workshop["resources"][0]

    response = client.patch(f"/api/resources/{resource.id}", headers=auth_headers,
                            json={"locationId": workshop["drawer"].id})

    data = response.json()["data"]
    assert data["locationId"] == workshop["drawer"].id
    assert data["location"]["path"] == "/Shop/Drawer1"
    assert data["serialNumber"] == "D-1"
    assert [t["name"] for t in data["tags"]] == ["Good"]

    response = client.patch(f"/api/resources/{resource.id}", headers=auth_headers, json={"serialNumber": None})
    assert response.json()["data"]["serialNumber"] is None


def test_update_resource_validation(client, auth_headers, workshop):
    resource = workshop["resources"][0]

    response = client.patch(f"/api/resources/{resource.id}", headers=auth_headers, json={"locationId": "nope"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid location"

    response = client.patch(f"/api/resources/{resource.id}", headers=auth_headers, json={"tagIds": ["nope"]})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid tag"

    response = client.patch("/api/resources/missing", headers=auth_headers, json={"serialNumber": "X"})
    assert response.status_code == 404
    assert response.json()["message"] == "Resource not found"
