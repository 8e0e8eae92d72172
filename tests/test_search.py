import pytest


@pytest.fixture
def stocked(make_location, make_resource_model, make_resource):
    shop = make_location("Shop")
    store = make_location("Store")
    drill = make_resource_model("Cordless Drill", manufacturer="DeWalt")
    saw = make_resource_model("Band Saw")
    for _ in range(3):
        make_resource(drill, shop)
    make_resource(saw, store)
    return {"shop": shop, "store": store}


def test_search_total_is_page_length(client, stocked):
    response = client.get("/api/search", params={"pageSize": 2})

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["instances"]) == 2
    assert data["total"] == 2
    assert data["page"] == 1
    assert data["pageSize"] == 2

    data = client.get("/api/search", params={"pageSize": 3, "page": 2}).json()["data"]
    assert data["total"] == 1


def test_search_by_text_and_location(client, stocked):
    data = client.get("/api/search", params={"q": "dewalt"}).json()["data"]
    assert data["total"] == 3
    assert {i["model"]["name"] for i in data["instances"]} == {"Cordless Drill"}

    data = client.get("/api/search", params={"locationId": stocked["store"].id}).json()["data"]
    assert [i["model"]["name"] for i in data["instances"]] == ["Band Saw"]

    data = client.get("/api/search", params={"q": "saw", "locationId": stocked["shop"].id}).json()["data"]
    assert data["instances"] == []


def test_search_rejects_bad_page(client):
    response = client.get("/api/search", params={"page": 0})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"


def test_search_rejects_page_past_offset_range(client):
    response = client.get("/api/search", params={"page": 10 ** 20})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"
