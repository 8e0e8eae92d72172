from sqlalchemy import text


def test_create_resource_model(client, auth_headers):
    response = client.post("/api/resource-models", headers=auth_headers, json={
        "name": "Cordless Drill",
        "manufacturer": "DeWalt",
        "modelNumber": "DCD771",
        "description": "",
    })

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Cordless Drill"
    assert data["modelNumber"] == "DCD771"
    assert data["description"] is None


def test_create_resource_model_requires_name(client, auth_headers):
    response = client.post("/api/resource-models", headers=auth_headers, json={"manufacturer": "DeWalt"})

    assert response.status_code == 400
    assert response.json()["message"] == "Name is required"


def test_create_resource_model_requires_authentication(client):
    response = client.post("/api/resource-models", json={"name": "Cordless Drill"})

    assert response.status_code == 401


def test_search_resource_models(client, make_resource_model):
    make_resource_model("Cordless Drill", manufacturer="DeWalt")
    make_resource_model("Band Saw", description="14 inch saw with a drill press attachment")
    make_resource_model("Soldering Iron", manufacturer="Hakko")

    response = client.get("/api/resource-models", params={"search": "DRILL"})
    assert [m["name"] for m in response.json()["data"]] == ["Band Saw", "Cordless Drill"]

    response = client.get("/api/resource-models", params={"search": "hakko"})
    assert [m["name"] for m in response.json()["data"]] == ["Soldering Iron"]

    response = client.get("/api/resource-models")
    assert len(response.json()["data"]) == 3


def test_list_resource_models_reports_storage_failure(client, db):
    db.execute(text("DROP TABLE resource_models"))
    db.commit()

    response = client.get("/api/resource-models", params={"search": "drill"})

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Failed to fetch resource models"
