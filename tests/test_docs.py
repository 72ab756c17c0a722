"""Tests for the generated API documentation."""


def test_docs_ui(client):
    """Test the interactive documentation is served."""
    response = client.get("/docs")

    assert response.status_code == 200
    assert "swagger-ui" in response.text


def test_openapi_schema_lists_product_operations(client):
    """Test every product operation is documented."""
    response = client.get("/docs/openapi.json")

    assert response.status_code == 200
    paths = response.json()["paths"]
    assert set(paths["/api/products"]) == {"get", "post"}
    assert set(paths["/api/products/{id}"]) == {"get", "put", "patch", "delete"}


def test_openapi_documents_id_and_body(client):
    """Test the ID parameter and request bodies are described."""
    paths = client.get("/docs/openapi.json").json()["paths"]

    get_by_id = paths["/api/products/{id}"]["get"]
    assert get_by_id["parameters"][0]["name"] == "id"
    assert get_by_id["parameters"][0]["schema"] == {"type": "integer"}
    assert "400" in get_by_id["responses"]
    assert "404" in get_by_id["responses"]

    create = paths["/api/products"]["post"]
    properties = create["requestBody"]["content"]["application/json"]["schema"]["properties"]
    assert set(properties) == {"name", "price"}

    update = paths["/api/products/{id}"]["put"]
    properties = update["requestBody"]["content"]["application/json"]["schema"]["properties"]
    assert set(properties) == {"name", "price", "availability"}
