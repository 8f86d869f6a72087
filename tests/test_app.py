from pymongo.errors import ServerSelectionTimeoutError

from easyform.database.db_operations import db_ops


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_options_preflight_is_empty_204(client):
    for path in ("/api/company", "/api/forms", "/api/submissions", "/api/submission-pdf"):
        response = client.options(path, headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        })
        assert response.status_code == 204
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert "PUT" in response.headers["access-control-allow-methods"]


def test_unsupported_method_is_405(client):
    response = client.delete("/api/company")

    assert response.status_code == 405
    assert response.json()["error"] == "method_not_allowed"


def test_unknown_path_is_404(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_malformed_body_is_400(client):
    response = client.post("/api/submissions", json={"companyId": "c1", "formId": "f1", "answers": "nope"})

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_body"


def test_store_failure_is_500_with_message(client, monkeypatch):
    async def unavailable(*args, **kwargs):
        raise ServerSelectionTimeoutError("no servers available")

    monkeypatch.setattr(db_ops, "get_all", unavailable)
    response = client.get("/api/company")

    assert response.status_code == 500
    assert response.json() == {"error": "db_error", "message": "no servers available"}


def test_unexpected_error_is_500_with_cors_headers(client, monkeypatch):
    async def broken(*args, **kwargs):
        raise TypeError("argument of type 'NoneType' is not iterable")

    monkeypatch.setattr(db_ops, "get_all", broken)
    response = client.get("/api/company", headers={"Origin": "http://localhost:3000"})

    assert response.status_code == 500
    assert response.json() == {"error": "internal_error", "message": "argument of type 'NoneType' is not iterable"}
    assert response.headers["access-control-allow-origin"] == "*"
