def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["trace_id"]


def test_ready(client):
    response = client.get("/ready", headers={"X-Trace-ID": "trace-ready"})
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "trace_id": "trace-ready"}
    assert response.headers["X-Trace-ID"] == "trace-ready"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/safari/nowhere", headers={"X-Trace-ID": "trace-404"})
    assert response.status_code == 404
    assert response.json() == {
        "code": "NOT_FOUND",
        "message": "Not Found",
        "details": None,
        "trace_id": "trace-404",
    }


def test_wrong_method_uses_error_envelope(client):
    response = client.post("/health")
    assert response.status_code == 405
    payload = response.json()
    assert payload["code"] == "METHOD_NOT_ALLOWED"
    assert payload["details"] is None
