"""
Tests for health endpoints.
"""


def test_health(client):
    """Health endpoint answers ok"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_db_status(client):
    """Database status reports both storage features"""
    response = client.get("/db-status")
    data = response.json()
    assert data["status"] == "online"
    assert data["last_error"] is None
    assert data["comment_work"] is True
    assert data["mime_work"] is True
