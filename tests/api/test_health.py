"""
Tests for the health check endpoint.
"""


def test_health_check_returns_200(client):
    """Can the application receive a request and respond at all?"""
    response = client.get("/health")
    assert response.status_code == 200


def test_health_check_returns_service_name(client):
    """
    Verify the response includes the correct service name.

    This catches accidental changes to the response format
    that could break monitoring systems that parse this field.
    """
    response = client.get("/health")
    data = response.json()
    assert data["service"] == "journal-ledger"


def test_health_check_reports_database_status(client):
    response = client.get("/health")
    data = response.json()
    assert data["database"] == "healthy"
    assert data["status"] == "healthy"
