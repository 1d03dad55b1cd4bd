"""
Tests for journal API endpoints.

These test the HTTP layer: status codes, response format
and error handling. Business logic is tested in
test_journal_service.py. The journal starts with the two
posted demo entries (je-1, je-2).
"""

import re


def draft_payload(debit=100, credit=100, **overrides):
    payload = {
        "date": "2024-06-03",
        "description": "Bürobedarf",
        "lines": [
            {"accountNumber": "4930", "accountName": "Bürobedarf", "debit": debit},
            {"accountNumber": "1200", "accountName": "Bank", "credit": credit},
        ],
        "createdBy": "Erika Musterfrau",
    }
    payload.update(overrides)
    return payload


def create_draft(client, **kwargs):
    response = client.post("/journal/entries", json=draft_payload(**kwargs))
    assert response.status_code == 201
    return response.json()


class TestCreateEntry:

    def test_create_returns_201_with_derived_fields(self, client):
        expected_number = client.get("/journal/next-entry-number").json()["entryNumber"]

        response = client.post("/journal/entries", json=draft_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["entryNumber"] == expected_number
        assert re.fullmatch(r"BU-\d{4}-\d{4}", data["entryNumber"])
        assert data["status"] == "draft"
        assert data["type"] == "standard"
        assert data["totalDebit"] == 100
        assert data["isBalanced"] is True
        assert data["postingDate"] == "2024-06-03"

    def test_unbalanced_draft_is_accepted(self, client):
        data = create_draft(client, debit=100, credit=90)
        assert data["isBalanced"] is False

    def test_line_with_both_sides_returns_422(self, client):
        payload = draft_payload()
        payload["lines"][0]["credit"] = 5
        response = client.post("/journal/entries", json=payload)
        assert response.status_code == 422

    def test_missing_created_by_returns_422(self, client):
        payload = draft_payload()
        del payload["createdBy"]
        response = client.post("/journal/entries", json=payload)
        assert response.status_code == 422

    def test_created_entry_is_persisted(self, client):
        data = create_draft(client)
        response = client.get(f"/journal/entries/{data['id']}")
        assert response.status_code == 200
        assert response.json()["description"] == "Bürobedarf"


class TestGetEntries:

    def test_seeded_demo_entries(self, client):
        response = client.get("/journal/entries")
        assert response.status_code == 200
        numbers = [e["entryNumber"] for e in response.json()]
        assert numbers == ["BU-2024-0001", "BU-2024-0002"]

    def test_filter_by_status(self, client):
        draft = create_draft(client)
        response = client.get("/journal/entries", params={"status": "draft"})
        assert [e["id"] for e in response.json()] == [draft["id"]]

    def test_filter_by_search_and_dates(self, client):
        response = client.get("/journal/entries", params={"search": "schmidt"})
        assert [e["id"] for e in response.json()] == ["je-2"]

        response = client.get("/journal/entries", params={
            "start_date": "2024-01-16", "end_date": "2024-01-31",
        })
        assert [e["id"] for e in response.json()] == ["je-2"]

    def test_invalid_status_returns_422(self, client):
        response = client.get("/journal/entries", params={"status": "archived"})
        assert response.status_code == 422

    def test_nonexistent_entry_returns_404(self, client):
        response = client.get("/journal/entries/je-missing")
        assert response.status_code == 404


class TestUpdateEntry:

    def test_update_draft(self, client):
        draft = create_draft(client, debit=100, credit=90)
        response = client.patch(f"/journal/entries/{draft['id']}", json={
            "lines": [
                {"accountNumber": "4930", "debit": 90},
                {"accountNumber": "1200", "credit": 90},
            ],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["isBalanced"] is True
        assert data["entryNumber"] == draft["entryNumber"]

    def test_update_posted_returns_409(self, client):
        response = client.patch("/journal/entries/je-1", json={"description": "x"})
        assert response.status_code == 409

    def test_update_missing_returns_404(self, client):
        response = client.patch("/journal/entries/je-missing", json={"description": "x"})
        assert response.status_code == 404


class TestPostEntry:

    def test_post_balanced_draft(self, client):
        draft = create_draft(client)
        response = client.post(
            f"/journal/entries/{draft['id']}/post", json={"postedBy": "Max"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "posted"
        assert data["postedBy"] == "Max"
        assert data["postedAt"] is not None

    def test_post_unbalanced_returns_422(self, client):
        draft = create_draft(client, debit=100, credit=90)
        response = client.post(
            f"/journal/entries/{draft['id']}/post", json={"postedBy": "Max"}
        )
        assert response.status_code == 422
        assert "does not balance" in response.json()["detail"]

    def test_post_twice_returns_409(self, client):
        draft = create_draft(client)
        client.post(f"/journal/entries/{draft['id']}/post", json={"postedBy": "Max"})
        response = client.post(
            f"/journal/entries/{draft['id']}/post", json={"postedBy": "Max"}
        )
        assert response.status_code == 409

    def test_post_missing_returns_404(self, client):
        response = client.post("/journal/entries/je-missing/post", json={"postedBy": "Max"})
        assert response.status_code == 404


class TestReverseEntry:

    def test_reverse_posted_entry(self, client):
        response = client.post("/journal/entries/je-1/reverse", json={
            "reversedBy": "Max", "reversalDate": "2024-02-01",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["type"] == "reversal"
        assert data["status"] == "posted"
        assert data["reference"] == "BU-2024-0001"
        assert data["description"] == "Storno: Wareneingang Lieferant Müller"
        assert data["totalDebit"] == 5950
        assert [l["credit"] for l in data["lines"]] == [5000, 950, 0]

        original = client.get("/journal/entries/je-1").json()
        assert original["status"] == "reversed"

    def test_reverse_draft_returns_409(self, client):
        draft = create_draft(client)
        response = client.post(f"/journal/entries/{draft['id']}/reverse", json={
            "reversedBy": "Max", "reversalDate": "2024-02-01",
        })
        assert response.status_code == 409

    def test_reverse_requires_date(self, client):
        response = client.post("/journal/entries/je-1/reverse", json={
            "reversedBy": "Max",
        })
        assert response.status_code == 422


class TestDeleteEntry:

    def test_delete_draft_returns_204(self, client):
        draft = create_draft(client)
        response = client.delete(f"/journal/entries/{draft['id']}")
        assert response.status_code == 204
        assert client.get(f"/journal/entries/{draft['id']}").status_code == 404

    def test_delete_posted_returns_409(self, client):
        response = client.delete("/journal/entries/je-1")
        assert response.status_code == 409
        assert client.get("/journal/entries/je-1").json()["status"] == "posted"

    def test_delete_missing_returns_404(self, client):
        response = client.delete("/journal/entries/je-missing")
        assert response.status_code == 404


class TestReports:

    def test_summary(self, client):
        create_draft(client)
        data = client.get("/journal/summary").json()
        assert data == {
            "totalEntries": 3,
            "draftEntries": 1,
            "postedEntries": 2,
            "totalDebit": 17850,
        }

    def test_balances(self, client):
        response = client.get("/journal/balances")
        assert response.status_code == 200
        rows = {r["accountNumber"]: r for r in response.json()}
        assert rows["8400"]["balance"] == -10000
        assert rows["8400"]["balanceType"] == "credit"
        assert rows["1200"]["balanceType"] == "debit"

    def test_integrity(self, client):
        data = client.get("/journal/integrity").json()
        assert data["isBalanced"] is True
        assert data["totalDebit"] == 17850

    def test_export(self, client):
        response = client.get("/journal/export")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        lines = response.text.split("\n")
        assert lines[0] == "Buchungsnr;Datum;Typ;Status;Beschreibung;Konto;Soll;Haben"
        assert len(lines) == 7
