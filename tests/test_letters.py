"""Letter CRUD tests.

Tests cover:
- Required fields on create, with nothing persisted on rejection
- Newest-first listing
- sent_date defaulting to null
- Full-replace updates, including ISO timestamps from the review page
- 404s for unknown ids on get/update/delete
"""

import pytest
from fastapi.testclient import TestClient

from conftest import SAMPLE_LETTER
from letter_system.models.letter import Letter


class TestCreate:
    """POST /api/letters."""

    def test_create_returns_letter_with_null_sent_date(self, client: TestClient):
        response = client.post("/api/letters", json=SAMPLE_LETTER)

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["sent_date"] is None
        for key, value in SAMPLE_LETTER.items():
            assert data[key] == value

    def test_omitted_sent_date_is_stored_as_null(self, client: TestClient, create_letter):
        created = create_letter()

        fetched = client.get(f"/api/letters/{created['id']}").json()

        assert fetched["sent_date"] is None

    def test_sent_date_is_kept_when_given(self, create_letter):
        assert create_letter(sent_date="2024-02-03")["sent_date"] == "2024-02-03"

    @pytest.mark.parametrize("missing", list(SAMPLE_LETTER))
    def test_missing_required_field_is_rejected(self, client: TestClient, db, missing: str):
        body = {k: v for k, v in SAMPLE_LETTER.items() if k != missing}

        response = client.post("/api/letters", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required"}
        assert db.query(Letter).count() == 0

    def test_bad_date_is_rejected(self, client: TestClient, db):
        response = client.post("/api/letters", json={**SAMPLE_LETTER, "letter_date": "yesterday"})

        assert response.status_code == 400
        assert db.query(Letter).count() == 0

    def test_malformed_body_is_a_400(self, client: TestClient):
        response = client.post(
            "/api/letters",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()


class TestList:
    """GET /api/letters and GET /api/letters/{id}."""

    def test_empty_table_gives_empty_list(self, client: TestClient):
        response = client.get("/api/letters")

        assert response.status_code == 200
        assert response.json() == []

    def test_newest_first(self, client: TestClient, create_letter):
        first = create_letter(address="L1")
        second = create_letter(address="L2")

        ids = [row["id"] for row in client.get("/api/letters").json()]

        assert ids == [second["id"], first["id"]]

    def test_get_unknown_id(self, client: TestClient):
        response = client.get("/api/letters/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Letter not found"}


class TestUpdate:
    """PUT /api/letters/{id}."""

    def test_update_sent_date(self, client: TestClient, create_letter):
        created = create_letter()

        response = client.put(
            f"/api/letters/{created['id']}",
            json={**SAMPLE_LETTER, "sent_date": "2024-01-05"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Letter updated successfully"}
        fetched = client.get(f"/api/letters/{created['id']}").json()
        assert fetched["sent_date"] == "2024-01-05"

    def test_update_accepts_iso_timestamps(self, client: TestClient, create_letter):
        created = create_letter()
        payload = {
            **created,
            "letter_date": "2024-03-10T00:00:00.000Z",
            "sent_date": "2024-03-12T00:00:00.000Z",
            "details": "Closed",
        }

        assert client.put(f"/api/letters/{created['id']}", json=payload).status_code == 200

        fetched = client.get(f"/api/letters/{created['id']}").json()
        assert fetched["letter_date"] == "2024-03-10"
        assert fetched["sent_date"] == "2024-03-12"
        assert fetched["details"] == "Closed"

    def test_update_clears_sent_date_when_null(self, client: TestClient, create_letter):
        created = create_letter(sent_date="2024-01-05")

        client.put(f"/api/letters/{created['id']}", json={**SAMPLE_LETTER, "sent_date": None})

        assert client.get(f"/api/letters/{created['id']}").json()["sent_date"] is None

    def test_update_unknown_id_leaves_store_unchanged(self, client: TestClient, create_letter):
        created = create_letter()
        before = client.get("/api/letters").json()

        response = client.put("/api/letters/999", json={**SAMPLE_LETTER, "address": "Elsewhere"})

        assert response.status_code == 404
        assert response.json() == {"error": "Letter not found"}
        assert client.get("/api/letters").json() == before
        assert before[0]["id"] == created["id"]

    def test_partial_body_is_a_full_replace(self, client: TestClient, create_letter):
        # address omitted -> written as NULL -> rejected by the NOT NULL column
        created = create_letter()
        body = {k: v for k, v in SAMPLE_LETTER.items() if k != "address"}

        response = client.put(f"/api/letters/{created['id']}", json=body)

        assert response.status_code == 500
        assert response.json() == {"error": "Database update error"}
        assert client.get(f"/api/letters/{created['id']}").json()["address"] == "HQ"


class TestDelete:
    """DELETE /api/letters/{id}."""

    def test_delete(self, client: TestClient, create_letter):
        created = create_letter()

        response = client.delete(f"/api/letters/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Letter deleted successfully"}
        assert client.get(f"/api/letters/{created['id']}").status_code == 404

    def test_delete_unknown_id(self, client: TestClient):
        response = client.delete("/api/letters/999")

        assert response.status_code == 404


class TestNonNumericIds:
    """An id that cannot be a row id is reported like an unknown one."""

    def test_get(self, client: TestClient):
        response = client.get("/api/letters/abc")

        assert response.status_code == 404
        assert response.json() == {"error": "Letter not found"}

    def test_put(self, client: TestClient, create_letter):
        create_letter()
        before = client.get("/api/letters").json()

        response = client.put("/api/letters/abc", json=SAMPLE_LETTER)

        assert response.status_code == 404
        assert response.json() == {"error": "Letter not found"}
        assert client.get("/api/letters").json() == before

    def test_delete(self, client: TestClient, create_letter):
        create_letter()

        response = client.delete("/api/letters/abc")

        assert response.status_code == 404
        assert response.json() == {"error": "Letter not found"}
        assert len(client.get("/api/letters").json()) == 1


class TestDateParsing:
    """Date fields must be a whole date or timestamp, nothing more."""

    @pytest.mark.parametrize("value", ["2024-01-01 nonsense", "2024-01-01XYZ"])
    def test_trailing_junk_is_rejected(self, client: TestClient, db, value: str):
        response = client.post("/api/letters", json={**SAMPLE_LETTER, "letter_date": value})

        assert response.status_code == 400
        assert db.query(Letter).count() == 0

    def test_trailing_junk_on_update_leaves_row_alone(self, client: TestClient, create_letter):
        created = create_letter(sent_date="2024-01-02")

        response = client.put(
            f"/api/letters/{created['id']}",
            json={**SAMPLE_LETTER, "sent_date": "2024-01-05 later"},
        )

        assert response.status_code == 400
        assert client.get(f"/api/letters/{created['id']}").json()["sent_date"] == "2024-01-02"

    @pytest.mark.parametrize(
        "value",
        ["2024-01-05", "2024-01-05T00:00:00.000Z", "2024-01-05T09:30:00+05:30"],
    )
    def test_dates_and_timestamps_keep_the_calendar_date(self, create_letter, value: str):
        assert create_letter(sent_date=value)["sent_date"] == "2024-01-05"
