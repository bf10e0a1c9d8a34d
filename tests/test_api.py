"""End-to-end tests for the /api/v1/netflix-shows endpoints."""

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.database import get_db
from main import app


def create(client, api_path, payload):
    response = client.post(api_path, json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


class TestCreate:
    def test_valid_record(self, client, api_path, make_payload):
        payload = make_payload()

        response = client.post(api_path, json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == 201
        assert body["message"] == "NetflixShow created successfully"
        assert isinstance(body["data"]["id"], int)
        assert {k: body["data"][k] for k in payload} == payload

    def test_id_in_body_is_ignored(self, client, api_path, make_payload):
        first = create(client, api_path, make_payload(id=999))
        assert first["id"] != 999

    def test_invalid_show_type(self, client, api_path, make_payload):
        response = client.post(api_path, json=make_payload(showType="BAD"))

        assert response.status_code == 400
        assert response.json() == {
            "status": 400,
            "message": "Validation failed. Please check your input.",
            "data": {"ShowType": ["ShowType must be either MOVIE or TV_SHOW"]},
        }

    def test_multiple_failures_grouped_and_sorted(self, client, api_path, make_payload):
        response = client.post(api_path, json=make_payload(title="", country="Ünited", rating=11))

        assert response.status_code == 400
        data = response.json()["data"]
        assert list(data) == ["Country", "Rating", "Title"]
        assert data["Title"] == ["Title must not be null or empty"]

    def test_rejected_record_is_not_stored(self, client, api_path, make_payload):
        client.post(api_path, json=make_payload(title=None))
        assert client.get(api_path).status_code == 404

    def test_missing_body(self, client, api_path):
        response = client.post(api_path)

        assert response.status_code == 400
        assert response.json() == {"status": 400, "message": "NetflixShow must not be null", "data": None}

    def test_wrongly_typed_field(self, client, api_path, make_payload):
        response = client.post(api_path, json=make_payload(dateAdded="not-a-date"))

        assert response.status_code == 400
        assert response.json()["data"] is None
        assert "dateAdded" in response.json()["message"]

    def test_boolean_rating_is_rejected(self, client, api_path, make_payload):
        response = client.post(api_path, json=make_payload(rating=True))

        assert response.status_code == 400
        assert "rating" in response.json()["message"]
        assert client.get(api_path).status_code == 404



class TestRead:
    def test_empty_table_is_not_found(self, client, api_path):
        response = client.get(api_path)

        assert response.status_code == 404
        assert response.json() == {"status": 404, "message": "No NetflixShows found", "data": None}

    def test_empty_table_can_list_empty(self, client, api_path):
        app.dependency_overrides[get_settings] = lambda: Settings(EMPTY_LIST_NOT_FOUND=False)

        response = client.get(api_path)

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_list_ordered_by_id(self, client, api_path, make_payload):
        ids = [create(client, api_path, make_payload(title=t))["id"] for t in ("A", "B", "C")]

        response = client.get(api_path)

        assert response.status_code == 200
        assert response.json()["message"] == "NetflixShows retrieved successfully"
        assert [s["id"] for s in response.json()["data"]] == sorted(ids)

    def test_get_by_id(self, client, api_path, make_payload):
        created = create(client, api_path, make_payload())

        response = client.get(f"{api_path}/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"] == created

    def test_get_missing(self, client, api_path):
        response = client.get(f"{api_path}/12345")

        assert response.status_code == 404
        assert response.json() == {"status": 404, "message": "NetflixShow not found", "data": None}

    def test_non_integer_id(self, client, api_path):
        response = client.get(f"{api_path}/abc")

        assert response.status_code == 400
        assert response.json()["status"] == 400


class TestUpdate:
    def test_update_existing(self, client, api_path, make_payload):
        created = create(client, api_path, make_payload())

        response = client.put(
            f"{api_path}/{created['id']}",
            json=make_payload(showType="TV_SHOW", title="Blood & Water", rating=None),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert response.json()["message"] == "NetflixShow updated successfully"
        assert data["id"] == created["id"]
        assert data["showType"] == "TV_SHOW"
        assert data["title"] == "Blood & Water"
        assert data["rating"] is None

    def test_update_missing(self, client, api_path, make_payload):
        response = client.put(f"{api_path}/404", json=make_payload())
        assert response.status_code == 404

    def test_update_validation_failure(self, client, api_path, make_payload):
        created = create(client, api_path, make_payload())

        response = client.put(f"{api_path}/{created['id']}", json=make_payload(country="A" * 61))

        assert response.status_code == 400
        assert response.json()["data"] == {
            "Country": ["Country must be less than or equal to 60 character length"],
        }
        assert client.get(f"{api_path}/{created['id']}").json()["data"]["country"] == "United States"

    def test_update_missing_body(self, client, api_path, make_payload):
        created = create(client, api_path, make_payload())
        response = client.put(f"{api_path}/{created['id']}")
        assert response.status_code == 400


class TestDelete:
    def test_delete_existing(self, client, api_path, make_payload):
        created = create(client, api_path, make_payload())

        response = client.delete(f"{api_path}/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"status": 200, "message": "NetflixShow deleted successfully", "data": None}
        assert client.get(f"{api_path}/{created['id']}").status_code == 404

    def test_delete_missing(self, client, api_path):
        response = client.delete(f"{api_path}/1")
        assert response.status_code == 404
        assert response.json()["message"] == "NetflixShow not found"


class BrokenSession:
    """Session stand-in whose queries fail at the driver level."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT netflix_shows", {}, Exception("disk I/O error"))

    async def get(self, *args, **kwargs):
        raise OperationalError("SELECT netflix_shows", {}, Exception("disk I/O error"))


class TestPersistenceFailures:
    def test_list_failure_is_500(self, client, api_path):
        async def broken_db():
            yield BrokenSession()

        app.dependency_overrides[get_db] = broken_db

        response = client.get(api_path)

        assert response.status_code == 500
        assert response.json() == {
            "status": 500,
            "message": "Failed to get all netflix shows: disk I/O error",
            "data": None,
        }

    def test_get_failure_is_500(self, client, api_path):
        async def broken_db():
            yield BrokenSession()

        app.dependency_overrides[get_db] = broken_db

        response = client.get(f"{api_path}/1")

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to get netflix show by id: disk I/O error"


async def failing_commit(self):
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


class TestFailedWrites:
    def test_create_failure_is_500_and_nothing_stored(self, client, api_path, make_payload, monkeypatch):
        monkeypatch.setattr(AsyncSession, "commit", failing_commit)
        response = client.post(api_path, json=make_payload())
        monkeypatch.undo()

        assert response.status_code == 500
        assert response.json() == {
            "status": 500,
            "message": "Failed to create netflix show: disk I/O error",
            "data": None,
        }
        assert client.get(api_path).status_code == 404

    def test_update_failure_is_500_and_row_unchanged(self, client, api_path, make_payload, monkeypatch):
        created = create(client, api_path, make_payload())

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)
        response = client.put(f"{api_path}/{created['id']}", json=make_payload(title="Blood & Water"))
        monkeypatch.undo()

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to update netflix show: disk I/O error"
        assert client.get(f"{api_path}/{created['id']}").json()["data"] == created

    def test_delete_failure_is_500_and_row_kept(self, client, api_path, make_payload, monkeypatch):
        created = create(client, api_path, make_payload())

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)
        response = client.delete(f"{api_path}/{created['id']}")
        monkeypatch.undo()

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to delete netflix show: disk I/O error"
        assert client.get(f"{api_path}/{created['id']}").status_code == 200



def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_correlation_id_echoed(client, api_path):
    response = client.get(api_path, headers={"X-Correlation-ID": "abc12345"})
    assert response.headers["X-Correlation-ID"] == "abc12345"
