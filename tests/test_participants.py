import uuid
from datetime import datetime, timedelta

import pytest

from hackathon_api.dependencies import get_store
from hackathon_api.errors import Conflict, InvalidId, InvalidParameters, NotFound, ValidationFailed
from hackathon_api.models.participant import Participant, ParticipantTechTag
from hackathon_api.services import validation_service
from hackathon_api.services.participant_store import ParticipantStore
from hackathon_api.services.query_service import ParticipantFilter


def _create(client, payload):
    response = client.post("/api/participants", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def _seed_many(db_session, participant_payload, total: int):
    store = ParticipantStore(db_session)
    base = datetime(2026, 1, 1, 9, 0, 0)
    for index in range(total):
        data = validation_service.validate(
            participant_payload(
                email=f"user{index}@example.com",
                tech_stack=["AI/ML"] if index % 2 else ["IoT"],
                degree="BCA" if index % 5 == 0 else "B.Tech",
            )
        ).data
        participant = store.create(data)
        participant.registration_date = base + timedelta(minutes=index)
    db_session.commit()


def test_create_participant_returns_stored_record(client, participant_payload):
    response = client.post("/api/participants", json=participant_payload(tech_stack='["AI/ML","IoT"]'))

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    uuid.UUID(data["id"])
    assert data["tech_stack"] == ["AI/ML", "IoT"]
    assert data["cgpa"] == 8.5
    assert data["verification_status"] == "pending"
    assert data["registration_date"]
    assert data["created_at"]


def test_create_reports_all_validation_errors(client):
    response = client.post("/api/participants", json={"email": "bad", "tech_stack": "nope"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "Full name is required" in body["error"]
    assert "Please provide a valid email" in body["error"]
    assert "Invalid tech_stack format" in body["error"]


def test_create_ignores_supplied_verification_status(client, participant_payload):
    data = _create(client, participant_payload(verification_status="verified"))

    assert data["verification_status"] == "pending"


def test_duplicate_email_is_rejected_and_only_one_record_kept(client, participant_payload, db_session):
    _create(client, participant_payload())

    response = client.post("/api/participants", json=participant_payload(full_name="Someone Else"))

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "A participant with this email already exists"}
    assert db_session.query(Participant).count() == 1


def test_get_participant(client, participant_payload):
    created = _create(client, participant_payload())

    response = client.get(f"/api/participants/{created['id']}")

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "priya.patel@example.com"


def test_get_participant_distinguishes_malformed_and_missing_ids(client):
    missing = client.get(f"/api/participants/{uuid.uuid4()}")
    malformed = client.get("/api/participants/not-a-valid-id")

    assert missing.status_code == 404
    assert missing.json()["error"] == "Participant not found"
    assert malformed.status_code == 400
    assert malformed.json()["error"] == "Invalid participant ID"


def test_update_applies_partial_patch(client, participant_payload):
    created = _create(client, participant_payload())

    response = client.put(
        f"/api/participants/{created['id']}",
        json={"cgpa": "9.2", "tech_stack": '["Blockchain"]', "verification_status": "verified"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["cgpa"] == 9.2
    assert data["tech_stack"] == ["Blockchain"]
    assert data["full_name"] == "Priya Patel"
    assert data["verification_status"] == "pending"


def test_update_cannot_produce_invalid_record(client, participant_payload):
    created = _create(client, participant_payload())

    response = client.put(
        f"/api/participants/{created['id']}",
        json={"tech_stack": [], "cgpa": 11, "full_name": ""},
    )

    assert response.status_code == 400
    assert response.json()["error"] == [
        "Full name is required",
        "CGPA must be between 0 and 10",
        "Please select at least one tech stack",
    ]
    unchanged = client.get(f"/api/participants/{created['id']}").json()["data"]
    assert unchanged["tech_stack"] == ["AI/ML", "IoT"]


def test_update_rejects_email_held_by_another_participant(client, participant_payload):
    _create(client, participant_payload(email="first@example.com"))
    second = _create(client, participant_payload(email="second@example.com"))

    response = client.put(f"/api/participants/{second['id']}", json={"email": "first@example.com"})

    assert response.status_code == 400
    assert response.json()["error"] == "A participant with this email already exists"


def test_update_missing_and_malformed_ids(client):
    assert client.put(f"/api/participants/{uuid.uuid4()}", json={"cgpa": 5}).status_code == 404
    assert client.put("/api/participants/123", json={"cgpa": 5}).status_code == 400


def test_delete_participant(client, participant_payload, db_session):
    created = _create(client, participant_payload())

    response = client.delete(f"/api/participants/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {}}
    assert db_session.query(Participant).count() == 0
    assert db_session.query(ParticipantTechTag).count() == 0


def test_delete_missing_is_not_found_and_malformed_is_invalid_id(client):
    missing = client.delete(f"/api/participants/{uuid.uuid4()}")
    malformed = client.delete("/api/participants/zzz")

    assert missing.status_code == 404
    assert missing.json()["error"] == "Participant not found"
    assert malformed.status_code == 400
    assert malformed.json()["error"] == "Invalid participant ID"


def test_verify_sets_status_only(client, participant_payload):
    created = _create(client, participant_payload())

    response = client.patch(
        f"/api/participants/{created['id']}/verify",
        json={"type": "github", "status": "verified"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["verification_status"] == "verified"
    assert data["full_name"] == created["full_name"]


@pytest.mark.parametrize(
    "body",
    [
        {"type": "twitter", "status": "verified"},
        {"type": "github", "status": "pending"},
        {},
    ],
)
def test_verify_rejects_invalid_parameters_before_lookup(client, body):
    response = client.patch(f"/api/participants/{uuid.uuid4()}/verify", json=body)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid verification parameters"


def test_verify_unknown_participant(client):
    response = client.patch(
        f"/api/participants/{uuid.uuid4()}/verify",
        json={"type": "linkedin", "status": "rejected"},
    )

    assert response.status_code == 404


def test_list_paginates_most_recent_first(client, participant_payload, db_session):
    _seed_many(db_session, participant_payload, 25)

    first = client.get("/api/participants", params={"limit": 10}).json()
    third = client.get("/api/participants", params={"page": 3, "limit": 10}).json()

    assert first["count"] == 10
    assert first["pagination"]["next"] == {"page": 2, "limit": 10}
    assert "prev" not in first["pagination"]
    assert first["pagination"]["total"] == 3
    assert first["pagination"]["count"] == 25
    assert first["data"][0]["email"] == "user24@example.com"

    assert third["count"] == 5
    assert third["pagination"]["prev"] == {"page": 2, "limit": 10}
    assert "next" not in third["pagination"]
    assert third["pagination"]["current"] == 3
    assert third["data"][-1]["email"] == "user0@example.com"


def test_list_tolerates_junk_paging_params(client, participant_payload, db_session):
    _seed_many(db_session, participant_payload, 3)

    response = client.get("/api/participants", params={"page": "abc", "limit": "many"})

    assert response.status_code == 200
    assert response.json()["count"] == 3


def test_list_filters_by_any_tag_degree_and_year(client, participant_payload):
    _create(client, participant_payload(email="a@example.com", tech_stack=["AI/ML", "IoT"], degree="MCA"))
    _create(client, participant_payload(email="b@example.com", tech_stack=["Blockchain"], year_of_study="1st"))
    _create(client, participant_payload(email="c@example.com", tech_stack=["IoT"]))

    by_tags = client.get("/api/participants", params={"tech_stack": "IoT,Blockchain"}).json()
    by_degree = client.get("/api/participants", params={"degree": "MCA"}).json()
    by_year = client.get("/api/participants", params={"year_of_study": "1st"}).json()

    assert by_tags["pagination"]["count"] == 3
    assert [row["email"] for row in by_degree["data"]] == ["a@example.com"]
    assert [row["email"] for row in by_year["data"]] == ["b@example.com"]


def test_store_errors_are_typed(db_session, participant_payload):
    store = ParticipantStore(db_session)
    data = validation_service.validate(participant_payload()).data
    participant = store.create(data)

    with pytest.raises(Conflict):
        store.create(data)
    with pytest.raises(InvalidId):
        store.get_by_id("nope")
    with pytest.raises(NotFound):
        store.delete(str(uuid.uuid4()))
    with pytest.raises(InvalidParameters):
        store.set_verification_status(participant.id, "github", "pending")
    with pytest.raises(ValidationFailed) as excinfo:
        store.update(participant.id, {"phone_number": "12"})
    assert excinfo.value.messages == ["Phone number must be 10 digits"]


def test_store_list_and_count_share_filters(db_session, participant_payload):
    _seed_many(db_session, participant_payload, 10)
    store = ParticipantStore(db_session)
    query_filter = ParticipantFilter(tech_stack=["AI/ML"])

    assert store.count(query_filter) == 5
    assert len(store.list(query_filter)) == 5
    assert len(store.list()) == 10


def test_list_with_huge_page_returns_empty_page(client, participant_payload, db_session):
    _seed_many(db_session, participant_payload, 3)

    response = client.get("/api/participants", params={"page": "99999999999999999999"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 0
    assert body["data"] == []
    assert body["pagination"]["count"] == 3
    assert "next" not in body["pagination"]


def test_racing_insert_with_same_email_becomes_conflict(db_session, participant_payload, monkeypatch):
    store = ParticipantStore(db_session)
    data = validation_service.validate(participant_payload()).data
    store.create(data)
    monkeypatch.setattr(store, "_email_taken", lambda email, exclude_id=None: False)

    with pytest.raises(Conflict):
        store.create(data)
    assert db_session.query(Participant).count() == 1


class _BrokenStore:
    def count(self, filters):
        raise RuntimeError("database exploded at /var/lib/secret.db")

    def get_by_id(self, participant_id):
        raise RuntimeError("database exploded at /var/lib/secret.db")


def test_unexpected_errors_return_generic_server_error(client):
    client.app.dependency_overrides[get_store] = lambda: _BrokenStore()

    listing = client.get("/api/participants")
    single = client.get(f"/api/participants/{uuid.uuid4()}")

    for response in (listing, single):
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Server Error"}
