"""Leader rotation scheduling and the rotation endpoints."""

from types import SimpleNamespace

import pytest

from worship_api.domain.leader_rotations.scheduler import LeaderScheduler, leader_at, next_rotation_index
from worship_api.models import Role, Service
from worship_api.shared.time_utils import utcnow


def rotation(user_id):
    return SimpleNamespace(user_id=user_id)


# --- Pure scheduling ---

def test_next_rotation_index_without_history():
    rotations = [rotation("a"), rotation("b"), rotation("c")]
    assert next_rotation_index(rotations, None) == 0


def test_next_rotation_index_follows_last_leader():
    rotations = [rotation("a"), rotation("b"), rotation("c")]
    assert next_rotation_index(rotations, "a") == 1
    assert next_rotation_index(rotations, "c") == 0


def test_next_rotation_index_unknown_leader_restarts():
    assert next_rotation_index([rotation("a"), rotation("b")], "zzz") == 0
    assert next_rotation_index([], "a") == 0


def test_leader_at_wraps_around():
    rotations = [rotation("a"), rotation("b")]
    assert [leader_at(rotations, i) for i in range(5)] == ["a", "b", "a", "b", "a"]
    assert leader_at([], 3) is None


# --- API ---

@pytest.fixture
def two_leaders(make_user):
    first = make_user("First Leader", roles=(Role.leader,))
    second = make_user("Second Leader", roles=(Role.leader,))
    return first, second


def add_rotation(client, admin, service_type_id, user_id, order):
    resp = client.post(
        "/leader-rotations",
        json={"userId": user_id, "serviceTypeId": service_type_id, "rotationOrder": order},
        headers=admin["headers"],
    )
    assert resp.status_code == 201, resp.json()
    return resp.json()["data"]


def set_leaders(db, service_type_id):
    db.expire_all()
    services = (
        db.query(Service)
        .filter(Service.service_type_id == service_type_id)
        .order_by(Service.service_date.asc())
        .all()
    )
    return [s.worship_set.leader_user_id for s in services]


def test_rotation_requires_leader_role(client, admin, service_type, musician):
    resp = client.post(
        "/leader-rotations",
        json={"userId": musician["id"], "serviceTypeId": service_type["id"], "rotationOrder": 1},
        headers=admin["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "User must have leader role to be added to rotation"


def test_duplicate_rotation_order(client, admin, service_type, two_leaders):
    first, second = two_leaders
    add_rotation(client, admin, service_type["id"], first["id"], 1)
    resp = client.post(
        "/leader-rotations",
        json={"userId": second["id"], "serviceTypeId": service_type["id"], "rotationOrder": 1},
        headers=admin["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Rotation order already exists for this service type"


def test_rotation_writes_require_admin(client, leader, service_type):
    resp = client.post(
        "/leader-rotations",
        json={"userId": leader["id"], "serviceTypeId": service_type["id"], "rotationOrder": 1},
        headers=leader["headers"],
    )
    assert resp.status_code == 403


def test_next_leader(client, admin, service_type, two_leaders):
    resp = client.get(f"/leader-rotations/next/{service_type['id']}", headers=admin["headers"])
    assert resp.status_code == 404

    first, second = two_leaders
    add_rotation(client, admin, service_type["id"], first["id"], 1)
    add_rotation(client, admin, service_type["id"], second["id"], 2)

    resp = client.get(f"/leader-rotations/next/{service_type['id']}", headers=admin["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["userId"] == first["id"]


def test_generated_services_follow_rotation(client, db, admin, service_type, two_leaders):
    first, second = two_leaders
    add_rotation(client, admin, service_type["id"], first["id"], 1)
    add_rotation(client, admin, service_type["id"], second["id"], 2)

    year = utcnow().year + 1
    resp = client.post(
        f"/serviceTypes/{service_type['id']}/generate-services",
        json={"year": year},
        headers=admin["headers"],
    )
    assert resp.status_code == 201
    payload = resp.json()["data"]
    assert payload["created"] in (52, 53)
    assert payload["skipped"] == 0
    assert payload["leadersAssigned"] == payload["created"]

    leaders = set_leaders(db, service_type["id"])
    assert leaders[:4] == [first["id"], second["id"], first["id"], second["id"]]

    again = client.post(
        f"/serviceTypes/{service_type['id']}/generate-services",
        json={"year": year},
        headers=admin["headers"],
    )
    assert again.status_code == 200
    assert again.json()["data"]["created"] == 0
    assert again.json()["data"]["message"] == "All services for this year already exist"


def test_reorder_recalculates_future_leaders(client, db, admin, service_type, two_leaders):
    first, second = two_leaders
    r1 = add_rotation(client, admin, service_type["id"], first["id"], 1)
    r2 = add_rotation(client, admin, service_type["id"], second["id"], 2)
    client.post(
        f"/serviceTypes/{service_type['id']}/generate-services",
        json={"year": utcnow().year + 1},
        headers=admin["headers"],
    )

    resp = client.put(
        "/leader-rotations/reorder",
        json={"serviceTypeId": service_type["id"], "rotationIds": [r2["id"], r1["id"]]},
        headers=admin["headers"],
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [(r["id"], r["rotationOrder"]) for r in data] == [(r2["id"], 1), (r1["id"], 2)]

    leaders = set_leaders(db, service_type["id"])
    assert leaders[:3] == [second["id"], first["id"], second["id"]]


def test_reorder_rejects_foreign_ids(client, admin, service_type, two_leaders):
    first, _ = two_leaders
    r1 = add_rotation(client, admin, service_type["id"], first["id"], 1)
    bogus = "00000000-0000-4000-8000-000000000000"
    resp = client.put(
        "/leader-rotations/reorder",
        json={"serviceTypeId": service_type["id"], "rotationIds": [r1["id"], bogus]},
        headers=admin["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["invalidIds"] == [bogus]


def test_reorder_requires_array(client, admin, service_type):
    resp = client.put(
        "/leader-rotations/reorder",
        json={"serviceTypeId": service_type["id"], "rotationIds": "nope"},
        headers=admin["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "serviceTypeId and rotationIds array are required"


def test_delete_rotation_is_soft_and_recalculates(client, db, admin, service_type, two_leaders):
    first, second = two_leaders
    r1 = add_rotation(client, admin, service_type["id"], first["id"], 1)
    add_rotation(client, admin, service_type["id"], second["id"], 2)
    client.post(
        f"/serviceTypes/{service_type['id']}/generate-services",
        json={"year": utcnow().year + 1},
        headers=admin["headers"],
    )

    resp = client.delete(f"/leader-rotations/{r1['id']}", headers=admin["headers"])
    assert resp.status_code == 204

    still_there = client.get(f"/leader-rotations/{r1['id']}", headers=admin["headers"])
    assert still_there.status_code == 200
    assert still_there.json()["data"]["isActive"] is False

    active = client.get(f"/leader-rotations/by-service-type/{service_type['id']}", headers=admin["headers"])
    assert [r["userId"] for r in active.json()["data"]] == [second["id"]]

    assert set(set_leaders(db, service_type["id"])) == {second["id"]}


def generate_next_year(client, admin, service_type_id):
    resp = client.post(
        f"/serviceTypes/{service_type_id}/generate-services",
        json={"year": utcnow().year + 1},
        headers=admin["headers"],
    )
    assert resp.status_code == 201, resp.json()


def test_deleting_last_rotation_clears_future_leaders(client, db, admin, service_type, two_leaders):
    first, _ = two_leaders
    r1 = add_rotation(client, admin, service_type["id"], first["id"], 1)
    generate_next_year(client, admin, service_type["id"])
    assert set(set_leaders(db, service_type["id"])) == {first["id"]}

    assert client.delete(f"/leader-rotations/{r1['id']}", headers=admin["headers"]).status_code == 204
    assert set(set_leaders(db, service_type["id"])) == {None}


def test_update_rotation_order_recalculates(client, db, admin, service_type, two_leaders):
    first, second = two_leaders
    r1 = add_rotation(client, admin, service_type["id"], first["id"], 1)
    add_rotation(client, admin, service_type["id"], second["id"], 2)
    generate_next_year(client, admin, service_type["id"])

    resp = client.put(f"/leader-rotations/{r1['id']}", json={"rotationOrder": 3}, headers=admin["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["rotationOrder"] == 3
    assert set_leaders(db, service_type["id"])[:3] == [second["id"], first["id"], second["id"]]

    resp = client.put(f"/leader-rotations/{r1['id']}", json={"rotationOrder": 2}, headers=admin["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Rotation order already exists for this service type"


def test_next_leader_follows_last_led_service(client, db, admin, service_type, two_leaders):
    first, second = two_leaders
    add_rotation(client, admin, service_type["id"], first["id"], 1)
    add_rotation(client, admin, service_type["id"], second["id"], 2)
    generate_next_year(client, admin, service_type["id"])

    last_leader = set_leaders(db, service_type["id"])[-1]
    expected = second["id"] if last_leader == first["id"] else first["id"]

    resp = client.get(f"/leader-rotations/next/{service_type['id']}", headers=admin["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["userId"] == expected
    assert resp.json()["data"]["user"]["id"] == expected


def test_recalculate_counts_every_future_set(client, db, admin, service_type, two_leaders):
    first, _ = two_leaders
    add_rotation(client, admin, service_type["id"], first["id"], 1)
    generate_next_year(client, admin, service_type["id"])

    # Leaders are already in place, the sets are still counted
    future_sets = len(set_leaders(db, service_type["id"]))
    assert LeaderScheduler(db).recalculate(service_type["id"]) == future_sets


def test_deleted_rotation_frees_its_order(client, make_user, admin, service_type, two_leaders):
    first, second = two_leaders
    r1 = add_rotation(client, admin, service_type["id"], first["id"], 1)
    r2 = add_rotation(client, admin, service_type["id"], second["id"], 2)
    assert client.delete(f"/leader-rotations/{r1['id']}", headers=admin["headers"]).status_code == 204

    resp = client.put(
        "/leader-rotations/reorder",
        json={"serviceTypeId": service_type["id"], "rotationIds": [r2["id"]]},
        headers=admin["headers"],
    )
    assert resp.status_code == 200
    assert [(r["id"], r["rotationOrder"]) for r in resp.json()["data"]] == [(r2["id"], 1)]

    third = make_user("Third Leader", roles=(Role.leader,))
    r3 = add_rotation(client, admin, service_type["id"], third["id"], 2)
    assert r3["rotationOrder"] == 2

    resp = client.put(
        "/leader-rotations/reorder",
        json={"serviceTypeId": service_type["id"], "rotationIds": [r3["id"], r2["id"]]},
        headers=admin["headers"],
    )
    assert resp.status_code == 200
    assert [r["id"] for r in resp.json()["data"]] == [r3["id"], r2["id"]]


def test_reactivated_rotation_joins_the_end(client, admin, service_type, two_leaders):
    first, second = two_leaders
    r1 = add_rotation(client, admin, service_type["id"], first["id"], 1)
    add_rotation(client, admin, service_type["id"], second["id"], 2)

    resp = client.put(f"/leader-rotations/{r1['id']}", json={"isActive": False}, headers=admin["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["isActive"] is False

    resp = client.put(f"/leader-rotations/{r1['id']}", json={"isActive": True}, headers=admin["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["rotationOrder"] == 3

    active = client.get(f"/leader-rotations/by-service-type/{service_type['id']}", headers=admin["headers"])
    assert [r["userId"] for r in active.json()["data"]] == [second["id"], first["id"]]
