"""Services, their assignments and the defaults copied into new sets."""

import pytest


@pytest.fixture
def instruments(client, admin):
    created = {}
    for code, name in [("keys", "Keys"), ("bass", "Bass Guitar")]:
        resp = client.post(
            "/instruments", json={"code": code, "displayName": name, "maxPerSet": 1}, headers=admin["headers"]
        )
        assert resp.status_code == 201, resp.json()
        created[code] = resp.json()["data"]["id"]
    return created


def test_create_service_requires_date(client, admin, service_type):
    resp = client.post("/services", json={"serviceTypeId": service_type["id"]}, headers=admin["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Date is required"


def test_create_service_unknown_type(client, admin):
    resp = client.post(
        "/services",
        json={"date": "2031-03-02T10:00:00", "serviceTypeId": "22222222-2222-4222-8222-222222222222"},
        headers=admin["headers"],
    )
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Service type not found"


def test_duplicate_service(client, admin, service_type):
    payload = {"date": "2031-03-02T10:00:00Z", "serviceTypeId": service_type["id"]}
    assert client.post("/services", json=payload, headers=admin["headers"]).status_code == 201
    resp = client.post("/services", json=payload, headers=admin["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "A service of this type already exists for the specified date"


def test_musician_cannot_create_service(client, musician, service_type):
    resp = client.post(
        "/services", json={"date": "2031-03-02T10:00:00", "serviceTypeId": service_type["id"]}, headers=musician["headers"]
    )
    assert resp.status_code == 403


def test_list_services_date_range(client, admin, service_type):
    for day in ("2031-03-02", "2031-03-09", "2031-03-16"):
        client.post("/services", json={"date": f"{day}T10:00:00", "serviceTypeId": service_type["id"]}, headers=admin["headers"])

    resp = client.get(
        "/services", params={"startDate": "2031-03-05T00:00:00", "endDate": "2031-03-20T00:00:00"}, headers=admin["headers"]
    )
    assert resp.status_code == 200
    dates = [s["serviceDate"][:10] for s in resp.json()["data"]]
    assert dates == ["2031-03-09", "2031-03-16"]


def test_update_service_ignores_unknown_status(client, admin, planned_set):
    url = f"/services/{planned_set['service_id']}"
    assert client.put(url, json={"status": "bogus"}, headers=admin["headers"]).json()["data"]["status"] == "planned"
    assert client.put(url, json={"status": "published"}, headers=admin["headers"]).json()["data"]["status"] == "published"


def test_replace_service_assignments(client, admin, leader, musician, planned_set, instruments):
    url = f"/services/{planned_set['service_id']}/assignments"
    resp = client.put(
        url,
        json={"assignments": {instruments["keys"]: leader["id"], instruments["bass"]: musician["id"]}},
        headers=admin["headers"],
    )
    assert resp.status_code == 200
    assert {(a["instrumentId"], a["userId"], a["status"]) for a in resp.json()["data"]} == {
        (instruments["keys"], leader["id"], "invited"),
        (instruments["bass"], musician["id"], "invited"),
    }

    resp = client.put(url, json={"assignments": {instruments["bass"]: ""}}, headers=admin["headers"])
    assert [a["instrumentId"] for a in resp.json()["data"]] == [instruments["keys"]]


def test_replace_assignments_unknown_instrument(client, admin, musician, planned_set):
    resp = client.put(
        f"/services/{planned_set['service_id']}/assignments",
        json={"assignments": {"33333333-3333-4333-8333-333333333333": musician["id"]}},
        headers=admin["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Invalid instrument or user in assignments"


def test_new_set_copies_default_assignments(client, admin, musician, planned_set, service_type, instruments):
    resp = client.post(
        "/default-assignments",
        json={"serviceTypeId": service_type["id"], "instrumentId": instruments["bass"], "userId": musician["id"]},
        headers=admin["headers"],
    )
    assert resp.status_code == 201, resp.json()

    assert client.delete(f"/worshipSets/{planned_set['set_id']}", headers=admin["headers"]).status_code == 204
    resp = client.post("/worshipSets", json={"serviceId": planned_set["service_id"]}, headers=admin["headers"])
    assert resp.status_code == 201
    assignments = resp.json()["data"]["assignments"]
    assert [(a["instrumentId"], a["userId"], a["status"]) for a in assignments] == [
        (instruments["bass"], musician["id"], "invited")
    ]


def test_duplicate_default_assignment(client, admin, musician, service_type, instruments):
    payload = {"serviceTypeId": service_type["id"], "instrumentId": instruments["keys"], "userId": musician["id"]}
    assert client.post("/default-assignments", json=payload, headers=admin["headers"]).status_code == 201
    resp = client.post("/default-assignments", json=payload, headers=admin["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "A default assignment already exists for this service type and instrument"


def test_generate_services_without_rrule(client, admin):
    resp = client.post("/serviceTypes", json={"name": "Special", "defaultStartTime": "19:00"}, headers=admin["headers"])
    resp = client.post(f"/serviceTypes/{resp.json()['data']['id']}/generate-services", headers=admin["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Service type does not have a recurrence rule (RRULE)"


# --- Assignments ---

def invite(client, headers, set_id, instrument_id, user_id):
    return client.post(
        "/assignments", json={"setId": set_id, "instrumentId": instrument_id, "userId": user_id}, headers=headers
    )


def test_set_leader_invites_and_musician_responds(client, leader, musician, planned_set, instruments):
    resp = invite(client, leader["headers"], planned_set["set_id"], instruments["bass"], musician["id"])
    assert resp.status_code == 201
    assignment = resp.json()["data"]
    assert assignment["status"] == "invited"

    mine = client.get("/assignments", headers=musician["headers"]).json()["data"]
    assert [a["id"] for a in mine] == [assignment["id"]]

    resp = client.put(f"/assignments/{assignment['id']}", json={"status": "accepted"}, headers=musician["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "accepted"
    assert resp.json()["data"]["respondedAt"] is not None


def test_only_set_leader_invites(client, make_user, musician, planned_set, instruments):
    other_leader = make_user("Other Leader", roles=("leader",))
    resp = invite(client, other_leader["headers"], planned_set["set_id"], instruments["bass"], musician["id"])
    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "Only the worship set leader or an admin can create assignments"


def test_instrument_capacity(client, admin, leader, musician, planned_set, instruments):
    assert invite(client, admin["headers"], planned_set["set_id"], instruments["keys"], leader["id"]).status_code == 201
    resp = invite(client, admin["headers"], planned_set["set_id"], instruments["keys"], musician["id"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Maximum 1 Keys(s) allowed per worship set"


def test_duplicate_assignment(client, admin, musician, planned_set):
    resp = client.post(
        "/instruments", json={"code": "vocals", "displayName": "Vocals", "maxPerSet": 4}, headers=admin["headers"]
    )
    vocals = resp.json()["data"]["id"]
    assert invite(client, admin["headers"], planned_set["set_id"], vocals, musician["id"]).status_code == 201
    resp = invite(client, admin["headers"], planned_set["set_id"], vocals, musician["id"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "This user is already assigned to this instrument for this worship set"


def test_set_leader_removes_assignment(client, leader, musician, planned_set, instruments):
    assignment_id = invite(client, leader["headers"], planned_set["set_id"], instruments["bass"], musician["id"]).json()["data"]["id"]
    assert client.delete(f"/assignments/{assignment_id}", headers=musician["headers"]).status_code == 403
    assert client.delete(f"/assignments/{assignment_id}", headers=leader["headers"]).status_code == 204
    assert client.get(f"/assignments/{assignment_id}", headers=leader["headers"]).status_code == 404
