"""Instruments, availability, singer keys, notifications and the app shell."""

import pytest
from starlette.responses import Response

from worship_api.cache_control import NO_CACHE_VALUE, long_cache, no_cache, short_cache


@pytest.fixture
def keys_instrument(client, admin):
    resp = client.post(
        "/instruments", json={"code": "keys", "displayName": "Keys", "maxPerSet": 1}, headers=admin["headers"]
    )
    assert resp.status_code == 201
    return resp.json()["data"]


# --- App shell ---

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "OK", "message": "Worship Set Manager API is running"}


def test_redis_health_disabled_in_memory_mode(client):
    assert client.get("/health/redis").json()["status"] == "disabled"


def test_security_headers(client, musician):
    resp = client.get("/users/me", headers=musician["headers"])
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["Cache-Control"] == NO_CACHE_VALUE


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "Not Found"}}


# --- Cache policies ---

@pytest.mark.parametrize(
    "policy, expected",
    [(short_cache, "private, max-age=300"), (long_cache, "public, max-age=3600"), (no_cache, NO_CACHE_VALUE)],
)
def test_cache_policies(policy, expected):
    response = Response()
    policy(response)
    assert response.headers["Cache-Control"] == expected


# --- Instruments ---

def test_instrument_list_is_cacheable(client, musician, keys_instrument):
    resp = client.get("/instruments", headers=musician["headers"])
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "public, max-age=900"
    assert [i["code"] for i in resp.json()["data"]] == ["keys"]


def test_duplicate_instrument_code(client, admin, keys_instrument):
    resp = client.post(
        "/instruments", json={"code": "keys", "displayName": "Piano", "maxPerSet": 1}, headers=admin["headers"]
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "An instrument with this code already exists"


def test_instrument_writes_require_admin(client, leader):
    resp = client.post(
        "/instruments", json={"code": "drums", "displayName": "Drums", "maxPerSet": 1}, headers=leader["headers"]
    )
    assert resp.status_code == 403


# --- User instruments ---

def test_user_instruments_replace(client, musician, keys_instrument):
    url = f"/users/{musician['id']}/instruments"
    resp = client.put(url, json={"instrumentIds": [keys_instrument["id"]]}, headers=musician["headers"])
    assert resp.status_code == 200
    assert [i["code"] for i in resp.json()["data"]] == ["keys"]

    resp = client.get(url, headers=musician["headers"])
    assert [i["id"] for i in resp.json()["data"]] == [keys_instrument["id"]]

    resp = client.put(url, json={"instrumentIds": []}, headers=musician["headers"])
    assert resp.json()["data"] == []


def test_user_instruments_validation(client, musician, leader):
    url = f"/users/{musician['id']}/instruments"
    resp = client.put(url, json={"instrumentIds": "keys"}, headers=musician["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "instrumentIds must be an array"

    resp = client.put(
        url, json={"instrumentIds": ["44444444-4444-4444-8444-444444444444"]}, headers=musician["headers"]
    )
    assert resp.json()["error"]["message"] == "One or more instrument IDs are invalid"

    resp = client.put(url, json={"instrumentIds": []}, headers=leader["headers"])
    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "You can only update your own instruments"


# --- Availability ---

def test_availability_lifecycle(client, musician, leader, make_user):
    resp = client.post(
        "/availability",
        json={"start": "2031-07-01T00:00:00", "end": "2031-07-14T00:00:00", "notes": "Summer camp"},
        headers=musician["headers"],
    )
    assert resp.status_code == 201
    record = resp.json()["data"]
    assert record["userId"] == musician["id"]

    listed = client.get(f"/availability/user/{musician['id']}", headers=leader["headers"])
    assert [a["id"] for a in listed.json()["data"]] == [record["id"]]

    stranger = make_user("Stranger")
    assert client.get(f"/availability/user/{musician['id']}", headers=stranger["headers"]).status_code == 403
    assert client.delete(f"/availability/{record['id']}", headers=leader["headers"]).status_code == 403

    resp = client.put(
        f"/availability/{record['id']}", json={"end": "2031-06-01T00:00:00"}, headers=musician["headers"]
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "end must not be before start"

    assert client.delete(f"/availability/{record['id']}", headers=musician["headers"]).status_code == 204


def test_availability_rejects_inverted_range(client, musician):
    resp = client.post(
        "/availability",
        json={"start": "2031-07-14T00:00:00", "end": "2031-07-01T00:00:00"},
        headers=musician["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Validation failed"


# --- Singer song keys ---

def test_singer_key_suggestions_and_profile(client, admin, leader, make_user, make_song):
    song = make_song(title="Oceans", default_key="D")
    other = make_user("Other Singer", roles=("leader",))

    def record(singer_id, key, date):
        resp = client.post(
            "/singer-song-keys",
            json={"singerId": singer_id, "songId": song["song_id"], "key": key, "serviceDate": date},
            headers=admin["headers"],
        )
        assert resp.status_code == 201, resp.json()

    record(leader["id"], "B", "2031-01-05T10:00:00")
    record(leader["id"], "C", "2031-02-05T10:00:00")
    record(other["id"], "D", "2031-01-12T10:00:00")
    record(other["id"], "Eb", "2031-03-12T10:00:00")

    resp = client.get(
        "/singer-song-keys/suggestions",
        params={"songId": song["song_id"], "singerId": leader["id"]},
        headers=leader["headers"],
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [k["key"] for k in data["singerHistory"]] == ["C", "B"]
    assert [k["key"] for k in data["otherSingersHistory"]] == ["Eb"]
    assert [v["defaultKey"] for v in data["songVersions"]] == ["D"]

    profile = client.get(f"/users/{leader['id']}/key-profile", headers=leader["headers"]).json()["data"]
    assert len(profile) == 1
    assert profile[0]["song"]["title"] == "Oceans"
    assert profile[0]["mostRecentKey"] == "C"


def test_singer_key_suggestions_require_song(client, leader):
    resp = client.get("/singer-song-keys/suggestions", headers=leader["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "songId is required"


# --- Notifications ---

def test_notification_log(client, leader, musician):
    resp = client.post(
        "/notifications",
        json={
            "userId": musician["id"],
            "channel": "email",
            "templateKey": "slot_reminder",
            "payloadJson": {"setId": "abc"},
            "status": "sent",
        },
        headers=leader["headers"],
    )
    assert resp.status_code == 201
    notification = resp.json()["data"]
    assert notification["channel"] == "email"

    resp = client.get(f"/notifications/user/{musician['id']}", headers=musician["headers"])
    assert [n["id"] for n in resp.json()["data"]] == [notification["id"]]


def test_notification_rejects_unknown_channel(client, leader, musician):
    resp = client.post(
        "/notifications",
        json={"userId": musician["id"], "channel": "pigeon", "templateKey": "x", "status": "sent"},
        headers=leader["headers"],
    )
    assert resp.status_code == 400
