"""Suggestion slots and the suggest / approve / reject workflow."""

from datetime import timedelta

import pytest

from worship_api.shared.time_utils import utcnow


def open_slot(client, headers, set_id, user_id, due_at=None, min_songs=1, max_songs=2):
    due_at = due_at or utcnow() + timedelta(days=7)
    return client.post(
        "/suggestionSlots",
        json={
            "setId": set_id,
            "assignedUserId": user_id,
            "minSongs": min_songs,
            "maxSongs": max_songs,
            "dueAt": due_at.isoformat(),
        },
        headers=headers,
    )


@pytest.fixture
def slot(client, leader, musician, planned_set):
    resp = open_slot(client, leader["headers"], planned_set["set_id"], musician["id"])
    assert resp.status_code == 201, resp.json()
    return resp.json()["data"]


@pytest.fixture
def song(make_song):
    return make_song(title="Cornerstone", familiarity=40, default_key="C")


@pytest.fixture
def suggestion(client, musician, slot, song):
    resp = client.post(
        "/suggestions",
        json={"slotId": slot["id"], "songId": song["song_id"], "notes": "Great for the opener"},
        headers=musician["headers"],
    )
    assert resp.status_code == 201, resp.json()
    return resp.json()["data"]


# --- Slots ---

def test_slot_min_must_not_exceed_max(client, leader, musician, planned_set):
    resp = open_slot(client, leader["headers"], planned_set["set_id"], musician["id"], min_songs=3, max_songs=1)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Validation failed"


def test_slot_requires_planner(client, musician, planned_set):
    resp = open_slot(client, musician["headers"], planned_set["set_id"], musician["id"])
    assert resp.status_code == 403


def test_my_assignments(client, musician, slot):
    resp = client.get("/suggestionSlots/my-assignments", headers=musician["headers"])
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert len(data) == 1
    assert data[0]["id"] == slot["id"]
    assert data[0]["isOverdue"] is False
    assert data[0]["suggestionCount"] == 0
    assert data[0]["worshipSet"]["service"]["id"]


def test_overdue_slot_reported_missed(client, leader, musician, planned_set):
    resp = open_slot(
        client, leader["headers"], planned_set["set_id"], musician["id"], due_at=utcnow() - timedelta(days=1)
    )
    assert resp.status_code == 201

    data = client.get("/suggestionSlots/my-assignments", headers=musician["headers"]).json()["data"]
    assert data[0]["isOverdue"] is True
    assert data[0]["status"] == "missed"


# --- Suggesting ---

def test_suggestion_submits_slot(client, musician, slot, suggestion):
    assert suggestion["status"] == "pending"
    resp = client.get(f"/suggestionSlots/{slot['id']}", headers=musician["headers"])
    assert resp.json()["data"]["status"] == "submitted"


def test_duplicate_suggestion(client, musician, slot, song, suggestion):
    resp = client.post("/suggestions", json={"slotId": slot["id"], "songId": song["song_id"]}, headers=musician["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "You have already suggested this song for this slot"


def test_only_assignee_can_suggest(client, make_user, slot, song):
    other = make_user("Other Musician")
    resp = client.post("/suggestions", json={"slotId": slot["id"], "songId": song["song_id"]}, headers=other["headers"])
    assert resp.status_code == 403


def test_suggestion_after_deadline(client, leader, musician, planned_set, song):
    resp = open_slot(
        client, leader["headers"], planned_set["set_id"], musician["id"], due_at=utcnow() - timedelta(hours=1)
    )
    late_slot = resp.json()["data"]
    resp = client.post(
        "/suggestions", json={"slotId": late_slot["id"], "songId": song["song_id"]}, headers=musician["headers"]
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Suggestion deadline has passed"


def test_suggestions_for_set(client, leader, musician, planned_set, suggestion):
    resp = client.get(f"/suggestions/by-worship-set/{planned_set['set_id']}", headers=leader["headers"])
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert len(data) == 1
    assert data[0]["id"] == suggestion["id"]
    assert data[0]["suggester"]["id"] == musician["id"]
    assert data[0]["slotInfo"]["status"] == "submitted"
    assert data[0]["song"]["title"] == "Cornerstone"


def test_suggestions_for_set_hidden_from_outsiders(client, make_user, planned_set, suggestion):
    outsider = make_user("Outsider")
    resp = client.get(f"/suggestions/by-worship-set/{planned_set['set_id']}", headers=outsider["headers"])
    assert resp.status_code == 403


# --- Review ---

def test_approve_and_add_to_set(client, leader, planned_set, song, suggestion):
    resp = client.put(
        f"/suggestions/{suggestion['id']}/approve",
        json={"addToSet": True, "songVersionId": song["version_id"]},
        headers=leader["headers"],
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["message"] == "Suggestion approved and added to worship set"
    assert data["suggestion"]["status"] == "approved"

    set_songs = client.get(f"/setSongs/set/{planned_set['set_id']}", headers=leader["headers"]).json()["data"]
    assert len(set_songs) == 1
    assert set_songs[0]["position"] == 1
    assert set_songs[0]["songVersionId"] == song["version_id"]
    assert set_songs[0]["isNew"] is True


def test_approve_without_adding(client, leader, suggestion):
    resp = client.put(f"/suggestions/{suggestion['id']}/approve", headers=leader["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["message"] == "Suggestion approved"


def test_reject(client, leader, suggestion):
    resp = client.put(f"/suggestions/{suggestion['id']}/reject", headers=leader["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["message"] == "Suggestion rejected"
    assert resp.json()["data"]["suggestion"]["status"] == "rejected"


def test_only_set_leader_reviews(client, make_user, musician, suggestion):
    resp = client.put(f"/suggestions/{suggestion['id']}/reject", headers=musician["headers"])
    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "Only the worship set leader or an admin can reject suggestions"

    other_leader = make_user("Other Leader", roles=("leader",))
    resp = client.put(f"/suggestions/{suggestion['id']}/approve", headers=other_leader["headers"])
    assert resp.status_code == 403
