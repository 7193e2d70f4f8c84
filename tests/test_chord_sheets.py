"""Chord transposition, chord sheet storage and file uploads."""

import pytest
from botocore.exceptions import ClientError

from worship_api import storage
from worship_api.domain.chord_sheets.service import sanitize_filename
from worship_api.domain.chord_sheets.transpose import key_index, prefers_flats, transpose_chord_text

SHEET = "[G]Amazing [C]grace how [G]sweet the [D7]sound"


# --- Transposition ---

def test_transpose_up_a_whole_step():
    assert transpose_chord_text(SHEET, "G", "A") == "[A]Amazing [D]grace how [A]sweet the [E7]sound"


def test_transpose_to_flat_key_uses_flats():
    assert transpose_chord_text(SHEET, "G", "F") == "[F]Amazing [Bb]grace how [F]sweet the [C7]sound"


def test_transpose_keeps_chord_suffix():
    assert transpose_chord_text("[Am7]we [F#m/C#]go", "C", "D") == "[Bm7]we [G#m/C#]go"


def test_transpose_minor_keys_by_root():
    assert key_index("Am") == key_index("A") == 9
    assert transpose_chord_text("[Am]so [E7]far", "Am", "Cm") == "[Cm]so [G7]far"


def test_transpose_unknown_key_leaves_text():
    assert transpose_chord_text(SHEET, "H", "A") == SHEET
    assert transpose_chord_text(SHEET, "G", "") == SHEET


def test_prefers_flats():
    assert prefers_flats("Bb")
    assert prefers_flats("F")
    assert prefers_flats("Fm")
    assert not prefers_flats("G")
    assert not prefers_flats("F#")


def test_sanitize_filename():
    assert sanitize_filename("../my chart (v2).pdf") == ".._my_chart__v2_.pdf"


# --- Chord sheets ---

@pytest.fixture
def version(make_song):
    return make_song(title="Amazing Grace", default_key="G")


def test_chord_sheet_upsert_and_get(client, leader, musician, version):
    url = f"/song-versions/{version['version_id']}/chord-sheet"
    assert client.get(url, headers=musician["headers"]).status_code == 404

    resp = client.put(url, json={"chordText": SHEET, "originalKey": "G"}, headers=leader["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["originalKey"] == "G"

    resp = client.put(url, json={"externalUrl": "https://chords.example.com/amazing-grace"}, headers=leader["headers"])
    data = resp.json()["data"]
    assert data["chordText"] == SHEET
    assert data["externalUrl"] == "https://chords.example.com/amazing-grace"

    assert client.get(url, headers=musician["headers"]).json()["data"]["chordText"] == SHEET


def test_chord_sheet_write_requires_planner(client, musician, version):
    resp = client.put(
        f"/song-versions/{version['version_id']}/chord-sheet", json={"chordText": SHEET}, headers=musician["headers"]
    )
    assert resp.status_code == 403


def test_set_song_chord_sheet_is_transposed(client, leader, planned_set, version):
    client.put(
        f"/song-versions/{version['version_id']}/chord-sheet",
        json={"chordText": SHEET, "originalKey": "G"},
        headers=leader["headers"],
    )
    resp = client.post(
        "/setSongs",
        json={
            "setId": planned_set["set_id"],
            "songVersionId": version["version_id"],
            "position": 1,
            "keyOverride": "A",
        },
        headers=leader["headers"],
    )
    set_song_id = resp.json()["data"]["id"]

    resp = client.get(f"/set-songs/{set_song_id}/chord-sheet", headers=leader["headers"])
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["displayKey"] == "A"
    assert data["chordText"] == "[A]Amazing [D]grace how [A]sweet the [E7]sound"
    assert data["songTitle"] == "Amazing Grace"
    assert data["versionName"] == "Standard"


# --- Uploads ---

def upload(client, headers, version_id, name, content, content_type):
    return client.post(
        f"/song-versions/{version_id}/chord-sheet/upload",
        files={"file": (name, content, content_type)},
        headers=headers,
    )


def test_upload_pdf(client, leader, version, fake_storage):
    resp = upload(client, leader["headers"], version["version_id"], "grace chart.pdf", b"%PDF-1.4 test", "application/pdf")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["fileName"] == "grace_chart.pdf"
    assert data["fileUrl"] == f"https://files.example.com/{version['version_id']}/grace_chart.pdf"
    assert fake_storage["uploaded"] == [(f"{version['version_id']}/grace_chart.pdf", "application/pdf", 13)]


def test_upload_replaces_previous_file(client, leader, version, fake_storage):
    upload(client, leader["headers"], version["version_id"], "old.png", b"png", "image/png")
    upload(client, leader["headers"], version["version_id"], "new.png", b"png", "image/png")
    assert fake_storage["deleted"] == [f"{version['version_id']}/old.png"]


def test_upload_rejects_file_type(client, leader, version, fake_storage):
    resp = upload(client, leader["headers"], version["version_id"], "notes.txt", b"hello", "text/plain")
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Invalid file type. Allowed: PDF, PNG, JPG"
    assert fake_storage["uploaded"] == []


def test_upload_rejects_large_file(client, leader, version, fake_storage):
    big = b"0" * (5 * 1024 * 1024 + 1)
    resp = upload(client, leader["headers"], version["version_id"], "big.pdf", big, "application/pdf")
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "File too large. Max 5MB"


def test_upload_without_file(client, leader, version):
    resp = client.post(f"/song-versions/{version['version_id']}/chord-sheet/upload", headers=leader["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "No file provided"


def test_upload_storage_failure(client, leader, version, monkeypatch):
    def failing_upload(path, content, content_type):
        raise ClientError({"Error": {"Code": "500", "Message": "boom"}}, "PutObject")

    monkeypatch.setattr(storage, "upload_file", failing_upload)
    resp = upload(client, leader["headers"], version["version_id"], "chart.pdf", b"%PDF", "application/pdf")
    assert resp.status_code == 500
    assert resp.json()["error"]["message"] == "Failed to upload file"


def test_delete_chord_sheet_removes_file(client, leader, version, fake_storage):
    upload(client, leader["headers"], version["version_id"], "chart.pdf", b"%PDF", "application/pdf")
    resp = client.delete(f"/song-versions/{version['version_id']}/chord-sheet", headers=leader["headers"])
    assert resp.status_code == 204
    assert fake_storage["deleted"] == [f"{version['version_id']}/chart.pdf"]
