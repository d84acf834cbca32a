"""End-to-end tests for the notes API over an in-memory database."""

import uuid

from httpx import ASGITransport, AsyncClient

from notekeep.core.services.note_service import NoteService
from notekeep.exceptions import InternalError


async def _create(client, headers, **payload) -> dict:
    body = {"title": "T", "content": "C", **payload}
    resp = await client.post("/api/notes", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["note"]


async def test_health(async_client):
    resp = await async_client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "status": "ok"}


async def test_notes_require_token(async_client):
    resp = await async_client.get("/api/notes")

    assert resp.status_code == 401
    assert resp.json() == {"success": False, "message": "Not authorized, no token"}


async def test_create_note(async_client, auth_headers, test_user, test_note_data):
    resp = await async_client.post("/api/notes", json=test_note_data, headers=auth_headers)

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    note = body["note"]
    assert note["title"] == test_note_data["title"]
    assert note["tags"] == ["travel", "summer"]
    assert note["color"] == "blue"
    assert note["is_pinned"] is False
    assert note["owner_id"] == str(test_user.id)
    assert {"id", "created_at", "updated_at"} <= note.keys()


async def test_create_note_camel_case_pin(async_client, auth_headers):
    note = await _create(async_client, auth_headers, isPinned=True)

    assert note["is_pinned"] is True


async def test_create_note_validation(async_client, auth_headers):
    missing = await async_client.post("/api/notes", json={"title": "T"}, headers=auth_headers)
    assert missing.status_code == 400
    assert missing.json() == {"success": False, "message": "Title and Content required"}

    bad_color = await async_client.post(
        "/api/notes", json={"title": "T", "content": "C", "color": "purple"}, headers=auth_headers
    )
    assert bad_color.status_code == 400
    assert bad_color.json()["message"].startswith("Invalid color")


async def test_malformed_json(async_client, auth_headers):
    resp = await async_client.post(
        "/api/notes",
        content=b"{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Malformed JSON body"}


async def test_list_notes_pinned_first(async_client, auth_headers, test_user, make_note):
    a = await make_note(test_user, "A", minutes_ago=30)
    b = await make_note(test_user, "B", minutes_ago=20)
    c = await make_note(test_user, "C", is_pinned=True, minutes_ago=10)

    resp = await async_client.get("/api/notes", headers=auth_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["count"] == 3
    assert [n["id"] for n in body["notes"]] == [str(c.id), str(b.id), str(a.id)]


async def test_get_update_delete(async_client, auth_headers, test_note):
    url = f"/api/notes/{test_note.id}"

    got = await async_client.get(url, headers=auth_headers)
    assert got.status_code == 200
    assert got.json()["note"]["title"] == "Road Trip Plan"

    updated = await async_client.put(url, json={"content": "New body"}, headers=auth_headers)
    assert updated.status_code == 200
    note = updated.json()["note"]
    assert note["title"] == "Road Trip Plan"
    assert note["content"] == "New body"

    deleted = await async_client.delete(url, headers=auth_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "message": "Note deleted"}

    gone = await async_client.get(url, headers=auth_headers)
    assert gone.status_code == 404
    assert gone.json() == {"success": False, "message": "Note not found"}


async def test_update_ignores_empty_title(async_client, auth_headers, test_note):
    resp = await async_client.put(
        f"/api/notes/{test_note.id}", json={"title": "", "content": "new"}, headers=auth_headers
    )

    assert resp.status_code == 200
    note = resp.json()["note"]
    assert note["title"] == "Road Trip Plan"
    assert note["content"] == "new"


async def test_create_note_with_long_title(async_client, auth_headers):
    note = await _create(async_client, auth_headers, title="x" * 201, content="c")

    assert len(note["title"]) == 201


async def test_other_users_note_is_not_found(async_client, other_headers, test_note):
    url = f"/api/notes/{test_note.id}"

    for method, kwargs in [
        ("GET", {}),
        ("PUT", {"json": {"title": "hijack"}}),
        ("DELETE", {}),
    ]:
        resp = await async_client.request(method, url, headers=other_headers, **kwargs)
        assert resp.status_code == 404, method
        assert resp.json()["message"] == "Note not found"

    pin = await async_client.put(f"{url}/pin", headers=other_headers)
    assert pin.status_code == 404

    for action in ("add", "remove"):
        resp = await async_client.put(
            f"{url}/tags/{action}", json={"tag": "travel"}, headers=other_headers
        )
        assert resp.status_code == 404, action
        assert resp.json() == {"success": False, "message": "Note not found"}


async def test_malformed_and_unknown_ids(async_client, auth_headers):
    malformed = await async_client.get("/api/notes/not-a-uuid", headers=auth_headers)
    unknown = await async_client.get(f"/api/notes/{uuid.uuid4()}", headers=auth_headers)

    assert malformed.status_code == unknown.status_code == 404


async def test_search(async_client, auth_headers, test_user, make_note):
    trip = await make_note(test_user, "Road Trip Plan", "Pack snacks")
    await make_note(test_user, "Groceries", "Milk")

    resp = await async_client.get("/api/notes/search", params={"keyword": "TRIP"}, headers=auth_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 1
    assert body["notes"][0]["id"] == str(trip.id)

    missing = await async_client.get("/api/notes/search", headers=auth_headers)
    assert missing.status_code == 400
    assert missing.json()["message"] == "Keyword required"


async def test_filter(async_client, auth_headers, test_user, make_note):
    match = await make_note(test_user, "A", color="blue", is_pinned=True)
    await make_note(test_user, "B", color="blue")
    await make_note(test_user, "C", color="green", is_pinned=True)

    resp = await async_client.get(
        "/api/notes/filter", params={"color": "blue", "pinned": "true"}, headers=auth_headers
    )

    assert resp.status_code == 200
    body = resp.json()
    assert [n["id"] for n in body["notes"]] == [str(match.id)]
    assert body["filters"] == {"color": "blue", "pinned": True}

    unknown = await async_client.get(
        "/api/notes/filter", params={"color": "purple"}, headers=auth_headers
    )
    assert unknown.status_code == 200
    assert unknown.json()["count"] == 0
    assert unknown.json()["notes"] == []
    assert unknown.json()["filters"]["color"] == "purple"


async def test_notes_by_tag(async_client, auth_headers, test_user, make_note):
    work = await make_note(test_user, "A", tags=["work"])
    await make_note(test_user, "B", tags=["Work"])

    resp = await async_client.get("/api/notes/tag/work", headers=auth_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["tag"] == "work"
    assert [n["id"] for n in body["notes"]] == [str(work.id)]


async def test_tag_add_and_remove(async_client, auth_headers, test_note):
    base = f"/api/notes/{test_note.id}/tags"

    added = await async_client.put(f"{base}/add", json={"tag": "roadtrip"}, headers=auth_headers)
    assert added.status_code == 200
    assert added.json()["note"]["tags"] == ["travel", "summer", "roadtrip"]

    duplicate = await async_client.put(f"{base}/add", json={"tag": "travel"}, headers=auth_headers)
    assert duplicate.status_code == 400
    assert duplicate.json() == {"success": False, "message": "Tag already exists"}

    empty = await async_client.put(f"{base}/add", json={}, headers=auth_headers)
    assert empty.status_code == 400
    assert empty.json()["message"] == "Tag required"

    removed = await async_client.put(f"{base}/remove", json={"tag": "travel"}, headers=auth_headers)
    assert removed.json()["note"]["tags"] == ["summer", "roadtrip"]

    absent = await async_client.put(f"{base}/remove", json={"tag": "nope"}, headers=auth_headers)
    assert absent.status_code == 200
    assert absent.json()["note"]["tags"] == ["summer", "roadtrip"]


async def test_toggle_pin(async_client, auth_headers, test_note):
    url = f"/api/notes/{test_note.id}/pin"

    first = await async_client.put(url, headers=auth_headers)
    assert first.status_code == 200
    assert first.json()["message"] == "Note pinned"
    assert first.json()["note"]["is_pinned"] is True

    second = await async_client.put(url, headers=auth_headers)
    assert second.json()["message"] == "Note unpinned"
    assert second.json()["note"]["is_pinned"] is False


async def test_unknown_route(async_client):
    resp = await async_client.get("/api/nothing-here")

    assert resp.status_code == 404
    assert resp.json()["success"] is False


async def test_unexpected_error_is_generic_500(monkeypatch, test_app, auth_headers):
    async def boom(self, user_id):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(NoteService, "list_notes", boom)

    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/notes", headers=auth_headers)

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Server error"}


async def test_store_failure_is_500_envelope(monkeypatch, async_client, auth_headers):
    async def fail(self, user_id, keyword):
        raise InternalError(context={"op": "search"})

    monkeypatch.setattr(NoteService, "search_notes", fail)

    resp = await async_client.get(
        "/api/notes/search", params={"keyword": "x"}, headers=auth_headers
    )

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Server error"}


async def test_listing_routes_leave_out_other_users_notes(
    async_client, auth_headers, other_headers, test_user, other_user, make_note
):
    theirs = await make_note(other_user, "Trip abroad", "theirs", tags=["travel"], color="blue")
    mine = await make_note(test_user, "Trip home", "mine", tags=["travel"], color="blue")

    queries = [
        ("/api/notes", {}),
        ("/api/notes/search", {"keyword": "trip"}),
        ("/api/notes/filter", {"color": "blue"}),
        ("/api/notes/tag/travel", {}),
    ]
    for path, params in queries:
        own = await async_client.get(path, params=params, headers=auth_headers)
        other = await async_client.get(path, params=params, headers=other_headers)

        assert [n["id"] for n in own.json()["notes"]] == [str(mine.id)], path
        assert [n["id"] for n in other.json()["notes"]] == [str(theirs.id)], path


async def test_non_owner_tag_change_leaves_note_alone(
    async_client, auth_headers, other_headers, test_note
):
    await async_client.put(
        f"/api/notes/{test_note.id}/tags/remove", json={"tag": "travel"}, headers=other_headers
    )

    resp = await async_client.get(f"/api/notes/{test_note.id}", headers=auth_headers)

    assert resp.json()["note"]["tags"] == ["travel", "summer"]
