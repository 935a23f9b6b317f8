import uuid
from datetime import timedelta

import pytest

from newsdesk.auth.users import current_active_user
from newsdesk.main import app
from factories import (
    create_newsletter,
    create_subscriber,
    create_user,
    get_newsletter_row,
    list_sends,
)


def _payload(**overrides):
    payload = {
        "title": "Weekly AI Brief",
        "content": "This week in models...",
        "excerpt": "Highlights",
        "is_premium": False,
        "publish": False,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_draft(editor_client, editor) -> None:
    response = await editor_client.post("/api/newsletters", json=_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["is_published"] is False
    assert data["published_at"] is None
    assert data["view_count"] == 0
    assert data["author_id"] == str(editor.id)


@pytest.mark.asyncio
async def test_create_published(editor_client) -> None:
    response = await editor_client.post("/api/newsletters", json=_payload(publish=True))

    assert response.status_code == 201
    data = response.json()
    assert data["is_published"] is True
    assert data["published_at"] is not None


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["title", "content"])
async def test_create_requires_title_and_content(editor_client, field) -> None:
    response = await editor_client.post("/api/newsletters", json=_payload(**{field: ""}))
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_toggle_publish_round_trip(editor_client) -> None:
    newsletter = await create_newsletter(is_published=False)

    published = await editor_client.post(f"/api/newsletters/{newsletter.id}/toggle-publish")
    assert published.status_code == 200
    assert published.json()["is_published"] is True
    assert published.json()["published_at"] is not None

    unpublished = await editor_client.post(f"/api/newsletters/{newsletter.id}/toggle-publish")
    assert unpublished.status_code == 200
    assert unpublished.json()["is_published"] is False
    assert unpublished.json()["published_at"] is None


@pytest.mark.asyncio
async def test_update_overwrites_fields_and_publish_state(editor_client, editor) -> None:
    newsletter = await create_newsletter(title="Old", is_published=True, author_id=editor.id)

    response = await editor_client.put(
        f"/api/newsletters/{newsletter.id}",
        json=_payload(title="New", is_premium=True, publish=False),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "New"
    assert data["is_premium"] is True
    assert data["is_published"] is False
    assert data["published_at"] is None


@pytest.mark.asyncio
async def test_update_unknown_newsletter(editor_client) -> None:
    response = await editor_client.put(f"/api/newsletters/{uuid.uuid4()}", json=_payload())

    assert response.status_code == 404
    assert response.json() == {"error": "Newsletter not found"}


@pytest.mark.asyncio
async def test_get_newsletter(editor_client) -> None:
    newsletter = await create_newsletter(title="Fetch Me")

    found = await editor_client.get(f"/api/newsletters/{newsletter.id}")
    missing = await editor_client.get(f"/api/newsletters/{uuid.uuid4()}")

    assert found.status_code == 200
    assert found.json()["title"] == "Fetch Me"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_list_newest_first_with_limit(editor_client) -> None:
    await create_newsletter(title="Oldest", age=timedelta(days=2))
    await create_newsletter(title="Middle", age=timedelta(days=1))
    await create_newsletter(title="Newest")

    everything = await editor_client.get("/api/newsletters")
    limited = await editor_client.get("/api/newsletters", params={"limit": 2})

    assert [n["title"] for n in everything.json()["newsletters"]] == ["Newest", "Middle", "Oldest"]
    assert [n["title"] for n in limited.json()["newsletters"]] == ["Newest", "Middle"]


@pytest.mark.asyncio
async def test_delete_keeps_send_history(editor_client) -> None:
    await create_subscriber("reader@example.com")
    newsletter = await create_newsletter()
    sent = await editor_client.post(
        "/api/newsletters/send", json={"newsletterId": str(newsletter.id)}
    )
    assert sent.status_code == 200

    response = await editor_client.delete(f"/api/newsletters/{newsletter.id}")

    assert response.status_code == 200
    assert response.json() == {"message": "Newsletter deleted"}
    assert (await editor_client.get(f"/api/newsletters/{newsletter.id}")).status_code == 404
    assert len(await list_sends(newsletter.id)) == 1


@pytest.mark.asyncio
async def test_delete_unknown_newsletter(editor_client) -> None:
    response = await editor_client.delete(f"/api/newsletters/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Newsletter not found"}


@pytest.mark.asyncio
async def test_newsletter_routes_require_session(clean_db, client) -> None:
    response = await client.get("/api/newsletters")

    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}


@pytest.mark.asyncio
async def test_update_keeps_author(editor_client, editor) -> None:
    created = await editor_client.post("/api/newsletters", json=_payload())
    newsletter_id = created.json()["id"]

    response = await editor_client.put(
        f"/api/newsletters/{newsletter_id}", json=_payload(title="Revised")
    )

    assert response.status_code == 200
    assert response.json()["author_id"] == str(editor.id)


@pytest.mark.asyncio
async def test_update_by_another_editor_is_not_found(editor_client, editor) -> None:
    created = await editor_client.post("/api/newsletters", json=_payload(title="Mine"))
    assert created.status_code == 201
    newsletter_id = created.json()["id"]

    rival = await create_user("rival@example.com", full_name="Rival")

    async def _override_rival():
        return rival

    app.dependency_overrides[current_active_user] = _override_rival
    response = await editor_client.put(
        f"/api/newsletters/{newsletter_id}", json=_payload(title="Taken over", publish=True)
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Newsletter not found"}

    row = await get_newsletter_row(uuid.UUID(newsletter_id))
    assert row.title == "Mine"
    assert row.author_id == editor.id
    assert row.is_published is False
