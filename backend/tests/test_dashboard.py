from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from newsdesk.database import AsyncSessionLocal
from newsdesk.models.profile import Profile
from newsdesk.models.subscriber import SubscriptionTier
from factories import create_newsletter, create_subscriber


async def _profile_count() -> int:
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(func.count()).select_from(Profile))
        return result.scalar()


@pytest.mark.asyncio
async def test_stats_empty_database(editor_client) -> None:
    response = await editor_client.get("/api/dashboard/stats")

    assert response.status_code == 200
    assert response.json() == {
        "subscriberCount": 0,
        "totalNewsletters": 0,
        "publishedNewsletters": 0,
        "draftNewsletters": 0,
        "openRate": "24.5%",
    }


@pytest.mark.asyncio
async def test_stats_counts_active_subscribers_and_newsletter_states(editor_client) -> None:
    await create_subscriber("a@example.com")
    await create_subscriber("b@example.com", tier=SubscriptionTier.PRO)
    await create_subscriber("c@example.com", is_active=False)
    await create_newsletter(title="One", is_published=True)
    await create_newsletter(title="Two", is_published=True)
    await create_newsletter(title="Three", is_published=False)

    response = await editor_client.get("/api/dashboard/stats")

    data = response.json()
    assert data["subscriberCount"] == 2
    assert data["totalNewsletters"] == 3
    assert data["publishedNewsletters"] == 2
    assert data["draftNewsletters"] == 1
    assert data["publishedNewsletters"] + data["draftNewsletters"] == data["totalNewsletters"]


@pytest.mark.asyncio
async def test_dashboard_creates_profile_on_first_visit(editor_client, editor) -> None:
    assert await _profile_count() == 0

    first = await editor_client.get("/api/dashboard")
    second = await editor_client.get("/api/dashboard")

    assert first.status_code == 200
    assert second.status_code == 200
    assert await _profile_count() == 1

    profile = first.json()["profile"]
    assert profile["id"] == str(editor.id)
    assert profile["email"] == "editor@example.com"
    assert profile["name"] == "Ed Itor"
    assert profile["role"] == "subscriber"
    assert profile["subscription_tier"] == "free"


@pytest.mark.asyncio
async def test_profile_row_shares_the_user_id(editor) -> None:
    """Profile ids are foreign keys onto users.id and must match its stored form."""
    async with AsyncSessionLocal() as session:
        session.add(Profile(id=editor.id, email=editor.email, name="Ed"))
        await session.commit()

    async with AsyncSessionLocal() as session:
        profile = (await session.execute(select(Profile).where(Profile.id == editor.id))).scalar_one()

    assert profile.id == editor.id


@pytest.mark.asyncio
async def test_dashboard_overview_lists_recent_newsletters(editor_client) -> None:
    await create_subscriber("a@example.com")
    await create_newsletter(title="Draft", is_published=False)

    response = await editor_client.get("/api/dashboard")

    data = response.json()
    assert data["subscriberCount"] == 1
    assert [n["title"] for n in data["newsletters"]] == ["Draft"]


@pytest.mark.asyncio
async def test_dashboard_stats_failure_hides_details(editor_client) -> None:
    with patch(
        "newsdesk.api.dashboard.compute_dashboard_stats",
        new=AsyncMock(side_effect=SQLAlchemyError("relation \"newsletters\" does not exist")),
    ):
        response = await editor_client.get("/api/dashboard/stats")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "relation" not in response.text


@pytest.mark.asyncio
async def test_profile_read_and_rename(editor_client) -> None:
    before = await editor_client.get("/api/profile")
    assert before.status_code == 200
    assert before.json()["name"] == "Ed Itor"

    response = await editor_client.put(
        "/api/profile", json={"name": "Editor In Chief", "role": "admin"}
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Editor In Chief"
    # Role is not writable from the settings page
    assert response.json()["role"] == "subscriber"


@pytest.mark.asyncio
async def test_dashboard_requires_session(clean_db, client) -> None:
    response = await client.get("/api/dashboard/stats")

    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}
