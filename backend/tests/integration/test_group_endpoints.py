"""
Integration tests for group and challenge endpoints.

Tests the API endpoints at /api/v1/groups and /api/v1/challenges including:
- Creating, listing and joining groups
- The member-only message board
- Listing and joining challenges
"""

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.messages import GroupMessages
from app.models.challenge import Challenge
from app.testing import create_group, create_user, get_auth_headers


@pytest.mark.integration
async def test_create_group_and_list(client: AsyncClient, session: AsyncSession):
    user = await create_user(session)
    headers = get_auth_headers(user)

    created = await client.post(
        "/api/v1/groups/",
        json={"name": "The Procrastinators", "description": "Eventually."},
        headers=headers,
    )
    assert created.status_code == 201
    assert created.json()["role"] == "owner"

    listed = await client.get("/api/v1/groups/", headers=headers)
    assert [group["name"] for group in listed.json()] == ["The Procrastinators"]


@pytest.mark.integration
async def test_duplicate_group_name_conflicts(client: AsyncClient, session: AsyncSession):
    user = await create_user(session)
    await create_group(session, owner=user, name="Early Birds")

    response = await client.post("/api/v1/groups/", json={"name": "Early Birds"}, headers=get_auth_headers(user))
    assert response.status_code == 409
    assert response.json()["detail"] == GroupMessages.GROUP_NAME_TAKEN


@pytest.mark.integration
async def test_join_then_chat(client: AsyncClient, session: AsyncSession):
    owner = await create_user(session, username="alice")
    member = await create_user(session, username="bob")
    group = await create_group(session, owner=owner)
    member_headers = get_auth_headers(member)

    forbidden = await client.post(
        f"/api/v1/groups/{group.id}/messages",
        json={"content": "Hi"},
        headers=member_headers,
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["detail"] == GroupMessages.NOT_A_MEMBER

    joined = await client.post(f"/api/v1/groups/{group.id}/join", headers=member_headers)
    assert joined.status_code == 200
    assert joined.json()["role"] == "member"

    posted = await client.post(
        f"/api/v1/groups/{group.id}/messages",
        json={"content": "Glad to be here!"},
        headers=member_headers,
    )
    assert posted.status_code == 201
    assert posted.json()["username"] == "bob"

    messages = await client.get(f"/api/v1/groups/{group.id}/messages", headers=get_auth_headers(owner))
    assert [(m["username"], m["content"]) for m in messages.json()] == [("bob", "Glad to be here!")]


@pytest.mark.integration
async def test_join_missing_group(client: AsyncClient, session: AsyncSession):
    user = await create_user(session)
    response = await client.post("/api/v1/groups/999/join", headers=get_auth_headers(user))
    assert response.status_code == 404


@pytest.mark.integration
async def test_challenges_show_participation(client: AsyncClient, session: AsyncSession):
    user = await create_user(session)
    headers = get_auth_headers(user)
    fitness = Challenge(title="30-Day Fitness Challenge", goal="Log 30 fitness activities.")
    mindful = Challenge(title="Mindful Mornings", goal="Meditate for 15 days this month.")
    session.add(fitness)
    session.add(mindful)
    await session.commit()

    joined = await client.post(f"/api/v1/challenges/{fitness.id}/join", headers=headers)
    assert joined.status_code == 204

    listed = await client.get("/api/v1/challenges/", headers=headers)
    assert [(c["title"], c["joined"], c["progress"]) for c in listed.json()] == [
        ("30-Day Fitness Challenge", True, 0),
        ("Mindful Mornings", False, None),
    ]


@pytest.mark.integration
async def test_join_missing_challenge(client: AsyncClient, session: AsyncSession):
    user = await create_user(session)
    response = await client.post("/api/v1/challenges/404/join", headers=get_auth_headers(user))
    assert response.status_code == 404
