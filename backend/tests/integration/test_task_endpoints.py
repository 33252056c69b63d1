"""
Integration tests for task endpoints.

Tests the habit, daily, to-do and reward endpoints including:
- Creating and listing each task kind
- Completing tasks for gold
- Redeeming rewards
"""

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.messages import ShopMessages, TaskMessages
from app.testing import create_user, get_auth_headers


@pytest.mark.integration
async def test_create_and_complete_habit(client: AsyncClient, session: AsyncSession):
    user = await create_user(session)
    headers = get_auth_headers(user)

    created = await client.post(
        "/api/v1/habits",
        json={"title": "Exercise for 30 minutes", "difficulty": "medium"},
        headers=headers,
    )
    assert created.status_code == 201
    habit_id = created.json()["id"]

    listed = await client.get("/api/v1/habits", headers=headers)
    assert [habit["title"] for habit in listed.json()] == ["Exercise for 30 minutes"]

    completed = await client.post(f"/api/v1/habits/{habit_id}/complete", headers=headers)
    assert completed.status_code == 200
    assert completed.json() == {"gold_awarded": 10, "gold": 10}


@pytest.mark.integration
async def test_complete_daily_with_notes(client: AsyncClient, session: AsyncSession):
    user = await create_user(session)
    headers = get_auth_headers(user)
    created = await client.post("/api/v1/dailies", json={"title": "Morning Meditation"}, headers=headers)

    response = await client.post(
        f"/api/v1/dailies/{created.json()['id']}/complete",
        json={"notes": "A good session."},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["gold_awarded"] == 5


@pytest.mark.integration
async def test_todo_second_completion_conflicts(client: AsyncClient, session: AsyncSession):
    user = await create_user(session)
    headers = get_auth_headers(user)
    created = await client.post("/api/v1/todos", json={"title": "Buy groceries"}, headers=headers)
    todo_id = created.json()["id"]
    assert created.json()["completed"] is False

    first = await client.post(f"/api/v1/todos/{todo_id}/complete", headers=headers)
    second = await client.post(f"/api/v1/todos/{todo_id}/complete", headers=headers)

    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["detail"] == TaskMessages.TODO_ALREADY_COMPLETED


@pytest.mark.integration
async def test_redeem_reward(client: AsyncClient, session: AsyncSession):
    user = await create_user(session, gold=60)
    headers = get_auth_headers(user)
    created = await client.post("/api/v1/rewards", json={"title": "Watch a movie", "cost": 50}, headers=headers)
    reward_id = created.json()["id"]

    first = await client.post(f"/api/v1/rewards/{reward_id}/redeem", headers=headers)
    assert first.json() == {"gold_spent": 50, "gold": 10}

    second = await client.post(f"/api/v1/rewards/{reward_id}/redeem", headers=headers)
    assert second.status_code == 400
    assert second.json()["detail"] == ShopMessages.NOT_ENOUGH_GOLD


@pytest.mark.integration
async def test_cannot_complete_someone_elses_habit(client: AsyncClient, session: AsyncSession):
    owner = await create_user(session)
    other = await create_user(session)
    created = await client.post("/api/v1/habits", json={"title": "Read"}, headers=get_auth_headers(owner))

    response = await client.post(
        f"/api/v1/habits/{created.json()['id']}/complete",
        headers=get_auth_headers(other),
    )
    assert response.status_code == 404
    assert response.json()["detail"] == TaskMessages.HABIT_NOT_FOUND
