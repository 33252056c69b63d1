from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import TypeVar

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.messages import TaskMessages
from app.models.task import Daily, DailyLog, Difficulty, Habit, HabitLog, Reward, Todo
from app.models.user import User
from app.services.users import award_gold, spend_gold

logger = logging.getLogger(__name__)

TaskModel = TypeVar("TaskModel", Habit, Daily, Todo, Reward)

_NOT_FOUND_MESSAGES: dict[type[SQLModel], str] = {
    Habit: TaskMessages.HABIT_NOT_FOUND,
    Daily: TaskMessages.DAILY_NOT_FOUND,
    Todo: TaskMessages.TODO_NOT_FOUND,
    Reward: TaskMessages.REWARD_NOT_FOUND,
}


class TaskNotFound(Exception):
    """Raised when a task does not exist for the requesting user."""


class TaskAlreadyCompleted(Exception):
    """Raised when a to-do is completed a second time."""


def gold_for_difficulty(difficulty: Difficulty | str) -> int:
    return settings.HABIT_REWARDS.get(Difficulty(difficulty).value, 0)


async def list_tasks(session: AsyncSession, model: type[TaskModel], *, user_id: int) -> list[TaskModel]:
    stmt = select(model).where(model.user_id == user_id).order_by(model.id.asc())
    result = await session.exec(stmt)
    return list(result.all())


async def get_task(session: AsyncSession, model: type[TaskModel], *, user_id: int, task_id: int) -> TaskModel:
    result = await session.exec(select(model).where(model.id == task_id, model.user_id == user_id))
    task = result.one_or_none()
    if task is None:
        raise TaskNotFound(_NOT_FOUND_MESSAGES[model])
    return task


async def create_task(session: AsyncSession, model: type[TaskModel], *, user_id: int, **fields) -> TaskModel:
    task = model(user_id=user_id, **fields)
    session.add(task)
    await session.flush()
    return task


async def complete_habit(
    session: AsyncSession,
    *,
    user: User,
    habit_id: int,
    when: datetime | None = None,
) -> int:
    habit = await get_task(session, Habit, user_id=user.id, task_id=habit_id)
    session.add(
        HabitLog(
            user_id=user.id,
            habit_id=habit.id,
            completed=True,
            date=when or datetime.now(timezone.utc),
        )
    )
    gold = gold_for_difficulty(habit.difficulty)
    award_gold(user, gold)
    session.add(user)
    await session.flush()
    logger.info("User %s completed habit %s (+%s gold)", user.id, habit.id, gold)
    return gold


async def complete_daily(
    session: AsyncSession,
    *,
    user: User,
    daily_id: int,
    notes: str | None = None,
    when: datetime | None = None,
) -> int:
    daily = await get_task(session, Daily, user_id=user.id, task_id=daily_id)
    session.add(
        DailyLog(
            user_id=user.id,
            daily_id=daily.id,
            date=when or datetime.now(timezone.utc),
            notes=notes,
        )
    )
    gold = gold_for_difficulty(daily.difficulty)
    award_gold(user, gold)
    session.add(user)
    await session.flush()
    logger.info("User %s completed daily %s (+%s gold)", user.id, daily.id, gold)
    return gold


async def complete_todo(session: AsyncSession, *, user: User, todo_id: int) -> int:
    todo = await get_task(session, Todo, user_id=user.id, task_id=todo_id)
    if todo.completed:
        raise TaskAlreadyCompleted(TaskMessages.TODO_ALREADY_COMPLETED)
    todo.completed = True
    session.add(todo)
    gold = gold_for_difficulty(Difficulty.medium)
    award_gold(user, gold)
    session.add(user)
    await session.flush()
    return gold


async def redeem_reward(session: AsyncSession, *, user: User, reward_id: int) -> int:
    reward = await get_task(session, Reward, user_id=user.id, task_id=reward_id)
    spend_gold(user, reward.cost)
    session.add(user)
    await session.flush()
    logger.info("User %s redeemed reward %s (-%s gold)", user.id, reward.id, reward.cost)
    return reward.cost
