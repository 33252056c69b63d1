from typing import List, Optional

from fastapi import APIRouter, HTTPException, status

from app.api.deps import CurrentUser, SessionDep
from app.models.task import Daily, Habit, Reward, Todo
from app.schemas.task import (
    CompletionResult,
    DailyCompleteRequest,
    DailyCreate,
    DailyRead,
    HabitCreate,
    HabitRead,
    RedeemResult,
    RewardCreate,
    RewardRead,
    TodoCreate,
    TodoRead,
)
from app.services import tasks as tasks_service
from app.services.users import InsufficientFundsError

router = APIRouter()


def _not_found(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/habits", response_model=List[HabitRead])
async def list_habits(session: SessionDep, current_user: CurrentUser) -> List[Habit]:
    return await tasks_service.list_tasks(session, Habit, user_id=current_user.id)


@router.post("/habits", response_model=HabitRead, status_code=status.HTTP_201_CREATED)
async def create_habit(habit_in: HabitCreate, session: SessionDep, current_user: CurrentUser) -> Habit:
    habit = await tasks_service.create_task(session, Habit, user_id=current_user.id, **habit_in.model_dump())
    await session.commit()
    return habit


@router.post("/habits/{habit_id}/complete", response_model=CompletionResult)
async def complete_habit(habit_id: int, session: SessionDep, current_user: CurrentUser) -> CompletionResult:
    try:
        gold = await tasks_service.complete_habit(session, user=current_user, habit_id=habit_id)
    except tasks_service.TaskNotFound as exc:
        raise _not_found(exc) from exc
    await session.commit()
    return CompletionResult(gold_awarded=gold, gold=current_user.gold)


@router.get("/dailies", response_model=List[DailyRead])
async def list_dailies(session: SessionDep, current_user: CurrentUser) -> List[Daily]:
    return await tasks_service.list_tasks(session, Daily, user_id=current_user.id)


@router.post("/dailies", response_model=DailyRead, status_code=status.HTTP_201_CREATED)
async def create_daily(daily_in: DailyCreate, session: SessionDep, current_user: CurrentUser) -> Daily:
    daily = await tasks_service.create_task(session, Daily, user_id=current_user.id, **daily_in.model_dump())
    await session.commit()
    return daily


@router.post("/dailies/{daily_id}/complete", response_model=CompletionResult)
async def complete_daily(
    daily_id: int,
    session: SessionDep,
    current_user: CurrentUser,
    payload: Optional[DailyCompleteRequest] = None,
) -> CompletionResult:
    try:
        gold = await tasks_service.complete_daily(
            session,
            user=current_user,
            daily_id=daily_id,
            notes=payload.notes if payload else None,
        )
    except tasks_service.TaskNotFound as exc:
        raise _not_found(exc) from exc
    await session.commit()
    return CompletionResult(gold_awarded=gold, gold=current_user.gold)


@router.get("/todos", response_model=List[TodoRead])
async def list_todos(session: SessionDep, current_user: CurrentUser) -> List[Todo]:
    return await tasks_service.list_tasks(session, Todo, user_id=current_user.id)


@router.post("/todos", response_model=TodoRead, status_code=status.HTTP_201_CREATED)
async def create_todo(todo_in: TodoCreate, session: SessionDep, current_user: CurrentUser) -> Todo:
    todo = await tasks_service.create_task(session, Todo, user_id=current_user.id, **todo_in.model_dump())
    await session.commit()
    return todo


@router.post("/todos/{todo_id}/complete", response_model=CompletionResult)
async def complete_todo(todo_id: int, session: SessionDep, current_user: CurrentUser) -> CompletionResult:
    try:
        gold = await tasks_service.complete_todo(session, user=current_user, todo_id=todo_id)
    except tasks_service.TaskNotFound as exc:
        raise _not_found(exc) from exc
    except tasks_service.TaskAlreadyCompleted as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    await session.commit()
    return CompletionResult(gold_awarded=gold, gold=current_user.gold)


@router.get("/rewards", response_model=List[RewardRead])
async def list_rewards(session: SessionDep, current_user: CurrentUser) -> List[Reward]:
    return await tasks_service.list_tasks(session, Reward, user_id=current_user.id)


@router.post("/rewards", response_model=RewardRead, status_code=status.HTTP_201_CREATED)
async def create_reward(reward_in: RewardCreate, session: SessionDep, current_user: CurrentUser) -> Reward:
    reward = await tasks_service.create_task(session, Reward, user_id=current_user.id, **reward_in.model_dump())
    await session.commit()
    return reward


@router.post("/rewards/{reward_id}/redeem", response_model=RedeemResult)
async def redeem_reward(reward_id: int, session: SessionDep, current_user: CurrentUser) -> RedeemResult:
    try:
        spent = await tasks_service.redeem_reward(session, user=current_user, reward_id=reward_id)
    except tasks_service.TaskNotFound as exc:
        raise _not_found(exc) from exc
    except InsufficientFundsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await session.commit()
    return RedeemResult(gold_spent=spent, gold=current_user.gold)
