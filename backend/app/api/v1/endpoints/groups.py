from typing import List

from fastapi import APIRouter, HTTPException, status

from app.api.deps import CurrentUser, SessionDep
from app.models.group import Group, UserGroup, UserGroupRole
from app.schemas.group import GroupCreate, GroupMessageCreate, GroupMessageRead, GroupRead
from app.services import groups as groups_service

router = APIRouter()


def _serialize_group(group: Group, membership: UserGroup) -> GroupRead:
    return GroupRead(
        id=group.id,
        name=group.name,
        description=group.description,
        role=membership.role,
        created_at=group.created_at,
    )


@router.get("/", response_model=List[GroupRead])
async def list_groups(session: SessionDep, current_user: CurrentUser) -> List[GroupRead]:
    memberships = await groups_service.list_memberships(session, user_id=current_user.id)
    return [_serialize_group(group, membership) for group, membership in memberships]


@router.post("/", response_model=GroupRead, status_code=status.HTTP_201_CREATED)
async def create_group(group_in: GroupCreate, session: SessionDep, current_user: CurrentUser) -> GroupRead:
    name = group_in.name.strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Group name is required")
    try:
        group = await groups_service.create_group(
            session,
            name=name,
            description=group_in.description,
            owner=current_user,
        )
    except groups_service.GroupNameTaken as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    await session.commit()
    membership = await groups_service.get_membership(session, group_id=group.id, user_id=current_user.id)
    return _serialize_group(group, membership)


@router.post("/{group_id}/join", response_model=GroupRead)
async def join_group(group_id: int, session: SessionDep, current_user: CurrentUser) -> GroupRead:
    try:
        group = await groups_service.get_group(session, group_id)
    except groups_service.GroupNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    membership = await groups_service.ensure_membership(
        session,
        group_id=group.id,
        user_id=current_user.id,
        role=UserGroupRole.member,
    )
    await session.commit()
    return _serialize_group(group, membership)


@router.get("/{group_id}/messages", response_model=List[GroupMessageRead])
async def list_messages(group_id: int, session: SessionDep, current_user: CurrentUser) -> List[GroupMessageRead]:
    try:
        rows = await groups_service.list_messages(session, group_id=group_id, user_id=current_user.id)
    except groups_service.GroupNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except groups_service.GroupError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    return [
        GroupMessageRead(
            id=message.id,
            group_id=message.group_id,
            user_id=message.user_id,
            username=username,
            content=message.content,
            created_at=message.created_at,
        )
        for message, username in rows
    ]


@router.post("/{group_id}/messages", response_model=GroupMessageRead, status_code=status.HTTP_201_CREATED)
async def post_message(
    group_id: int,
    payload: GroupMessageCreate,
    session: SessionDep,
    current_user: CurrentUser,
) -> GroupMessageRead:
    try:
        message = await groups_service.post_message(
            session,
            group_id=group_id,
            user_id=current_user.id,
            content=payload.content,
        )
    except groups_service.GroupNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except groups_service.GroupError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await session.commit()
    return GroupMessageRead(
        id=message.id,
        group_id=message.group_id,
        user_id=message.user_id,
        username=current_user.username,
        content=message.content,
        created_at=message.created_at,
    )
