from __future__ import annotations

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.messages import GroupMessages
from app.models.group import Group, GroupMessage, UserGroup, UserGroupRole
from app.models.user import User


class GroupNotFound(Exception):
    def __init__(self, message: str = GroupMessages.GROUP_NOT_FOUND):
        super().__init__(message)


class GroupError(Exception):
    """Raised for group operations the caller is not allowed to perform."""


class GroupNameTaken(GroupError):
    def __init__(self, message: str = GroupMessages.GROUP_NAME_TAKEN):
        super().__init__(message)


async def get_group(session: AsyncSession, group_id: int) -> Group:
    group = await session.get(Group, group_id)
    if group is None:
        raise GroupNotFound()
    return group


async def get_group_by_name(session: AsyncSession, name: str) -> Group | None:
    result = await session.exec(select(Group).where(Group.name == name))
    return result.one_or_none()


async def get_membership(session: AsyncSession, *, group_id: int, user_id: int) -> UserGroup | None:
    result = await session.exec(
        select(UserGroup).where(UserGroup.group_id == group_id, UserGroup.user_id == user_id)
    )
    return result.one_or_none()


async def ensure_membership(
    session: AsyncSession,
    *,
    group_id: int,
    user_id: int,
    role: UserGroupRole = UserGroupRole.member,
) -> UserGroup:
    """Return the existing membership or add the user with ``role``."""
    membership = await get_membership(session, group_id=group_id, user_id=user_id)
    if membership:
        return membership
    membership = UserGroup(group_id=group_id, user_id=user_id, role=role)
    session.add(membership)
    await session.flush()
    return membership


async def create_group(
    session: AsyncSession,
    *,
    name: str,
    description: str | None,
    owner: User,
) -> Group:
    if await get_group_by_name(session, name):
        raise GroupNameTaken()
    group = Group(name=name, description=description)
    session.add(group)
    await session.flush()
    await ensure_membership(session, group_id=group.id, user_id=owner.id, role=UserGroupRole.owner)
    return group


async def list_memberships(session: AsyncSession, *, user_id: int) -> list[tuple[Group, UserGroup]]:
    stmt = (
        select(Group, UserGroup)
        .join(UserGroup, UserGroup.group_id == Group.id)
        .where(UserGroup.user_id == user_id)
        .order_by(UserGroup.joined_at.asc(), Group.id.asc())
    )
    result = await session.exec(stmt)
    return list(result.all())


async def _require_member(session: AsyncSession, *, group_id: int, user_id: int) -> UserGroup:
    await get_group(session, group_id)
    membership = await get_membership(session, group_id=group_id, user_id=user_id)
    if membership is None:
        raise GroupError(GroupMessages.NOT_A_MEMBER)
    return membership


async def post_message(session: AsyncSession, *, group_id: int, user_id: int, content: str) -> GroupMessage:
    cleaned = content.strip()
    if not cleaned:
        raise ValueError(GroupMessages.EMPTY_MESSAGE)
    await _require_member(session, group_id=group_id, user_id=user_id)
    message = GroupMessage(group_id=group_id, user_id=user_id, content=cleaned)
    session.add(message)
    await session.flush()
    return message


async def list_messages(
    session: AsyncSession,
    *,
    group_id: int,
    user_id: int,
) -> list[tuple[GroupMessage, str]]:
    """Messages oldest first, paired with the author's username."""
    await _require_member(session, group_id=group_id, user_id=user_id)
    stmt = (
        select(GroupMessage, User.username)
        .join(User, User.id == GroupMessage.user_id)
        .where(GroupMessage.group_id == group_id)
        .order_by(GroupMessage.created_at.asc(), GroupMessage.id.asc())
    )
    result = await session.exec(stmt)
    return list(result.all())
