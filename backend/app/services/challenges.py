from __future__ import annotations

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.messages import ChallengeMessages
from app.models.challenge import Challenge, UserChallenge


class ChallengeNotFound(Exception):
    def __init__(self, message: str = ChallengeMessages.CHALLENGE_NOT_FOUND):
        super().__init__(message)


async def get_challenge_by_title(session: AsyncSession, title: str) -> Challenge | None:
    result = await session.exec(select(Challenge).where(Challenge.title == title).order_by(Challenge.id.asc()))
    return result.first()


async def list_challenges(
    session: AsyncSession,
    *,
    user_id: int,
) -> list[tuple[Challenge, UserChallenge | None]]:
    """All challenges, each paired with the user's participation if any."""
    stmt = (
        select(Challenge, UserChallenge)
        .join(
            UserChallenge,
            (UserChallenge.challenge_id == Challenge.id) & (UserChallenge.user_id == user_id),
            isouter=True,
        )
        .order_by(Challenge.id.asc())
    )
    result = await session.exec(stmt)
    return list(result.all())


async def join_challenge(session: AsyncSession, *, challenge_id: int, user_id: int) -> UserChallenge:
    if await session.get(Challenge, challenge_id) is None:
        raise ChallengeNotFound()
    result = await session.exec(
        select(UserChallenge).where(
            UserChallenge.challenge_id == challenge_id,
            UserChallenge.user_id == user_id,
        )
    )
    participation = result.one_or_none()
    if participation:
        return participation
    participation = UserChallenge(challenge_id=challenge_id, user_id=user_id)
    session.add(participation)
    await session.flush()
    return participation
