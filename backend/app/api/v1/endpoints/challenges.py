from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from app.api.deps import CurrentUser, SessionDep
from app.schemas.challenge import ChallengeRead
from app.services import challenges as challenges_service

router = APIRouter()


@router.get("/", response_model=List[ChallengeRead])
async def list_challenges(session: SessionDep, current_user: CurrentUser) -> List[ChallengeRead]:
    rows = await challenges_service.list_challenges(session, user_id=current_user.id)
    return [
        ChallengeRead(
            id=challenge.id,
            title=challenge.title,
            description=challenge.description,
            goal=challenge.goal,
            joined=participation is not None,
            progress=participation.progress if participation else None,
            created_at=challenge.created_at,
        )
        for challenge, participation in rows
    ]


@router.post("/{challenge_id}/join", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def join_challenge(challenge_id: int, session: SessionDep, current_user: CurrentUser) -> Response:
    try:
        await challenges_service.join_challenge(session, challenge_id=challenge_id, user_id=current_user.id)
    except challenges_service.ChallengeNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
