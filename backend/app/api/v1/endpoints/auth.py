import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError

from app.api.deps import SessionDep
from app.core.messages import AuthMessages
from app.core.rate_limit import LOGIN_RATE_LIMIT, limiter
from app.core.security import create_access_token
from app.models.user import User
from app.schemas.token import Token
from app.schemas.user import UserCreate, UserRead
from app.services import users as users_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(user_in: UserCreate, session: SessionDep) -> User:
    try:
        user = await users_service.create_user(
            session,
            email=user_in.email,
            username=user_in.username.strip(),
            password=user_in.password,
        )
        await session.commit()
    except users_service.UserConflictError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except IntegrityError as exc:  # pragma: no cover - concurrent registration
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unable to create user") from exc

    await session.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


@router.post("/token", response_model=Token)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login_access_token(
    request: Request,
    session: SessionDep,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
) -> Token:
    user = await users_service.authenticate(session, form_data.username, form_data.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=AuthMessages.BAD_CREDENTIALS)
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=AuthMessages.INACTIVE_USER)
    return Token(access_token=create_access_token(subject=user.id))
