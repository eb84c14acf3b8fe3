"""
FastAPI dependencies shared by the routers.
"""
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.session_manager.db_session import Database
from app.services.analytics import BaselineAnalyticsService, SQLAlchemyReadingStore
from app.services.analytics.store import ReadingStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """Identity taken from a verified access token."""

    id: UUID
    email: Optional[str] = None


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """One session per request; committed on success, rolled back on error."""
    async with Database() as session:
        yield session


def _extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization token required.",
        )
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header.",
        )
    return parts[1].strip()


async def get_current_user(request: Request) -> CurrentUser:
    """
    Verify the bearer token issued by the identity provider.

    The user id is read from ``sub`` (or ``userId`` for older tokens).
    """
    token = _extract_bearer_token(request.headers.get("Authorization"))
    auth_config = request.app.state.config.section("auth")

    try:
        payload = jwt.decode(
            token,
            auth_config["jwt_secret"],
            algorithms=[auth_config.get("jwt_algorithm", "HS256")],
        )
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token, authorization denied.",
        )

    subject = payload.get("sub") or payload.get("userId")
    try:
        user_id = UUID(str(subject))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload.",
        )

    return CurrentUser(id=user_id, email=payload.get("email"))


async def get_reading_store(
    session: AsyncSession = Depends(get_db_session),
) -> ReadingStore:
    return SQLAlchemyReadingStore(session)


async def get_analytics_service(
    store: ReadingStore = Depends(get_reading_store),
) -> BaselineAnalyticsService:
    return BaselineAnalyticsService(store)
