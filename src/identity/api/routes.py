"""FastAPI endpoints for the Identity domain: the caller's own profile."""

import structlog
from fastapi import APIRouter, Depends

from identity.api.dependencies import current_user_id
from identity.api.schemas import ProfileResponse, UpdateProfileRequest
from identity.customer.profile import Profile, SqlProfileStore
from shared.api import get_database
from shared.db import Database

logger = structlog.get_logger(__name__)

profile_router = APIRouter(prefix="/profile", tags=["profile"])


@profile_router.get("", response_model=ProfileResponse)
def get_profile(
    user_id: int = Depends(current_user_id),
    database: Database = Depends(get_database),
) -> ProfileResponse:
    with database.session() as session:
        profile = SqlProfileStore(session).get(user_id)
    return ProfileResponse.from_profile(profile)


@profile_router.put("", response_model=ProfileResponse)
def update_profile(
    body: UpdateProfileRequest,
    user_id: int = Depends(current_user_id),
    database: Database = Depends(get_database),
) -> ProfileResponse:
    # The profile always belongs to the caller, whatever the body says
    profile = Profile(user_id=user_id, **body.model_dump())
    with database.session() as session, session.begin():
        saved = SqlProfileStore(session).save(profile)
    logger.info("profile.updated", user_id=user_id)
    return ProfileResponse.from_profile(saved)
