"""Request dependencies that establish the caller's identity."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from identity.auth.tokens import resolve_identity
from shared.api import get_app_settings, get_database
from shared.config import Settings
from shared.db import Database

bearer_scheme = HTTPBearer(auto_error=False)


def current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> int:
    token = credentials.credentials if credentials is not None else None
    with database.session() as session:
        return resolve_identity(token, session, settings)
