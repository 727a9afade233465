"""Shared API dependencies for viewer identity and store access."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from board_reader.core.security import decode_ident
from board_reader.core.settings import settings
from board_reader.db.session import get_db
from board_reader.services.access import AccessPolicy, Ident
from board_reader.store import ReadStore, SqlStore

# Anonymous viewers are allowed, so a missing header is not an error.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_ident(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Ident:
    """Resolve the viewer identity from an optional bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any

    Returns:
        The decoded identity, or an anonymous one without a token

    Raises:
        HTTPException: If a token is present but invalid
    """
    if credentials is None:
        return Ident.anonymous()
    try:
        return decode_ident(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


def get_store(db: SessionDep) -> ReadStore:
    """Return a store reading through the request's session."""
    return SqlStore(db)


def get_policy() -> AccessPolicy:
    """Return the board access policy from settings."""
    return AccessPolicy.from_settings(settings)


IdentDep = Annotated[Ident, Depends(get_ident)]
StoreDep = Annotated[ReadStore, Depends(get_store)]
PolicyDep = Annotated[AccessPolicy, Depends(get_policy)]
