"""Bearer token helpers mapping JWT claims to viewer identities.

Tokens are issued by the authentication service; this module only needs to
read them. ``create_access_token`` exists for tooling and tests.
"""
from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from board_reader.core.settings import settings
from board_reader.services.access import Ident


def create_access_token(
    subject: str,
    capabilities: Iterable[str] = (),
    boards: Iterable[str] = (),
) -> str:
    """Create a JWT carrying the viewer's capabilities and board memberships."""
    to_encode: dict[str, object] = {
        "sub": subject,
        "caps": sorted(capabilities),
        "boards": sorted(boards),
        "exp": datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes),
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_ident(token: str) -> Ident:
    """Decode a bearer token into an identity.

    Raises:
        JWTError: If the token is invalid, expired or carries malformed claims.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    caps = payload.get("caps", [])
    boards = payload.get("boards", [])
    if not isinstance(caps, list) or not isinstance(boards, list):
        raise JWTError("Malformed capability claims")
    return Ident.build(
        user_id=payload.get("sub"),
        capabilities=(str(cap) for cap in caps),
        boards=(str(board) for board in boards),
    )
