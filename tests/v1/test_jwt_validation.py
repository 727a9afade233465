# tests/v1/test_jwt_validation.py
"""Tests for bearer token handling and viewer identity resolution."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import status
from jose import JWTError, jwt

from board_reader.core.security import create_access_token, decode_ident
from board_reader.core.settings import settings
from board_reader.services.access import SEE_MNEMONICS


def _token(claims: dict, secret: str | None = None, algorithm: str | None = None) -> str:
    payload = {"exp": datetime.now(UTC) + timedelta(minutes=5), **claims}
    return jwt.encode(
        payload,
        secret or settings.secret_key,
        algorithm=algorithm or settings.jwt_algorithm,
    )


class TestDecodeIdent:
    """Test mapping of token claims to identities."""

    def test_round_trip_claims(self):
        """Test that capabilities and memberships survive encoding."""
        token = create_access_token("mod", [SEE_MNEMONICS], ["staff"])
        ident = decode_ident(token)
        assert ident.user_id == "mod"
        assert ident.capabilities == frozenset({SEE_MNEMONICS})
        assert ident.boards == frozenset({"staff"})

    def test_missing_claims_mean_no_capabilities(self):
        ident = decode_ident(_token({"sub": "plain"}))
        assert ident.capabilities == frozenset()
        assert ident.boards == frozenset()

    def test_malformed_capability_claim(self):
        with pytest.raises(JWTError):
            decode_ident(_token({"sub": "x", "caps": "seeModeration"}))

    def test_wrong_secret(self):
        with pytest.raises(JWTError):
            decode_ident(_token({"sub": "x"}, secret="wrong_secret_key"))


class TestBearerAuthentication:
    """Test identity resolution on the HTTP layer."""

    def test_no_token_is_anonymous(self, client):
        """Test that anonymous viewers are served."""
        response = client.get("/api/v1/boards/a")
        assert response.status_code == status.HTTP_200_OK

    def test_jwt_without_bearer_prefix(self, client):
        """Test that a non-bearer authorization header is ignored."""
        response = client.get(
            "/api/v1/boards/a",
            headers={"Authorization": "InvalidToken123"}
        )
        assert response.status_code == status.HTTP_200_OK

    def test_jwt_with_malformed_token(self, client):
        """Test that malformed JWT tokens are rejected."""
        response = client.get(
            "/api/v1/boards/a",
            headers={"Authorization": "Bearer not.a.valid.jwt"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_jwt_with_wrong_secret(self, client):
        """Test that JWT tokens signed with wrong secret are rejected."""
        token = _token({"sub": "mod", "caps": [SEE_MNEMONICS]}, secret="wrong_secret_key")
        response = client.get(
            "/api/v1/boards/a",
            headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_jwt_with_wrong_algorithm(self, client):
        """Test that JWT tokens with wrong algorithm are rejected."""
        token = _token({"sub": "mod"}, algorithm="HS512")
        response = client.get(
            "/api/v1/boards/a",
            headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_jwt_with_expired_token(self, client):
        """Test that expired JWT tokens are rejected."""
        token = _token({"sub": "mod", "exp": datetime.now(UTC) - timedelta(minutes=1)})
        response = client.get(
            "/api/v1/boards/a",
            headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Could not validate credentials"
