"""Tests for bearer-token issue and verification (no database)."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from identity.auth.tokens import decode_token, issue_token
from shared.config import Settings
from shared.errors import ErrorKind, UnauthenticatedError


@pytest.fixture()
def token_settings():
    return Settings(_env_file=None, jwt_secret="unit-secret")


class TestIssueToken:
    def test_subject_is_the_username(self, token_settings):
        token = issue_token("joe", token_settings)
        payload = jwt.decode(token, "unit-secret", algorithms=["HS256"])
        assert payload["sub"] == "joe"
        assert payload["exp"] > payload["iat"]

    def test_round_trip(self, token_settings):
        assert decode_token(issue_token("joe", token_settings), token_settings) == "joe"


class TestDecodeToken:
    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, token_settings, token):
        with pytest.raises(UnauthenticatedError) as exc:
            decode_token(token, token_settings)
        assert exc.value.kind == ErrorKind.UNAUTHENTICATED

    def test_garbage_token(self, token_settings):
        with pytest.raises(UnauthenticatedError):
            decode_token("not-a-jwt", token_settings)

    def test_expired_token(self, token_settings):
        token = issue_token("joe", token_settings, expires_in=timedelta(seconds=-5))
        with pytest.raises(UnauthenticatedError) as exc:
            decode_token(token, token_settings)
        assert exc.value.messages == {"token": ["Token has expired"]}

    def test_token_signed_with_another_secret(self, token_settings):
        token = issue_token("joe", Settings(_env_file=None, jwt_secret="someone-else"))
        with pytest.raises(UnauthenticatedError):
            decode_token(token, token_settings)

    def test_token_without_subject(self, token_settings):
        token = jwt.encode({"exp": datetime.now(UTC) + timedelta(minutes=5)}, "unit-secret", algorithm="HS256")
        with pytest.raises(UnauthenticatedError):
            decode_token(token, token_settings)

    def test_token_without_expiry(self, token_settings):
        token = jwt.encode({"sub": "joe"}, "unit-secret", algorithm="HS256")
        with pytest.raises(UnauthenticatedError):
            decode_token(token, token_settings)
