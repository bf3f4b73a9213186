import uuid
from datetime import timedelta

import pytest

from utils.decorators import authenticate, authorize_ownership
from utils.exceptions import InvalidSignature, MissingHeader, MissingScheme, TokenExpired
from utils.security import create_access_token

SECRET = "Test-Secret-Key_for-Automation-Only-987654321!"


class TestAuthenticate:
    def test_valid_header(self):
        user_id = uuid.uuid4()
        token = create_access_token(user_id, SECRET, timedelta(hours=1))

        assert authenticate(f"Bearer {token}", SECRET) == user_id

    def test_missing_header(self):
        with pytest.raises(MissingHeader):
            authenticate(None, SECRET)

    def test_wrong_scheme(self):
        token = create_access_token(uuid.uuid4(), SECRET, timedelta(hours=1))

        with pytest.raises(MissingScheme):
            authenticate(f"Token {token}", SECRET)

    def test_wrong_secret(self):
        token = create_access_token(uuid.uuid4(), SECRET, timedelta(hours=1))

        with pytest.raises(InvalidSignature):
            authenticate(f"Bearer {token}", "not-the-signing-secret-at-all-0000")

    def test_expired(self):
        token = create_access_token(uuid.uuid4(), SECRET, timedelta(seconds=-10))

        with pytest.raises(TokenExpired):
            authenticate(f"Bearer {token}", SECRET)


class TestAuthorizeOwnership:
    def test_owner(self):
        user_id = uuid.uuid4()

        assert authorize_ownership(user_id, str(user_id)) is True
        assert authorize_ownership(user_id, user_id) is True

    def test_not_owner(self):
        assert authorize_ownership(uuid.uuid4(), str(uuid.uuid4())) is False

    def test_missing_identity(self):
        assert authorize_ownership(None, str(uuid.uuid4())) is False
