from datetime import datetime, timedelta, timezone

import pytest
from trafficpulse.common.exceptions import AuthenticationError
from trafficpulse.dashboard.infrastructure import PasswordHasher, TokenSigner

def test_password_round_trip():
    hasher = PasswordHasher(rounds=4)
    hashed = hasher.hash("secret123")
    assert hashed.startswith("$2")
    assert hasher.verify("secret123", hashed)
    assert not hasher.verify("secret124", hashed)

def test_verify_against_garbage_hash():
    assert PasswordHasher(rounds=4).verify("secret123", "not-a-hash") is False

def test_token_round_trip():
    signer = TokenSigner("s3cret")
    assert signer.verify(signer.issue("C007")) == "C007"

def test_expired_token():
    signer = TokenSigner("s3cret", expire_minutes=1)
    token = signer.issue("C007", now=datetime.now(timezone.utc) - timedelta(hours=1))
    with pytest.raises(AuthenticationError):
        signer.verify(token)

def test_tampered_token():
    signer = TokenSigner("s3cret")
    with pytest.raises(AuthenticationError):
        signer.verify(signer.issue("C007") + "x")
