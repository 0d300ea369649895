from datetime import timedelta
import pytest
from food_delivery.core.errors import Unauthorized
from food_delivery.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    verify_token,
)

def test_token_round_trip():
    token = create_access_token("user-1", "secret", expires_delta=timedelta(minutes=5))
    assert verify_token(token, "secret") == "user-1"

def test_expired_token_is_rejected():
    token = create_access_token("user-1", "secret", expires_delta=timedelta(seconds=-1))
    with pytest.raises(Unauthorized, match="expired"):
        verify_token(token, "secret")

@pytest.mark.parametrize("token", ["", "not-a-jwt"])
def test_garbage_token_is_rejected(token):
    with pytest.raises(Unauthorized):
        verify_token(token, "secret")

def test_token_signed_with_other_key_is_rejected():
    token = create_access_token("user-1", "other", expires_delta=timedelta(minutes=5))
    with pytest.raises(Unauthorized):
        verify_token(token, "secret")

def test_password_hashing():
    hashed = get_password_hash("correct-horse")
    assert hashed != "correct-horse"
    assert verify_password("correct-horse", hashed)
    assert not verify_password("wrong-horse", hashed)
