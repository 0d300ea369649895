"""
Credential helpers: password hashing and bearer token issue/verify
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from werkzeug.security import generate_password_hash, check_password_hash
from food_delivery.core.errors import Unauthorized

def get_password_hash(password: str) -> str:
    return generate_password_hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return check_password_hash(hashed_password, plain_password)

def create_access_token(
    user_id: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Issue a signed token whose subject is the user id"""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=15))
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, secret_key, algorithm=algorithm)

def verify_token(token: str, secret_key: str, algorithm: str = "HS256") -> str:
    """Decode a bearer token into the user id it was issued for.

    Pure check of signature and expiry, the user record is not consulted.
    Raises Unauthorized for anything that does not decode to a subject.
    """
    if not token:
        raise Unauthorized()
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("Invalid token")
    return user_id
