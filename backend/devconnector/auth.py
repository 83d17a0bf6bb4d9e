from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import hmac
import os
from fastapi import Header, HTTPException, status
from jose import JWTError, jwt
from devconnector.config import get_settings

settings = get_settings()

ALGORITHM = "HS256"
PBKDF2_ITERATIONS = 260000


def create_access_token(user_id: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(seconds=settings.jwt_expire_seconds)
    to_encode = {"user": {"id": user_id}, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    """Return the user id carried by token, or None if it is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
    user = payload.get("user") or {}
    return user.get("id")


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(password: str, hashed: str) -> bool:
    salt_hex, _, digest_hex = hashed.partition("$")
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), bytes.fromhex(salt_hex), PBKDF2_ITERATIONS
    )
    return hmac.compare_digest(digest.hex(), digest_hex)


async def get_current_user_id(
    authorization: Optional[str] = Header(None),
    x_auth_token: Optional[str] = Header(None),
) -> str:
    """
    Resolve the caller from "Authorization: Bearer <token>" or x-auth-token.

    Raises:
        HTTPException 401 when no token is sent or it does not verify
    """
    token = x_auth_token
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[len("bearer "):].strip()

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
        )

    user_id = decode_access_token(token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
        )
    return user_id
