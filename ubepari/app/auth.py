"""Admin login and bearer-token checks."""
import hmac
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Header, HTTPException

from .config import Config


def check_credentials(username: str, password: str) -> bool:
    user_ok = hmac.compare_digest((username or "").encode(), Config.ADMIN_USER.encode())
    pass_ok = hmac.compare_digest((password or "").encode(), Config.ADMIN_PASS.encode())
    return user_ok and pass_ok


def issue_token(username: str) -> str:
    expires = datetime.now(timezone.utc) + timedelta(days=Config.JWT_EXPIRES_DAYS)
    return jwt.encode({"username": username, "exp": expires}, Config.JWT_SECRET, algorithm=Config.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    return jwt.decode(token, Config.JWT_SECRET, algorithms=[Config.JWT_ALGORITHM])


def require_admin(authorization: Optional[str] = Header(None)) -> Dict[str, Any]:
    """FastAPI dependency for admin-only routes."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return decode_token(authorization.split(" ", 1)[1])
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")
