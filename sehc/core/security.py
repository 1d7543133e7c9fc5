"""JWT helpers and the bearer-token dependency."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from sehc.core.config import settings
from sehc.core.database import get_db
from sehc.models import User

logger = logging.getLogger("sehc.security")

bearer_scheme = HTTPBearer(auto_error=False)


# JWT helpers ----------------------------------------------------------------

def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=settings.jwt_expire_hours))
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def issue_user_token(user: User) -> str:
    """Sign a token for ``user``; identity alone is enough, there is no password."""
    return create_access_token(
        {
            "sub": str(user.id),
            "idUser": user.id,
            "username": user.username,
            "name": user.name,
        }
    )


def decode_token(token: str) -> Dict[str, Any]:
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


# Dependencies ---------------------------------------------------------------

def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing or invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    invalid_token = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(credentials.credentials)
    except JWTError as exc:
        logger.warning("Rejected bearer token: %s", exc)
        raise invalid_token from exc

    user_id = payload.get("idUser")
    if not isinstance(user_id, int):
        raise invalid_token

    user = db.get(User, user_id)
    if user is None:
        raise invalid_token
    return user
