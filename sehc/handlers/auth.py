"""Password-less user registration and token issuance."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from sehc.core import results
from sehc.core.results import Result
from sehc.core.security import issue_user_token
from sehc.models import User
from sehc.schemas import RegisterResponse, TokenResponse, UserLogin, UserOut, UserRegister

logger = logging.getLogger("sehc.handlers.auth")

USERNAME_TAKEN = "Username already taken"


def serialize_user(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        name=user.name,
        lastName=user.last_name,
        createdAt=user.created_at,
    )


def register_user(db: Session, payload: UserRegister) -> Result:
    try:
        if db.query(User.id).filter(User.username == payload.username).first():
            logger.warning("[POST] auth/register - username %r already taken", payload.username)
            return results.conflict(USERNAME_TAKEN)

        user = User(username=payload.username, name=payload.name, last_name=payload.lastName)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("[POST] auth/register - username %r taken concurrently", payload.username)
            return results.conflict(USERNAME_TAKEN)
        db.refresh(user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[POST] auth/register - database error")
        return results.internal_error()

    logger.info("[POST] auth/register - user %r created", user.username)
    return results.created(
        RegisterResponse(message=f"User with username {user.username} created", user=serialize_user(user))
    )


def login(db: Session, payload: UserLogin) -> Result:
    try:
        user = db.query(User).filter(User.username == payload.username).first()
    except SQLAlchemyError:
        logger.exception("[POST] auth/login - database error")
        return results.internal_error()

    if user is None:
        logger.warning("[POST] auth/login - unknown username %r", payload.username)
        return results.unauthorized("Username does not exist")

    logger.info("[POST] auth/login - token issued for %r", user.username)
    return results.ok(TokenResponse(token=issue_user_token(user)))


def me(user: User) -> Result:
    return results.ok(serialize_user(user))
