"""Schemas for User entities and authentication."""

from datetime import datetime

from pydantic import BaseModel, constr

Username = constr(strip_whitespace=True, min_length=1, max_length=150)


class UserRegister(BaseModel):
    username: Username
    name: constr(strip_whitespace=True, min_length=1)
    lastName: constr(strip_whitespace=True, min_length=1)


class UserLogin(BaseModel):
    username: Username


class UserOut(BaseModel):
    id: int
    username: str
    name: str
    lastName: str
    createdAt: datetime | None = None


class RegisterResponse(BaseModel):
    message: str
    user: UserOut


class TokenResponse(BaseModel):
    token: str
