"""Authentication routes."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from sehc.core.database import get_db
from sehc.core.security import get_current_user
from sehc.handlers import auth as handlers
from sehc.models import User
from sehc.schemas import RegisterResponse, TokenResponse, UserLogin, UserOut, UserRegister

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@router.post(
    "/registerUser",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
def register(payload: UserRegister, db: Session = Depends(get_db)) -> Response:
    return handlers.register_user(db, payload).to_response()


@router.post("/login", response_model=TokenResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)) -> Response:
    return handlers.login(db, payload).to_response()


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)) -> Response:
    return handlers.me(current_user).to_response()
