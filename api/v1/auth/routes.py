from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.db.dependencies import get_db
from models.user import User

from .schemas import LoginRequest, RegisterRequest, TokenResponse, UserPublic
from .services import authenticate_user, register_user
from .utils import create_access_token, get_current_user

router = APIRouter(tags=["Auth"])


def _token_response(user: User) -> TokenResponse:
    access_token = create_access_token(data={"sub": str(user.id)})
    return TokenResponse(access_token=access_token, user=UserPublic.model_validate(user))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    user = register_user(db, data)
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, data.username, data.password)
    return _token_response(user)


@router.get("/user", response_model=UserPublic)
def current_user_profile(current_user: User = Depends(get_current_user)):
    return current_user
