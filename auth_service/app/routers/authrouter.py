from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shared.core import auth
from shared.core.database import get_db
from shared.core.schemas import UserToken
from ..schemas import authchemas
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Inventory Auth"])


@router.post("/login", response_model=authchemas.AuthenticationResponse)
def login(
        req: authchemas.LoginRequest,
        db: Session = Depends(get_db)):
    return authservices.login(db, req)


@router.get("/me", response_model=authchemas.UserResponse)
def me(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return authservices.get_current_user(db, current_user.user_id)
