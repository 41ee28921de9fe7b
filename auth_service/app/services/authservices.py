import logging
from fastapi import status
from sqlalchemy.orm import Session

from shared.core import auth
from shared.helpers.json_response_helper import error_response
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserStatus
from ..schemas import authchemas

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str):
    return db.query(Users).filter(Users.email == email.strip().lower()).first()


def login(db: Session, req: authchemas.LoginRequest) -> authchemas.AuthenticationResponse:
    user = get_user_by_email(db, req.email)

    # Same message for unknown email and wrong password
    if not user or not user.verify_password(req.password):
        logger.info("Failed login for %s", req.email)
        return error_response(
            message="Invalid email or password",
            status_code=AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if user.status.lower() != UserStatus.ACTIVE.value:
        return error_response(
            message="User is not active. Access denied",
            status_code=AppStatusCode.AUTHENTICATION_USER_INACTIVE,
            http_status=status.HTTP_403_FORBIDDEN
        )

    token = auth.create_access_token({
        "user_id": str(user.id),
        "email": user.email,
    })

    return authchemas.AuthenticationResponse(
        access_token=token,
        user=authchemas.UserResponse.model_validate(user)
    )


def get_current_user(db: Session, user_id: str) -> authchemas.UserResponse:
    user = db.query(Users).filter(Users.id == auth.parse_user_id(user_id)).first()
    if not user:
        return error_response(
            message="User not found",
            status_code=AppStatusCode.AUTHENTICATION_USER_INVALID,
            http_status=status.HTTP_404_NOT_FOUND
        )
    return authchemas.UserResponse.model_validate(user)
