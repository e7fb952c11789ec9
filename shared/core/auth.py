from datetime import datetime, timedelta, timezone
from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError as SchemaValidationError
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import WRITE_ROLES
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken

security = HTTPBearer()


def create_access_token(data: dict, expires_minutes: int | None = None):
    payload = data.copy()
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES)
    payload['exp'] = expires
    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        return UserToken(**payload)
    except ExpiredSignatureError:
        return error_response(
            message="Token has expired",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED,
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    except (JWTError, SchemaValidationError):
        return error_response(
            message="Invalid token",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )


def validate_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
):
    return verify_token(credentials.credentials)


def require_write_access(current_user: UserToken = Depends(validate_current_token)):
    if current_user.role not in WRITE_ROLES:
        return error_response(
            message="Access denied. Insufficient permissions.",
            status_code=AppStatusCode.UNAUTHORIZED_ACTION,
            http_status=status.HTTP_403_FORBIDDEN
        )

    return current_user
