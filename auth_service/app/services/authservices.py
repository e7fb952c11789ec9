import logging
import secrets
from typing import Optional
from fastapi import status

from shared.core.auth import create_access_token
from shared.core.config import settings
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from ..schemas import authschema

logger = logging.getLogger(__name__)


def password_matches(candidate: str, expected: Optional[str]) -> bool:
    if not expected:
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def resolve_role(username: str, password: str) -> Optional[str]:
    """Map built-in accounts to roles. Returns None when credentials are rejected."""
    if username == "admin":
        return UserRole.ADMIN.value if password_matches(password, settings.ADMIN_PASSWORD) else None
    if username == "warehouse":
        return UserRole.WAREHOUSE_MANAGER.value if password_matches(password, settings.WAREHOUSE_PASSWORD) else None
    # Sales accounts are read-only; any non-empty password is accepted
    if username.startswith("sales"):
        return UserRole.SALES_REP.value if password else None
    return None


def login(request: authschema.UserAuthRequest) -> authschema.AuthenticationResponse:
    role = resolve_role(request.username, request.password)
    if not role:
        logger.warning("Rejected login for %s", request.username)
        return error_response(
            message="Invalid credentials",
            status_code=AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    token = create_access_token({"username": request.username, "role": role})
    logger.info("User %s logged in as %s", request.username, role)
    return authschema.AuthenticationResponse(
        token=token,
        user=authschema.UserResponse(username=request.username, role=role),
    )


def current_user(user: UserToken) -> authschema.UserResponse:
    return authschema.UserResponse(username=user.username, role=user.role)
