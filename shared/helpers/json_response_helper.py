from fastapi import HTTPException, status
from typing import Any, Dict, Optional

from shared.utils.app_status_code import AppStatusCode
from shared.core.schemas import JsonOutResult

# Challenge returned with every 401 so clients know to send a bearer token
BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def success_response(data: Any, message: str = "Success", status_code: str = AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY):
    return JsonOutResult(
        data=data,
        status="Success",
        status_code=status_code,
        message=message
    )


def error_response(
    message: str,
    status_code: str = AppStatusCode.OPERATION_FAILED,
    http_status: int = 400,
    data: Any = None,
    headers: Optional[Dict[str, str]] = None,
):
    if http_status == status.HTTP_401_UNAUTHORIZED and headers is None:
        headers = BEARER_CHALLENGE
    raise HTTPException(
        status_code=http_status,
        detail=JsonOutResult(
            data=data,
            status="Failure",
            status_code=status_code,
            message=message
        ).model_dump(),
        headers=headers,
    )
