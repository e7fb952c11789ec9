import json
import logging
from typing import Callable
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request
from fastapi.responses import JSONResponse, Response
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


class JsonResponseMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
            wrapped_error = JsonOutResult(
                data=None,
                status="Failure",
                status_code=AppStatusCode.OPERATION_FAILED,
                message=f"Internal Server Error: {e}",
            ).model_dump()
            return JSONResponse(content=wrapped_error, status_code=500)

        # Error bodies are shaped by the exception handlers
        if not (200 <= response.status_code < 300):
            return response

        if "application/json" not in response.headers.get("content-type", ""):
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8"))
        except ValueError:
            # Body was consumed above, so hand back an exact copy
            logger.warning("Non-JSON body labelled JSON on %s %s", request.method, request.url.path)
            return Response(content=body_bytes, status_code=response.status_code,
                            headers=dict(response.headers))

        headers = {k: v for k, v in response.headers.items()
                   if k.lower() != "content-length"}

        # Skip wrapping if already wrapped
        if isinstance(data, dict) and {"status", "status_code", "message"}.issubset(data.keys()):
            return JSONResponse(content=data, status_code=response.status_code, headers=headers)

        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY,
            message="Data retrieved successfully"
        ).model_dump()

        return JSONResponse(content=wrapped, status_code=response.status_code, headers=headers)
