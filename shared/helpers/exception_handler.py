import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from shared.core.exceptions import InventoryError, NotFoundError, StorageError, ValidationError
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

# Domain error -> (http status, application status code)
DOMAIN_ERROR_STATUS = {
    ValidationError: (400, AppStatusCode.INVALID_INPUT),
    NotFoundError: (404, AppStatusCode.RECORD_NOT_FOUND),
    StorageError: (500, AppStatusCode.STORAGE_ERROR),
}


def failure_body(message: str, status_code: str, data=None) -> dict:
    return JsonOutResult(
        data=data,
        status="Failure",
        status_code=status_code,
        message=message
    ).model_dump()


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # error_response() already shaped the detail
        if isinstance(exc.detail, dict) and "status_code" in exc.detail:
            content = exc.detail
        else:
            content = failure_body(str(exc.detail), str(exc.status_code))
        return JSONResponse(content=content, status_code=exc.status_code or 400,
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        content = failure_body(
            "Request validation failed",
            AppStatusCode.INVALID_INPUT,
            data=jsonable_errors(exc),
        )
        return JSONResponse(content=content, status_code=422)

    @app.exception_handler(InventoryError)
    async def inventory_exception_handler(request: Request, exc: InventoryError):
        http_status, app_code = DOMAIN_ERROR_STATUS.get(
            type(exc), (400, AppStatusCode.OPERATION_FAILED))
        if http_status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        content = failure_body(exc.message, exc.code or app_code, data=exc.details)
        return JSONResponse(content=content, status_code=http_status)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        content = failure_body(str(exc), AppStatusCode.OPERATION_FAILED)
        return JSONResponse(content=content, status_code=500)


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
