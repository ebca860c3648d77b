from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException
from access_console.core.constants import ErrorCodeEnum
from access_console.core.exceptions import CyclicMenuHierarchyError
from access_console.schemas.response import ErrorResponse, ErrorDetail
from datetime import datetime, timezone
import logging
import uuid

logger = logging.getLogger(__name__)

def _get_error_code(status_code: int) -> str:
    code_map = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_SERVER_ERROR",
        502: "BAD_GATEWAY",
        503: "SERVICE_UNAVAILABLE",
    }
    return code_map.get(status_code, f"HTTP_{status_code}")

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())

def _error_response(request: Request, request_id: str, detail: ErrorDetail) -> dict:
    error_response = ErrorResponse(
        error=detail,
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=str(request.url),
        request_id=request_id
    )
    return jsonable_encoder(error_response.model_dump())

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = _request_id(request)
    content = _error_response(request, request_id, ErrorDetail(
        code=ErrorCodeEnum.VALIDATION_ERROR.value,
        message="Request validation failed",
        details={"validation_errors": exc.errors()}
    ))
    logger.warning(f"[{request_id}] Validation error: {exc.errors()}", extra={"request_id": request_id})
    return JSONResponse(status_code=422, content=content)

async def cyclic_hierarchy_exception_handler(request: Request, exc: CyclicMenuHierarchyError):
    request_id = _request_id(request)
    content = _error_response(request, request_id, ErrorDetail(
        code=ErrorCodeEnum.CYCLIC_MENU_HIERARCHY.value,
        message=str(exc),
        details={"menu_id": exc.menu_id, "chain": exc.chain}
    ))
    logger.warning(f"[{request_id}] {exc}", extra={"request_id": request_id})
    return JSONResponse(status_code=422, content=content)

async def global_exception_handler(request: Request, exc: Exception):
    request_id = _request_id(request)

    if isinstance(exc, HTTPException):
        content = _error_response(request, request_id, ErrorDetail(
            code=_get_error_code(exc.status_code),
            message=exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        ))
        logger.warning(f"[{request_id}] HTTP {exc.status_code}: {exc.detail}", extra={"request_id": request_id})
        return JSONResponse(status_code=exc.status_code, content=content)

    content = _error_response(request, request_id, ErrorDetail(
        code=ErrorCodeEnum.INTERNAL_SERVER_ERROR.value,
        message="An unexpected error occurred",
        details={"error_type": type(exc).__name__}
    ))
    logger.error(f"[{request_id}] Unhandled exception: {exc}", exc_info=True, extra={"request_id": request_id})
    return JSONResponse(status_code=500, content=content)
