# echobody/core/errors.py
# API 오류 — HTTPException subclasses carrying the response body shape of each route group

from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

log = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


class ApiError(HTTPException):
    """
    Error rendered as ``{key: message}``, optionally prefixed with ``success``.
    Generation routes answer ``{"success": false, "message": ...}``; user and planner
    routes answer ``{"error": ...}``.
    """

    status_code = 500

    def __init__(self, message: str, *, key: str = "error", success: Optional[bool] = None):
        super().__init__(status_code=self.status_code, detail=message)
        self.message = message
        self.key = key
        self.success = success

    def body(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.success is not None:
            out["success"] = self.success
        out[self.key] = self.message
        return out


class BadRequest(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class NotFound(ApiError):
    status_code = 404


class UpstreamFailure(ApiError):
    status_code = 500


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def mongo_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    log.error("Database error - endpoint: %s error: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})


INVALID_BODY = "Invalid request body"


def _group_body(path: str, message: str) -> Dict[str, Any]:
    # generation routes answer {"success", "message"}; the rest {"error"}
    if path.startswith("/generate"):
        return {"success": False, "message": message}
    return {"error": message}


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed JSON or a body that is not an object
    log.error("%s - endpoint: %s error: %s", INVALID_BODY, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content=_group_body(request.url.path, INVALID_BODY))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Error occurred - endpoint: %s error: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content=_group_body(request.url.path, INTERNAL_ERROR))
