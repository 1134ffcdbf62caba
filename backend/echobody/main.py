# echobody/main.py
# FastAPI 앱 초기화 및 라우터 설정
# 라우터는 각 기능별로 분리하여 관리

from __future__ import annotations
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from echobody.api.routes_generate import router as generate_router    # 플랜 생성 (OpenAI)
from echobody.api.routes_planners import router as planners_router    # 플랜 저장/조회
from echobody.api.routes_users import router as users_router          # 회원/로그인
from echobody.core.config import Settings, get_settings
from echobody.core.errors import (
    ApiError,
    api_error_handler,
    mongo_error_handler,
    request_validation_handler,
    unexpected_error_handler,
)
from echobody.core.logger import setup_logging
from echobody.core.security import Authenticator
from echobody.db.indexes import ensure_indexes
from echobody.db.init import close_db, connect_with_retry, database
from echobody.db.planners import MonotonicClock
from echobody.services.completion import CompletionGateway

log = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    db: Optional[AsyncIOMotorDatabase] = None,
    gateway: Optional[CompletionGateway] = None,
) -> FastAPI:
    """
    Build the app around one Settings instance.
    Passing ``db`` skips the Mongo connection at startup (tests, embedding).
    """
    settings = settings or get_settings()

    app = FastAPI(title="EchoBody Planner API", version="0.1.0")
    app.state.settings = settings
    app.state.gateway = gateway or CompletionGateway(settings)
    app.state.auth = Authenticator(settings)
    app.state.clock = MonotonicClock()
    app.state.mongo = None
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(PyMongoError, mongo_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # 앱 시작/종료 이벤트 핸들러
    @app.on_event("startup")
    async def on_startup() -> None:
        setup_logging(settings)
        if app.state.db is None:
            # 1) DB 먼저 붙는다
            app.state.mongo = await connect_with_retry(settings)
            app.state.db = database(app.state.mongo, settings)
        # 2) 인덱스 보장
        try:
            await ensure_indexes(app.state.db)
            log.info("indexes ensured")
        except PyMongoError as e:
            log.error("ensure_indexes failed: %s", e)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        close_db(app.state.mongo)
        app.state.mongo = None

    @app.get("/")
    async def root():
        return {"ping": "Server is running"}

    @app.get("/health")
    async def health(request: Request):
        ok = {"status": "ok", "db": "skip"}
        db = request.app.state.db
        if db is not None:
            try:
                await db.command("ping")
                ok["db"] = "ok"
            except Exception as e:
                ok["db"] = f"error: {e}"
        return ok

    # 라우터 prefix는 각 파일 내에서 정의함, 중복 prefix 금지
    app.include_router(generate_router)
    app.include_router(users_router)
    app.include_router(planners_router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("echobody.main:app", host=settings.HOST, port=settings.PORT)
