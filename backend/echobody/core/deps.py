# echobody/core/deps.py
# 공용 의존성 — components live on app.state, built once in create_app()

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from echobody.core.security import Authenticator
from echobody.db.planners import MonotonicClock, PlannerRepository
from echobody.db.users import UserRepository
from echobody.services.completion import CompletionGateway


def get_db(request: Request) -> AsyncIOMotorDatabase:
    # 미초기화면 예외 발생
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("MongoDB is not initialized yet.")
    return db


def get_gateway(request: Request) -> CompletionGateway:
    return request.app.state.gateway


def get_authenticator(request: Request) -> Authenticator:
    return request.app.state.auth


def get_users(db: AsyncIOMotorDatabase = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_clock(request: Request) -> MonotonicClock:
    return request.app.state.clock


def get_planners(
    db: AsyncIOMotorDatabase = Depends(get_db),
    clock: MonotonicClock = Depends(get_clock),
) -> PlannerRepository:
    return PlannerRepository(db, clock)
