# echobody/db/init.py
# Mongo 연결 유틸 — motor (on_event용)

from __future__ import annotations
import asyncio
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from echobody.core.config import Settings

log = logging.getLogger(__name__)


async def init_db(settings: Settings) -> AsyncIOMotorClient:
    # 앱 시작 시 1회 호출. ping이 실패하면 예외
    client = AsyncIOMotorClient(settings.MONGO_URI)
    try:
        await client[settings.MONGO_DB].command("ping")
    except Exception:
        client.close()
        raise
    return client


async def connect_with_retry(settings: Settings, delay: float = 1.0) -> AsyncIOMotorClient:
    # 최대 DB_CONNECT_RETRIES회, delay초 간격
    attempts = max(settings.DB_CONNECT_RETRIES, 1)
    for i in range(attempts):
        try:
            client = await init_db(settings)
            log.info("Database connected!")
            return client
        except Exception as e:
            log.warning("db init retry %d/%d: %s", i + 1, attempts, e)
            if i + 1 < attempts:
                await asyncio.sleep(delay)
    raise RuntimeError(f"MongoDB unreachable after {attempts} attempts")


def database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    return client[settings.MONGO_DB]


def close_db(client: AsyncIOMotorClient | None) -> None:
    # 앱 종료 시 커넥션 정리
    if client is not None:
        client.close()
