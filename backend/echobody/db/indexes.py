# echobody/db/indexes.py
# 컬렉션 인덱스 생성 — 앱 스타트업에서 한 번 await ensure_indexes(db)

from pymongo import ASCENDING

from echobody.db.models.planner import PlanKind
from echobody.db.users import USERS


async def ensure_indexes(db) -> None:
    # login lookup; uniqueness is not enforced
    await db[USERS].create_index([("email", ASCENDING)])

    # planner history: owner + chronological order
    for kind in PlanKind:
        await db[kind.collection].create_index([("userId", ASCENDING), ("timestamp", ASCENDING)])
