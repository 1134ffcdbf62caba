# echobody/db/planners.py
# 플래너 저장소 — immutable records, owner + time ordered

from __future__ import annotations
from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

from echobody.db.models.planner import PlanKind, PlanRecord
from echobody.db.users import utcnow

_TICK = timedelta(milliseconds=1)


class MonotonicClock:
    """Insert timestamps at BSON (millisecond) precision, strictly increasing per process."""

    def __init__(self) -> None:
        self._last: Optional[datetime] = None

    def now(self) -> datetime:
        t = utcnow()
        t = t.replace(microsecond=t.microsecond // 1000 * 1000)
        if self._last is not None and t <= self._last:
            t = self._last + _TICK
        self._last = t
        return t


def public_record(doc: Mapping[str, Any]) -> Dict[str, Any]:
    out = dict(doc)
    if "_id" in out:
        out["_id"] = str(out["_id"])
    return out


class PlannerRepository:
    def __init__(self, db: AsyncIOMotorDatabase, clock: Optional[MonotonicClock] = None):
        # one clock per app keeps timestamps ordered across requests
        self.db = db
        self.clock = clock or MonotonicClock()

    async def create(self, owner_id: str, raw_content: Any, kind: PlanKind) -> Dict[str, Any]:
        record = PlanRecord(userId=owner_id, aiResponse=raw_content, timestamp=self.clock.now())
        doc = record.model_dump()
        result = await self.db[kind.collection].insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    async def _list_one(self, owner_id: str, kind: PlanKind, limit: int) -> List[Dict[str, Any]]:
        cursor = (
            self.db[kind.collection]
            .find({"userId": owner_id})
            .sort([("timestamp", ASCENDING), ("_id", ASCENDING)])
            .limit(limit)
        )
        return await cursor.to_list(length=limit)

    async def list(self, owner_id: str, kind: Optional[PlanKind], limit: int) -> List[Dict[str, Any]]:
        """
        Earliest ``limit`` records for ``owner_id``.
        With ``kind=None`` both kinds are merged and re-sorted first, so ``limit``
        bounds the merged total, not each kind.
        """
        if kind is not None:
            return await self._list_one(owner_id, kind, limit)

        merged: List[Dict[str, Any]] = []
        for k in PlanKind:
            merged.extend(await self._list_one(owner_id, k, limit))
        merged.sort(key=lambda d: d["timestamp"])
        return merged[:limit]
