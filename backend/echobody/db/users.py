# echobody/db/users.py
# 사용자 저장소 — create / partial update / lookup by email

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

USERS = "users"

# never leaves the server
_PRIVATE_FIELDS = ("passwordHash",)


def utcnow() -> datetime:
    # BSON dates are naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def to_dotted(fields: Mapping[str, Any], path: Tuple[str, ...] = ()) -> Dict[str, Any]:
    """
    Flatten nested objects into dotted ``$set`` paths so a partial nested update
    leaves sibling fields alone: ``{"health": {"weight": 80}}`` -> ``{"health.weight": 80}``.
    Lists and scalars are leaves and replace the stored value whole.
    """
    out: Dict[str, Any] = {}
    for key, value in fields.items():
        here = path + (key,)
        if isinstance(value, Mapping):
            out.update(to_dotted(value, here))
        else:
            out[".".join(here)] = value
    return out


def public_user(doc: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    out = {k: v for k, v in doc.items() if k not in _PRIVATE_FIELDS}
    if "_id" in out:
        out["_id"] = str(out["_id"])
    return out


class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.col = db[USERS]

    async def create(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        stored = dict(doc)
        result = await self.col.insert_one(stored)
        stored["_id"] = result.inserted_id
        return stored

    async def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        if not ObjectId.is_valid(user_id):
            return None
        return await self.col.find_one({"_id": ObjectId(user_id)})

    async def update(self, user_id: str, fields: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        # None when the id is malformed or unknown
        if not ObjectId.is_valid(user_id):
            return None
        dotted = to_dotted(fields)
        if not dotted:
            return await self.get(user_id)
        return await self.col.find_one_and_update(
            {"_id": ObjectId(user_id)},
            {"$set": dotted},
            return_document=ReturnDocument.AFTER,
        )

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.col.find_one({"email": normalize_email(email)})

    async def record_login(self, user_id: ObjectId, token: str) -> None:
        await self.col.update_one(
            {"_id": user_id},
            {"$set": {"authToken": token, "lastLogin": utcnow()}},
        )
