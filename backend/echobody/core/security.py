# echobody/core/security.py
# 비밀번호 해시(bcrypt) + 토큰 발급(JWT)

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from fastapi.concurrency import run_in_threadpool

from echobody.core.config import Settings

_ALGO = "HS256"

# bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating
_BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class Authenticator:
    def __init__(self, settings: Settings):
        self._jwt_secret = settings.JWT_SECRET
        self._ttl = timedelta(hours=settings.JWT_TTL_HOURS)
        self._rounds = settings.BCRYPT_ROUNDS

    async def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = await run_in_threadpool(bcrypt.hashpw, _secret(password), salt)
        return hashed.decode("ascii")

    async def verify_password(self, password: str, password_hash: str) -> bool:
        try:
            return await run_in_threadpool(
                bcrypt.checkpw, _secret(password), password_hash.encode("ascii")
            )
        except ValueError:
            # stored value is not a bcrypt hash
            return False

    def issue_token(self, email: Optional[str], name: Optional[str]) -> str:
        exp = datetime.now(timezone.utc) + self._ttl
        payload = {"email": email, "name": name, "exp": exp}
        return jwt.encode(payload, self._jwt_secret, algorithm=_ALGO)

    def decode_token(self, token: str) -> Dict[str, Any]:
        return jwt.decode(token, self._jwt_secret, algorithms=[_ALGO])
