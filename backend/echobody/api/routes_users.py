# echobody/api/routes_users.py
# 회원가입 / 부분 수정 / 로그인

from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status
from pydantic import ValidationError

from echobody.core.deps import get_authenticator, get_users
from echobody.core.errors import ApiError, BadRequest, NotFound, Unauthorized
from echobody.core.security import Authenticator
from echobody.db.models.user import UserDoc, UserPatch
from echobody.db.users import UserRepository, normalize_email, public_user, utcnow

log = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

# same answer for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password."


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _parse_date(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    where = ".".join(str(p) for p in err.get("loc", ()))
    return f"Invalid value for {where}: {err.get('msg')}" if where else str(err.get("msg"))


def _rejected(request: Request, exc: ApiError) -> ApiError:
    log.error("%s - endpoint: %s", exc.message, request.url.path)
    return exc


def _check_email(email: Any) -> None:
    if email is not None and (not isinstance(email, str) or "@" not in email):
        raise BadRequest("Invalid email format.")


def _check_registration(payload: Dict[str, Any]) -> None:
    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        raise BadRequest("Name is required and must be a non-empty string.")

    _check_email(payload.get("email"))

    dob = payload.get("dateOfBirth")
    if dob is not None and _parse_date(dob) is None:
        raise BadRequest("Invalid date of birth.")

    health = payload.get("health")
    if isinstance(health, dict):
        weight, height = health.get("weight"), health.get("height")
        if weight is not None and (not _is_number(weight) or weight <= 0):
            raise BadRequest("Weight must be a positive number.")
        if height is not None and (not _is_number(height) or height <= 0):
            raise BadRequest("Height must be a positive number.")

    password = payload.get("password")
    if password is not None and not isinstance(password, str):
        raise BadRequest("Password must be a string.")


@router.post("/user", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    payload: Optional[Dict[str, Any]] = Body(None),
    users: UserRepository = Depends(get_users),
    auth: Authenticator = Depends(get_authenticator),
):
    payload = payload or {}
    try:
        _check_registration(payload)
    except BadRequest as e:
        raise _rejected(request, e)

    password = payload.get("password")
    email = payload.get("email")
    now = utcnow()
    try:
        doc = UserDoc(
            name=payload["name"].strip(),
            gender=payload.get("gender"),
            dateOfBirth=_parse_date(payload.get("dateOfBirth")),
            email=normalize_email(email) if email else None,
            passwordHash=await auth.hash_password(password) if password else None,
            createdAt=now,
            lastLogin=now,
            health=payload.get("health"),
            device=payload.get("device"),
        )
    except ValidationError as e:
        raise _rejected(request, BadRequest(_first_error(e)))

    doc.authToken = auth.issue_token(doc.email, doc.name)
    saved = await users.create(doc.model_dump(exclude_none=True))
    log.info("User created - endpoint: %s", request.url.path)

    return {"message": "User created successfully", "user": public_user(saved)}


@router.patch("/users/{user_id}")
async def update_user(
    request: Request,
    user_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    users: UserRepository = Depends(get_users),
    auth: Authenticator = Depends(get_authenticator),
):
    """Partial update; nested objects are merged field by field."""
    payload = dict(payload or {})
    password = payload.pop("password", None)
    if password is not None and not isinstance(password, str):
        raise _rejected(request, BadRequest("Password must be a string."))
    try:
        _check_email(payload.get("email"))
    except BadRequest as e:
        raise _rejected(request, e)

    try:
        patch = UserPatch.model_validate(payload)
    except ValidationError as e:
        raise _rejected(request, BadRequest(_first_error(e)))

    fields = patch.model_dump(exclude_unset=True)
    if isinstance(fields.get("email"), str):
        fields["email"] = normalize_email(fields["email"])
    if password:
        fields["passwordHash"] = await auth.hash_password(password)

    updated = await users.update(user_id, fields)
    if updated is None:
        raise _rejected(request, NotFound("User not found"))

    return {"message": "User updated successfully", "user": public_user(updated)}


@router.post("/login")
async def login(
    request: Request,
    payload: Optional[Dict[str, Any]] = Body(None),
    users: UserRepository = Depends(get_users),
    auth: Authenticator = Depends(get_authenticator),
):
    payload = payload or {}
    email = payload.get("email")
    password = payload.get("password")

    if not isinstance(email, str) or "@" not in email:
        raise _rejected(request, BadRequest("Invalid email format."))
    if not isinstance(password, str) or not password:
        raise _rejected(request, BadRequest("Password is required and must be a string."))

    user = await users.find_by_email(email)
    if user is None or not user.get("passwordHash"):
        raise _rejected(request, Unauthorized(INVALID_CREDENTIALS))

    if not await auth.verify_password(password, user["passwordHash"]):
        raise _rejected(request, Unauthorized(INVALID_CREDENTIALS))

    token = auth.issue_token(user.get("email"), user.get("name"))
    await users.record_login(user["_id"], token)

    return {"message": "Login successful", "authToken": token}
