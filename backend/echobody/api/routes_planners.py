# echobody/api/routes_planners.py
# 생성된 플랜 저장/조회

from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status

from echobody.core.deps import get_planners
from echobody.core.errors import BadRequest, NotFound
from echobody.db.models.planner import ALL_LABEL, PlanKind
from echobody.db.planners import PlannerRepository, public_record
from echobody.services.validation import is_missing

log = logging.getLogger(__name__)

router = APIRouter(tags=["planners"])


async def _store(
    request: Request,
    payload: Optional[Dict[str, Any]],
    repo: PlannerRepository,
    kind: PlanKind,
) -> Dict[str, Any]:
    payload = payload or {}
    user_id = payload.get("userId")
    ai_response = payload.get("aiResponse")
    if is_missing(user_id) or is_missing(ai_response):
        log.error("UserId and aiResponse are required - endpoint: %s", request.url.path)
        raise BadRequest("UserId and aiResponse are required")

    record = await repo.create(str(user_id), ai_response, kind)
    return public_record(record)


@router.post("/store-workout-planner", status_code=status.HTTP_201_CREATED)
async def store_workout_planner(
    request: Request,
    payload: Optional[Dict[str, Any]] = Body(None),
    repo: PlannerRepository = Depends(get_planners),
):
    return await _store(request, payload, repo, PlanKind.WORKOUT)


@router.post("/store-meal-planner", status_code=status.HTTP_201_CREATED)
async def store_meal_planner(
    request: Request,
    payload: Optional[Dict[str, Any]] = Body(None),
    repo: PlannerRepository = Depends(get_planners),
):
    return await _store(request, payload, repo, PlanKind.MEAL)


@router.get("/planners/{user_id}/{count}")
async def previous_planners(
    request: Request,
    user_id: str,
    count: str,
    type: Optional[str] = Query(None),
    repo: PlannerRepository = Depends(get_planners),
):
    """Earliest `count` planners of a user; `type` absent or "all" merges meal and workout."""
    try:
        limit = int(count)
    except ValueError:
        limit = 0
    if type in ("", "all"):
        type = None
    kinds = {k.value: k for k in PlanKind}
    if not user_id.strip() or limit <= 0 or (type is not None and type not in kinds):
        log.error("Invalid userId, count, or type - endpoint: %s", request.url.path)
        raise BadRequest("Invalid userId, count, or type")

    kind = kinds.get(type) if type else None
    planners = await repo.list(user_id, kind, limit)
    if not planners:
        raise NotFound("No planners found for this user", key="message")

    return {
        "type": kind.label if kind else ALL_LABEL,
        "planners": [public_record(p) for p in planners],
    }
