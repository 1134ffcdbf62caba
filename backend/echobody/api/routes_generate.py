# echobody/api/routes_generate.py
# 식단/운동 플랜 생성 — request fields → completion → routine

from __future__ import annotations
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request

from echobody.core.deps import get_gateway
from echobody.services.completion import CompletionGateway
from echobody.services.generation import generate_plan
from echobody.services.prompts import PromptTemplate

router = APIRouter(tags=["generate"])


@router.post("/generate-plan")
async def generate_meal_plan(
    request: Request,
    payload: Optional[Dict[str, Any]] = Body(None),
    gateway: CompletionGateway = Depends(get_gateway),
):
    """Weekly meal plan from weight/gender/age/height/activity_level/goal."""
    return await generate_plan(gateway, PromptTemplate.MEAL_PLAN_V1, payload or {}, request.url.path)


@router.get("/generate-workout-plan")
async def generate_workout_plan(
    request: Request,
    target: Optional[str] = Query(None),
    gender: Optional[str] = Query(None),
    weight: Optional[str] = Query(None),
    goal: Optional[str] = Query(None),
    gateway: CompletionGateway = Depends(get_gateway),
):
    """Weekly workout routine for one muscle-group target."""
    fields = {"target": target, "gender": gender, "weight": weight, "goal": goal}
    return await generate_plan(gateway, PromptTemplate.WORKOUT_PLAN_V1, fields, request.url.path)


@router.post("/generate-meal-plan-v2")
async def generate_meal_plan_v2(
    request: Request,
    payload: Optional[Dict[str, Any]] = Body(None),
    gateway: CompletionGateway = Depends(get_gateway),
):
    # non-JSON completions come back as plain text in "routine"
    return await generate_plan(gateway, PromptTemplate.MEAL_PLAN_V2, payload or {}, request.url.path)


@router.post("/generate-workout-plan-v2")
async def generate_workout_plan_v2(
    request: Request,
    payload: Optional[Dict[str, Any]] = Body(None),
    gateway: CompletionGateway = Depends(get_gateway),
):
    return await generate_plan(gateway, PromptTemplate.WORKOUT_PLAN_V2, payload or {}, request.url.path)
