# echobody/services/validation.py
# 요청 필드 검증 — declarative schema table, first failure wins

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from echobody.services.prompts import PromptTemplate

ACTIVITY_LEVELS: Tuple[str, ...] = ("beginner", "intermediate", "advanced")

GOALS: Tuple[str, ...] = (
    "weight_loss",
    "muscle_gain",
    "strength_training",
    "cardiovascular_endurance",
    "flexibility",
    "general_fitness",
)

TARGETS: Tuple[str, ...] = (
    "abs",
    "quads",
    "lats",
    "calves",
    "pectorals",
    "glutes",
    "hamstrings",
    "adductors",
    "triceps",
    "cardiovascular system",
    "spine",
    "upper back",
    "biceps",
    "delts",
    "forearms",
    "traps",
    "serratus anterior",
    "abductors",
    "levator scapulae",
)

MISSING = "missing"
NOT_IN_ENUM = "not in enumeration"


@dataclass(frozen=True)
class FieldRule:
    name: str
    required: bool = True
    choices: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class ValidationFailure:
    field: str
    reason: str
    choices: Optional[Tuple[str, ...]] = None

    @property
    def message(self) -> str:
        if self.reason == MISSING:
            return f"Missing required parameter: {self.field}"
        return f"Invalid parameter: {self.field} must be one of {', '.join(self.choices or ())}"


_V2_FIELDS: Tuple[FieldRule, ...] = (
    FieldRule("name"),
    FieldRule("gender"),
    FieldRule("age"),
    FieldRule("height"),
    FieldRule("target_weight"),
    FieldRule("current_weight"),
    FieldRule("activity_level", choices=ACTIVITY_LEVELS),
    FieldRule("heart_beat", required=False),
    FieldRule("sleep", required=False),
    FieldRule("calories_burnt", required=False),
    FieldRule("steps", required=False),
)

SCHEMAS: Dict[PromptTemplate, Tuple[FieldRule, ...]] = {
    PromptTemplate.MEAL_PLAN_V1: (
        FieldRule("weight"),
        FieldRule("gender"),
        FieldRule("age"),
        FieldRule("height"),
        FieldRule("activity_level", choices=ACTIVITY_LEVELS),
        FieldRule("goal", choices=GOALS),
    ),
    PromptTemplate.WORKOUT_PLAN_V1: (
        FieldRule("target", choices=TARGETS),
        FieldRule("gender"),
        FieldRule("weight"),
        FieldRule("goal", choices=GOALS),
    ),
    PromptTemplate.MEAL_PLAN_V2: _V2_FIELDS,
    PromptTemplate.WORKOUT_PLAN_V2: _V2_FIELDS,
}


def is_missing(value: Any) -> bool:
    # absent, null or blank string; numeric zero counts as present
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def validate(schema: Tuple[FieldRule, ...], data: Mapping[str, Any]) -> Optional[ValidationFailure]:
    for rule in schema:
        value = data.get(rule.name)
        if is_missing(value):
            if rule.required:
                return ValidationFailure(rule.name, MISSING)
            continue
        if rule.choices is not None and value not in rule.choices:
            return ValidationFailure(rule.name, NOT_IN_ENUM, rule.choices)
    return None
