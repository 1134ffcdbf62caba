# tests/test_validation.py
from __future__ import annotations

from echobody.services.prompts import PromptTemplate
from echobody.services.validation import (
    GOALS,
    MISSING,
    NOT_IN_ENUM,
    SCHEMAS,
    TARGETS,
    FieldRule,
    validate,
)

MEAL_V1 = SCHEMAS[PromptTemplate.MEAL_PLAN_V1]

GOOD_MEAL_V1 = {
    "weight": 70,
    "gender": "male",
    "age": 30,
    "height": 175,
    "activity_level": "beginner",
    "goal": "weight_loss",
}


def test_valid_request_passes():
    assert validate(MEAL_V1, GOOD_MEAL_V1) is None


def test_first_missing_field_in_declared_order():
    failure = validate(MEAL_V1, {"gender": "male", "activity_level": "nope"})
    assert failure.field == "weight"
    assert failure.reason == MISSING
    assert failure.message == "Missing required parameter: weight"


def test_enum_violation_lists_allowed_values():
    failure = validate(MEAL_V1, {**GOOD_MEAL_V1, "goal": "bulking"})
    assert failure.field == "goal"
    assert failure.reason == NOT_IN_ENUM
    assert failure.choices == GOALS
    assert failure.message.endswith(
        "weight_loss, muscle_gain, strength_training, cardiovascular_endurance, flexibility, general_fitness"
    )


def test_blank_string_is_missing_but_zero_is_present():
    assert validate(MEAL_V1, {**GOOD_MEAL_V1, "gender": "   "}).field == "gender"
    assert validate((FieldRule("steps"),), {"steps": 0}) is None


def test_optional_fields_may_be_absent():
    v2 = SCHEMAS[PromptTemplate.MEAL_PLAN_V2]
    data = {
        "name": "Ana",
        "gender": "female",
        "age": 28,
        "height": 165,
        "target_weight": 58,
        "current_weight": 62,
        "activity_level": "advanced",
    }
    assert validate(v2, data) is None


def test_workout_target_vocabulary():
    schema = SCHEMAS[PromptTemplate.WORKOUT_PLAN_V1]
    assert len(TARGETS) == 19
    ok = {"target": "upper back", "gender": "male", "weight": "80", "goal": "muscle_gain"}
    assert validate(schema, ok) is None
    assert validate(schema, {**ok, "target": "neck"}).field == "target"
