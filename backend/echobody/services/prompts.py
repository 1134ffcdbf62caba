# echobody/services/prompts.py
# 프롬프트 템플릿 — $placeholders substituted with request fields
#
# Each template embeds the JSON shape the completion is expected to mirror; the
# response parser relies on it, so edit the exemplars together with any consumer.

from __future__ import annotations
from enum import Enum
from string import Template
from typing import Any, Dict, Mapping


class PromptTemplate(str, Enum):
    MEAL_PLAN_V1 = "meal-plan-v1"
    WORKOUT_PLAN_V1 = "workout-plan-v1"
    MEAL_PLAN_V2 = "meal-plan-v2"
    WORKOUT_PLAN_V2 = "workout-plan-v2"


def _meal_week() -> str:
    day = (
        '  "Day {n}": {{\n'
        '    "Breakfast": "[dish name]",\n'
        '    "Lunch": "[dish name]",\n'
        '    "Dinner": "[dish name]"\n'
        "  }}"
    )
    return "{\n" + ",\n".join(day.format(n=n) for n in range(1, 8)) + "\n}"


def _workout_week(prescription: str) -> str:
    days = []
    exercise = 1
    for n in range(1, 8):
        if n == 4:
            days.append(f'  "Day 4": {{\n    "Rest day or optional light cardio/stretching": ""\n  }}')
            continue
        lines = []
        for sets in ("4 sets x 12 reps", "3 sets x 15 reps", "4 sets x 10 reps"):
            lines.append(f'    "Exercise {exercise}": "{prescription}{sets}"')
            exercise += 1
        days.append(f'  "Day {n}": {{\n' + ",\n".join(lines) + "\n  }")
    return "{\n" + ",\n".join(days) + "\n}"


_DISH_NOTE = (
    'Each "[dish name]" should correspond to a specific meal recommendation based on the '
    "nutritional needs and preferences determined by the user's profile."
)

_MEAL_V1 = f"""
Generate a personalized weekly meal plan based on the following details:

    Weight: $weight
    Gender: $gender
    Age: $age
    Height: $height
    Activity Level: $activity_level (choose from beginner, intermediate, advanced)
    Goal: $goal (choose from weight_loss, muscle_gain, strength_training, cardiovascular_endurance, flexibility, general_fitness)

Please provide a meal plan for a week, structured as:

{_meal_week()}

{_DISH_NOTE}
"""

_WORKOUT_V1 = f"""
Generate a workout routine based on the following details:

    Weight: $weight kg
    Gender: $gender
    Target: $target
    Goal: $goal

Please provide a workout routine for a week, structured as:

{_workout_week("")}
"""

_MEAL_V2 = f"""
Generate a personalized weekly meal plan based on the following details:

    Name: $name
    Gender: $gender
    Age: $age
    Height: $height
    Current Weight: $current_weight
    Target Weight: $target_weight
    Activity Level: $activity_level (choose from beginner, intermediate, advanced)
    Heartbeat: $heart_beat
    Sleep: $sleep
    Calories Burnt: $calories_burnt
    Steps: $steps

Please provide a meal plan for a week, structured as:

{_meal_week()}

{_DISH_NOTE}
"""

_WORKOUT_V2 = f"""
Generate a workout routine for a $current_weight kg $gender, aged $age, with a height of $height cm and a target weight of $target_weight.
    Activity level: $activity_level
    Heart beat: $heart_beat
    Sleep duration: $sleep
    Calories burnt: $calories_burnt
    Steps per day: $steps
Include exercises and sets/reps for each day of the week.

Please provide a workout routine for a week, structured as:

Example exercise field: "Exercise 1": "Squats - 4 sets x 10 reps"

{_workout_week("(Exercise Name)-")}
"""

TEMPLATES: Dict[PromptTemplate, Template] = {
    PromptTemplate.MEAL_PLAN_V1: Template(_MEAL_V1),
    PromptTemplate.WORKOUT_PLAN_V1: Template(_WORKOUT_V1),
    PromptTemplate.MEAL_PLAN_V2: Template(_MEAL_V2),
    PromptTemplate.WORKOUT_PLAN_V2: Template(_WORKOUT_V2),
}


class _Fields(dict):
    # absent optional fields render as "" so placeholder positions survive
    def __missing__(self, key: str) -> str:
        return ""


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_prompt(template: PromptTemplate, fields: Mapping[str, Any]) -> str:
    values = _Fields((k, to_text(v)) for k, v in fields.items())
    return TEMPLATES[template].substitute(values)
