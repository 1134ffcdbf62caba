# tests/test_generate.py
from __future__ import annotations

from echobody.services.completion import CompletionFailed

MEAL_V1 = {
    "weight": 70,
    "gender": "male",
    "age": 30,
    "height": 175,
    "activity_level": "intermediate",
    "goal": "muscle_gain",
}

V2 = {
    "name": "Ana",
    "gender": "female",
    "age": 28,
    "height": 165,
    "target_weight": 58,
    "current_weight": 62,
    "activity_level": "beginner",
    "steps": 8000,
}

GOAL_LIST = "weight_loss, muscle_gain, strength_training, cardiovascular_endurance, flexibility, general_fitness"


# ── /generate-plan ───────────────────────────────────────────────────
def test_generate_plan_returns_parsed_routine(client, gateway):
    r = client.post("/generate-plan", json=MEAL_V1)
    assert r.status_code == 200
    body = r.json()
    assert body["status"] is True
    assert body["message"] == "Workout meals generated successfully."
    assert body["routine"]["Day 1"]["Dinner"] == "Salmon"
    assert "requestData" not in body
    assert "Goal: muscle_gain" in gateway.prompts[0]


def test_generate_plan_rejects_unknown_goal(client, gateway):
    r = client.post("/generate-plan", json={**MEAL_V1, "goal": "bulking"})
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert GOAL_LIST in r.json()["message"]
    assert gateway.prompts == []


def test_generate_plan_reports_first_missing_field(client):
    r = client.post("/generate-plan", json={"gender": "male"})
    assert r.status_code == 400
    assert r.json()["message"] == "Missing required parameter: weight"


def test_generate_plan_without_body(client):
    r = client.post("/generate-plan")
    assert r.status_code == 400
    assert r.json()["message"] == "Missing required parameter: weight"


def test_generate_plan_strict_on_non_json(client, gateway):
    gateway.reply = "not json"
    r = client.post("/generate-plan", json=MEAL_V1)
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Internal server error"}


def test_empty_completion_is_500(client, gateway):
    gateway.reply = None
    r = client.post("/generate-plan", json=MEAL_V1)
    assert r.status_code == 500
    assert r.json()["message"] == "Failed to get a valid response from OpenAI"


def test_upstream_error_is_generic_500(client, gateway):
    gateway.error = CompletionFailed("401 invalid api key sk-live-secret")
    r = client.post("/generate-plan", json=MEAL_V1)
    assert r.status_code == 500
    assert "sk-live-secret" not in r.text
    assert r.json()["message"] == "Internal server error"


# ── /generate-workout-plan ───────────────────────────────────────────
def test_workout_plan_from_query(client, gateway):
    gateway.reply = '{"Day 1": {"Exercise 1": "4 sets x 12 reps"}}'
    r = client.get(
        "/generate-workout-plan",
        params={"target": "upper back", "gender": "male", "weight": "80", "goal": "strength_training"},
    )
    assert r.status_code == 200
    assert r.json()["message"] == "Workout routine created successfully."
    assert r.json()["routine"] == {"Day 1": {"Exercise 1": "4 sets x 12 reps"}}
    assert "Target: upper back" in gateway.prompts[0]
    assert "Weight: 80 kg" in gateway.prompts[0]


def test_workout_plan_rejects_unknown_target(client):
    r = client.get(
        "/generate-workout-plan",
        params={"target": "neck", "gender": "male", "weight": "80", "goal": "flexibility"},
    )
    assert r.status_code == 400
    assert "levator scapulae" in r.json()["message"]


# ── v2 ───────────────────────────────────────────────────────────────
def test_meal_v2_is_lenient(client, gateway):
    gateway.reply = "not json"
    r = client.post("/generate-meal-plan-v2", json=V2)
    assert r.status_code == 200
    body = r.json()
    assert body["routine"] == "not json"
    assert body["requestData"] == V2
    assert body["message"] == "Meal plan generated successfully."


def test_meal_v2_optional_fields_blank_in_prompt(client, gateway):
    client.post("/generate-meal-plan-v2", json=V2)
    prompt = gateway.prompts[0]
    assert "Sleep: \n" in prompt
    assert "Steps: 8000\n" in prompt


def test_workout_v2_is_strict(client, gateway):
    gateway.reply = "not json"
    r = client.post("/generate-workout-plan-v2", json=V2)
    assert r.status_code == 500


def test_workout_v2_echoes_request(client, gateway):
    gateway.reply = '{"Day 4": {"Rest day or optional light cardio/stretching": ""}}'
    r = client.post("/generate-workout-plan-v2", json=V2)
    assert r.status_code == 200
    assert r.json()["requestData"] == V2
    assert "aged 28" in gateway.prompts[0]


def test_workout_v2_names_missing_field(client):
    r = client.post("/generate-workout-plan-v2", json={**V2, "height": ""})
    assert r.status_code == 400
    assert r.json()["message"] == "Missing required parameter: height"


# ── meta ─────────────────────────────────────────────────────────────
def test_root_ping(client):
    assert client.get("/").json() == {"ping": "Server is running"}
