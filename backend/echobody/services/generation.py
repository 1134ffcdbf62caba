# echobody/services/generation.py
# 플랜 생성 흐름: validate → prompt → completion → parse

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from echobody.core.errors import INTERNAL_ERROR, BadRequest, UpstreamFailure
from echobody.services.completion import CompletionFailed, CompletionGateway
from echobody.services.parser import CompletionParseError, parse_completion
from echobody.services.prompts import PromptTemplate, build_prompt
from echobody.services.validation import SCHEMAS, validate

log = logging.getLogger(__name__)

NO_VALID_RESPONSE = "Failed to get a valid response from OpenAI"


@dataclass(frozen=True)
class GenerationPolicy:
    lenient: bool
    message: str
    echo_request: bool


# only meal-plan-v2 tolerates a non-JSON completion
POLICIES: Dict[PromptTemplate, GenerationPolicy] = {
    PromptTemplate.MEAL_PLAN_V1: GenerationPolicy(False, "Workout meals generated successfully.", False),
    PromptTemplate.WORKOUT_PLAN_V1: GenerationPolicy(False, "Workout routine created successfully.", False),
    PromptTemplate.MEAL_PLAN_V2: GenerationPolicy(True, "Meal plan generated successfully.", True),
    PromptTemplate.WORKOUT_PLAN_V2: GenerationPolicy(False, "Workout routine created successfully.", True),
}


def _bad_request(message: str) -> BadRequest:
    return BadRequest(message, key="message", success=False)


def _upstream(message: str) -> UpstreamFailure:
    return UpstreamFailure(message, key="message", success=False)


async def generate_plan(
    gateway: CompletionGateway,
    template: PromptTemplate,
    fields: Mapping[str, Any],
    endpoint: str,
) -> Dict[str, Any]:
    log.info("New request received - endpoint: %s", endpoint)
    policy = POLICIES[template]

    failure = validate(SCHEMAS[template], fields)
    if failure is not None:
        log.error("%s - endpoint: %s", failure.message, endpoint)
        raise _bad_request(failure.message)

    prompt = build_prompt(template, fields)

    try:
        text = await gateway.complete(prompt)
    except CompletionFailed as e:
        log.error("Error occurred - endpoint: %s error: %s", endpoint, e)
        raise _upstream(INTERNAL_ERROR) from e

    if not text:
        log.error("%s - endpoint: %s", NO_VALID_RESPONSE, endpoint)
        raise _upstream(NO_VALID_RESPONSE)

    log.info("Chat prompt processed successfully - endpoint: %s", endpoint)

    try:
        routine = parse_completion(text, lenient=policy.lenient)
    except CompletionParseError as e:
        log.error("Error occurred - endpoint: %s error: %s", endpoint, e)
        raise _upstream(INTERNAL_ERROR) from e

    out: Dict[str, Any] = {"status": True, "message": policy.message}
    if policy.echo_request:
        out["requestData"] = dict(fields)
    out["routine"] = routine
    return out
