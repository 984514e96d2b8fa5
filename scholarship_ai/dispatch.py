from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Type

from pydantic import BaseModel

from .config import DEFAULT_SCHOLARSHIP
from .errors import RATE_LIMIT_MESSAGE, ProviderError, ValidationError, is_rate_limited
from .model import Context, build_feedback_prompt, build_generate_prompt, build_improve_prompt
from .schemas import FeedbackTextOut, GeneratedTextOut, ImprovedTextOut, LetterRequestIn

logger = logging.getLogger("uvicorn.error")

PROMPT_PREVIEW_CHARS = 200


class Action(str, Enum):
    GENERATE = "generate"
    IMPROVE = "improve"
    FEEDBACK = "feedback"


@dataclass(frozen=True)
class ActionSpec:
    builder: Callable[..., str]
    response_model: Type[BaseModel]
    response_key: str
    requires_existing_text: bool


ACTIONS: Dict[Action, ActionSpec] = {
    Action.GENERATE: ActionSpec(build_generate_prompt, GeneratedTextOut, "generatedText", False),
    Action.IMPROVE: ActionSpec(build_improve_prompt, ImprovedTextOut, "improvedText", True),
    Action.FEEDBACK: ActionSpec(build_feedback_prompt, FeedbackTextOut, "feedbackText", True),
}


async def dispatch(
    action: Action,
    payload: LetterRequestIn,
    gateway,
    scholarship: str = DEFAULT_SCHOLARSHIP,
) -> BaseModel:
    """Validate ``payload``, build the prompt for ``action`` and ask the model.

    Raises ``ValidationError`` for incomplete payloads and ``ProviderError``
    when the model call fails. Nothing is retried.
    """
    entry = ACTIONS[action]
    section = payload.section

    if not section or payload.context is None:
        logger.warning("Rejected %s request: missing section or context", action.value)
        raise ValidationError("Missing 'section' or 'context' in request body")

    # Map Pydantic ContextIn to dataclass Context
    context = Context(**payload.context.model_dump())
    if entry.requires_existing_text and not context.existing_text:
        logger.warning("Rejected %s request on section %s: missing existingText", action.value, section)
        raise ValidationError(f"Missing 'existingText' in context for {action.value} action")

    logger.info("Received request for action '%s' on section: %s", entry.response_key, section)
    prompt = entry.builder(section, context, scholarship=scholarship)
    logger.info("Generated Prompt: %s...", prompt[:PROMPT_PREVIEW_CHARS])

    try:
        text = await gateway.complete(prompt)
    except Exception as e:
        logger.exception("Model call failed for action '%s' on section: %s", action.value, section)
        rate_limited = is_rate_limited(e)
        message = RATE_LIMIT_MESSAGE if rate_limited else f"Failed to generate {entry.response_key} from AI model."
        raise ProviderError(message, rate_limited=rate_limited, cause=e) from e

    logger.info("Successfully generated %s for section: %s", entry.response_key, section)
    return entry.response_model(**{entry.response_key: text})
