import logging
from typing import Callable, Mapping, Optional, Sequence
from agroscan.core.config import CHAT_HISTORY_LIMIT, CHAT_MAX_TOKENS, RECOMMEND_MAX_TOKENS
from agroscan.models.schemas import ChatTurn, MessageRole
from agroscan.services.commands import COMMANDS, lookup_command
from agroscan.services.perplexity_service import call_perplexity
from agroscan.services.prompts import (
    AI_PERSONALITY,
    CHAT_PROMPT,
    CHAT_TARGET_TOKENS,
    DEFAULT_DESIRED_CROP,
    MISSING_TEMPERATURE,
    RECOMMENDATION_PROMPT
)

logger = logging.getLogger(__name__)

CHAT_FALLBACK = "AI failed to respond"
RECOMMEND_FALLBACK = "AI failed to provide a recommendation."

Completion = Callable[..., str]


def render_turn(turn: ChatTurn) -> str:
    speaker = "User" if turn.role == MessageRole.USER else "AI"
    return f"{speaker}: {turn.content}"


def build_chat_prompt(history: Sequence[ChatTurn], new_message: str) -> str:
    recent = list(history)[-CHAT_HISTORY_LIMIT:] if CHAT_HISTORY_LIMIT > 0 else []
    turns = recent + [ChatTurn(role=MessageRole.USER, content=new_message)]

    return CHAT_PROMPT.format(
        personality=AI_PERSONALITY,
        history="\n".join(render_turn(turn) for turn in turns),
        max_tokens=CHAT_MAX_TOKENS,
        target_tokens=CHAT_TARGET_TOKENS
    )


def build_recommendation_prompt(
    ph: float,
    moisture: float,
    temperature: Optional[float] = None,
    desired_crop: Optional[str] = None
) -> str:
    return RECOMMENDATION_PROMPT.format(
        ph=ph,
        moisture=moisture,
        temperature=MISSING_TEMPERATURE if temperature is None else temperature,
        desired_crop=desired_crop or DEFAULT_DESIRED_CROP
    )


def respond(
    history: Sequence[ChatTurn],
    new_message: str,
    completion: Optional[Completion] = None,
    commands: Mapping[str, str] = COMMANDS
) -> str:
    """
    Answer a chat message.

    Canned commands are answered without contacting the AI provider. Anything
    else goes to the completion collaborator with the recent history; every
    failure there collapses into CHAT_FALLBACK.
    """
    canned = lookup_command(new_message, commands)
    if canned is not None:
        return canned

    prompt = build_chat_prompt(history, new_message)
    completion = completion or call_perplexity

    try:
        answer = completion(prompt, max_tokens=CHAT_MAX_TOKENS)
        answer = answer.strip() if isinstance(answer, str) else ""
    except Exception as e:
        logger.error(f"Chat completion failed: {str(e)}", exc_info=True)
        return CHAT_FALLBACK

    if not answer:
        logger.error("Chat completion returned an empty answer")
        return CHAT_FALLBACK

    return answer


def recommend(
    ph: float,
    moisture: float,
    temperature: Optional[float] = None,
    desired_crop: Optional[str] = None,
    completion: Optional[Completion] = None
) -> str:
    prompt = build_recommendation_prompt(ph, moisture, temperature, desired_crop)
    completion = completion or call_perplexity

    try:
        answer = completion(prompt, max_tokens=RECOMMEND_MAX_TOKENS)
        answer = answer.strip() if isinstance(answer, str) else ""
    except Exception as e:
        logger.error(f"Recommendation completion failed: {str(e)}", exc_info=True)
        return RECOMMEND_FALLBACK

    if not answer:
        logger.error("Recommendation completion returned an empty answer")
        return RECOMMEND_FALLBACK

    return answer
