"""
Recipe chat - free-form Q&A about one recipe.

Stateless: the caller sends the whole history every turn and the recipe is
injected into the system prompt. 1 LLM call per turn.
"""

import logging
from typing import Literal

from pydantic import BaseModel

from overcook.errors import ChatError, ValidationFailed
from overcook.llm.client import call_llm_chat
from overcook.recipes.generator import to_generation_error
from overcook.recipes.models import Recipe
from overcook.recipes.prompts import CHAT_GREETING, build_chat_system_prompt

logger = logging.getLogger(__name__)

# History cap: 20 messages = 10 user/assistant exchanges
MAX_HISTORY = 20


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


def greeting() -> ChatMessage:
    """The assistant's opening message, shown before the user types anything."""
    return ChatMessage(role="assistant", content=CHAT_GREETING)


def _trim_history(history: list[ChatMessage]) -> list[ChatMessage]:
    # The canned greeting is UI chrome, not part of the conversation
    messages = [m for m in history if not (m.role == "assistant" and m.content == CHAT_GREETING)]
    return messages[-MAX_HISTORY:]


async def chat(recipe: Recipe, history: list[ChatMessage]) -> ChatMessage:
    """
    Answer the latest user message about `recipe`.

    Raises:
        ValidationFailed: history is empty or does not end with a user message
        ChatError: the chat service failed
    """
    if not history or history[-1].role != "user" or not history[-1].content.strip():
        raise ValidationFailed("Type a question about the recipe first")

    messages = [m.model_dump() for m in _trim_history(history)]
    try:
        reply = await call_llm_chat(
            system_prompt=build_chat_system_prompt(recipe),
            messages=messages,
            purpose="recipe_chat",
        )
    except Exception as e:
        logger.error(f"Recipe chat failed for {recipe.id}: {e}")
        mapped = to_generation_error(e)
        raise ChatError(mapped.message, status_code=mapped.status_code) from e

    if not reply.strip():
        raise ChatError("No content received from AI")
    return ChatMessage(role="assistant", content=reply)
