"""
Left OverCook - LLM Client.

Wraps an OpenAI-compatible gateway. Structured calls go through Instructor so
the response is validated against a Pydantic model; chat calls return text.
All LLM calls go through here for consistency and prompt logging.

No call is retried automatically: a failed or malformed response is raised to
the caller and the user decides whether to try again.
"""

from typing import TypeVar

import instructor
from openai import AsyncOpenAI
from pydantic import BaseModel

from overcook.config import settings
from overcook.llm.prompt_logger import log_prompt

T = TypeVar("T", bound=BaseModel)

_openai: AsyncOpenAI | None = None
_client: instructor.AsyncInstructor | None = None


def get_openai() -> AsyncOpenAI:
    """Get the raw async OpenAI client (singleton)."""
    global _openai

    if _openai is None:
        _openai = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.llm_base_url,
            max_retries=0,
        )

    return _openai


def get_client() -> instructor.AsyncInstructor:
    """Get the Instructor-wrapped client (singleton)."""
    global _client

    if _client is None:
        _client = instructor.from_openai(get_openai(), mode=instructor.Mode.JSON)

    return _client


async def call_llm(
    *,
    response_model: type[T],
    system_prompt: str,
    user_prompt: str,
    purpose: str,
    model: str | None = None,
    temperature: float | None = None,
) -> T:
    """
    Make a structured LLM call.

    Args:
        response_model: Pydantic model class for the response
        system_prompt: System message setting context
        user_prompt: User message with the actual request
        purpose: Short label for prompt logs
        model: Model override (defaults to settings.recipe_model)
        temperature: Temperature override

    Returns:
        Instance of response_model with validated data

    Raises:
        Whatever the OpenAI SDK or Instructor raises; callers translate.
    """
    model = model or settings.recipe_model
    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]

    try:
        response = await get_client().chat.completions.create(
            model=model,
            messages=messages,
            response_model=response_model,
            # One attempt: a malformed response is an error, never re-asked
            max_retries=1,
            temperature=temperature if temperature is not None else settings.recipe_temperature,
        )
    except Exception as e:
        log_prompt(purpose=purpose, model=model, messages=messages, error=str(e))
        raise

    log_prompt(purpose=purpose, model=model, messages=messages, response=response)
    return response


async def call_llm_chat(
    *,
    system_prompt: str,
    messages: list[dict[str, str]],
    purpose: str,
    model: str | None = None,
    temperature: float | None = None,
) -> str:
    """
    Free-form chat completion.

    Args:
        system_prompt: System message
        messages: Full conversation history (role/content dicts), oldest first
        purpose: Short label for prompt logs

    Returns:
        The assistant's reply text ("" if the gateway returned no content)
    """
    model = model or settings.chat_model
    full_messages = [{"role": "system", "content": system_prompt}, *messages]

    try:
        completion = await get_openai().chat.completions.create(
            model=model,
            messages=full_messages,
            temperature=temperature if temperature is not None else settings.chat_temperature,
        )
    except Exception as e:
        log_prompt(purpose=purpose, model=model, messages=full_messages, error=str(e))
        raise

    content = completion.choices[0].message.content or ""
    log_prompt(purpose=purpose, model=model, messages=full_messages, response=content)
    return content
