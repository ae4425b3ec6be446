"""
Left OverCook - LLM Client.

Provides structured (Instructor) and free-form chat calls.
"""

from overcook.llm.client import call_llm, call_llm_chat, get_client

__all__ = [
    "get_client",
    "call_llm",
    "call_llm_chat",
]
