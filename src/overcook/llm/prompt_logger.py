"""
Left OverCook - Prompt Logger.

Writes every LLM request and its outcome to a markdown file for debugging.
Enabled via OVERCOOK_LOG_PROMPTS=1 or the --log-prompts CLI flag.
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any

LOG_PROMPTS = os.getenv("OVERCOOK_LOG_PROMPTS", "0") == "1"
LOG_DIR = Path("prompt_logs")

_run_id: str | None = None
_call_counter: int = 0


def enable_prompt_logging(enabled: bool = True) -> None:
    """Enable or disable prompt logging."""
    global LOG_PROMPTS
    LOG_PROMPTS = enabled
    if enabled:
        LOG_DIR.mkdir(exist_ok=True)


def _get_run_dir() -> Path:
    """Directory for this process's logs, created on first use."""
    global _run_id
    if _run_id is None:
        _run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = LOG_DIR / _run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def _format_response(response: Any) -> str:
    if isinstance(response, str):
        return f"```\n{response}\n```\n"
    try:
        if hasattr(response, "model_dump"):
            response = response.model_dump()
        return f"```json\n{json.dumps(response, indent=2, default=str)}\n```\n"
    except (TypeError, ValueError) as e:
        return f"```\n{response}\n```\n\n(Serialization error: {e})\n"


def log_prompt(
    *,
    purpose: str,
    model: str,
    messages: list[dict[str, str]],
    response: Any = None,
    error: str | None = None,
) -> Path | None:
    """
    Log one LLM call to a file.

    Args:
        purpose: What the call was for ("generate_recipes", "recipe_chat")
        model: Model name sent to the gateway
        messages: Chat messages as sent
        response: Parsed response, if the call succeeded
        error: Error text, if the call failed

    Returns:
        Path to the log file, or None if logging is disabled
    """
    if not LOG_PROMPTS:
        return None

    global _call_counter
    _call_counter += 1

    filepath = _get_run_dir() / f"{_call_counter:02d}_{purpose}.md"

    parts = [
        f"# LLM Call: {purpose}",
        "",
        f"**Time:** {datetime.now().isoformat()}",
        f"**Model:** {model}",
    ]
    for message in messages:
        parts += ["", "---", "", f"## {message['role'].title()}", "", "```", message["content"], "```"]
    parts += ["", "---", "", "## Response", ""]

    content = "\n".join(parts) + "\n"
    if error:
        content += f"**ERROR:** {error}\n"
    elif response is not None:
        content += _format_response(response)
    else:
        content += "(No response)\n"

    filepath.write_text(content, encoding="utf-8")
    return filepath


def reset_run() -> None:
    """Start a fresh log directory and counter (tests, new CLI run)."""
    global _run_id, _call_counter
    _run_id = None
    _call_counter = 0
