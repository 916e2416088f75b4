"""
llm_client.py
-------------
Thin client for the Groq chat-completion API (OpenAI-compatible).

Primary function
----------------
ask(prompt, api_key, model=None) -> str | None

Sends a fixed system instruction plus the raw user message and returns the
first completion's text.  A missing key, network failure, timeout, non-200
status or an empty completion list all yield None; nothing is raised.
"""

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

GROQ_CHAT_URL = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_MODEL = "llama3-8b-8192"
SYSTEM_PROMPT = "You are a helpful assistant that answers clearly and concisely."

_TIMEOUT = 20


def build_messages(prompt: str) -> list:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user",   "content": prompt},
    ]


def _first_completion(data) -> Optional[str]:
    """Pull choices[0].message.content out of a decoded response body."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices") or []
    if not choices:
        return None
    try:
        content = choices[0]["message"]["content"]
    except (KeyError, TypeError, IndexError):
        return None
    if not isinstance(content, str):
        return None
    return content.strip() or None


def ask(
    prompt:  str,
    api_key: Optional[str],
    model:   Optional[str] = None,
    timeout: int = _TIMEOUT,
) -> Optional[str]:
    """
    Ask the hosted model and return its reply, or None on any failure.

    Parameters
    ----------
    prompt  : str           – the user's raw message
    api_key : str, optional – Groq bearer credential; None disables the call
    model   : str, optional – model id, defaults to DEFAULT_MODEL
    timeout : int           – request timeout in seconds
    """
    if not api_key:
        logger.error("Missing GROQ_API_KEY; skipping LLM tier")
        return None

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type":  "application/json",
    }
    body = {
        "model":    model or DEFAULT_MODEL,
        "messages": build_messages(prompt),
    }

    logger.info("Asking Groq (%s): %s", body["model"], prompt)
    try:
        response = requests.post(GROQ_CHAT_URL, headers=headers, json=body, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("Groq request failed: %s", exc)
        return None

    if response.status_code != 200:
        logger.warning("Groq API → %s: %s", response.status_code, response.text[:300])
        return None

    try:
        data = response.json()
    except ValueError as exc:
        logger.warning("Groq returned non-JSON body: %s", exc)
        return None

    text = _first_completion(data)
    if text is None:
        logger.warning("Groq returned no usable completion: %s", str(data)[:300])
        return None

    logger.info("Groq replied: %s", text[:120])
    return text
