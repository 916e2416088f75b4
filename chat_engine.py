"""
chat_engine.py
--------------
Reply pipeline behind POST /chat.

Tiers (highest → lowest priority), first non-None reply wins:
  1. Person-name question         → yes/no probe
  2. Confirmation of that probe   → templated reply
  3. Personality rules
  4. Local Q/A dataset
  5. Groq LLM (creator attribution applied to its reply)
  6. Web fallback chain           → always a string

Tiers run one after another; nothing is raced or retried.  Exceptions are
left to the HTTP layer, which turns them into a generic 500.
"""

import logging
from typing import MutableMapping, Optional

import llm_client
import personality_engine
import web_search
from dataset_engine import QADataset

logger = logging.getLogger(__name__)


def _llm_tier(message: str, api_key: Optional[str], model: Optional[str]) -> Optional[str]:
    reply = llm_client.ask(message, api_key=api_key, model=model)
    if reply is None:
        return None
    return personality_engine.apply_creator_attribution(message, reply)


def build_tiers(
    state:   MutableMapping,
    dataset: QADataset,
    api_key: Optional[str] = None,
    model:   Optional[str] = None,
) -> list:
    """Return the ordered [(name, fn(message) -> str | None)] tier list."""
    return [
        ("name_query",   lambda m: personality_engine.ask_about_person(m, state)),
        ("name_confirm", lambda m: personality_engine.confirm_person(m, state)),
        ("personality",  personality_engine.personality_reply),
        ("dataset",      dataset.find_best_answer),
        ("llm",          lambda m: _llm_tier(m, api_key, model)),
        ("web",          web_search.web_fallback),
    ]


def get_reply(
    message: str,
    state:   MutableMapping,
    dataset: QADataset,
    api_key: Optional[str] = None,
    model:   Optional[str] = None,
) -> str:
    """
    Run *message* through every tier in order and return the first reply.

    Parameters
    ----------
    message : str            – the user's raw message
    state   : MutableMapping – per-conversation storage for the name dialogue
    dataset : QADataset      – loaded Q/A collection
    api_key : str, optional  – Groq credential; None skips the LLM tier
    model   : str, optional  – Groq model id
    """
    logger.info('User asked: "%s"', message)
    for name, tier in build_tiers(state, dataset, api_key, model):
        reply = tier(message)
        if reply is not None:
            logger.info("Reply from tier %s: %s", name, reply[:120])
            return reply
