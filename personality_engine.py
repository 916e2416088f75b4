"""
personality_engine.py
---------------------
Canned, personality-driven replies that run before any lookup.

  ask_about_person()           "who is priya" → yes/no probe, remembers the name
  confirm_person()             "yes" after a probe → templated reply about them
  personality_reply()          small fixed rule set (greetings, identity, ...)
  apply_creator_attribution()  rewrites LLM replies to "who created ..." questions

The pending person lives in a per-conversation mapping passed in by the
caller (the Flask session in app.py), never in module state.
"""

import logging
from typing import MutableMapping, Optional

from intent_engine import (
    FEMALE,
    NameQuery,
    asks_who_created,
    detect_name_query,
    is_affirmative,
)
from text_engine import normalize

logger = logging.getLogger(__name__)

PENDING_KEY = "pending_person"

FEMALE_PROBE = "Is she from RRSDEC Begusarai?"
MALE_PROBE   = "Is he from RRSDEC Begusarai?"

_FEMALE_TEMPLATE = (
    "Aree {name} is a really sweet and confident girl from RRSDEC! 🌸 "
    "Always active in events and known for her smile that can fix a whole bad day 😄. "
    "Fun fact: College ke canteen wale bhi uska naam leke discount de dete hain "
    "— bas naam ka jaadu hi aisa hai! 😂"
)
_MALE_TEMPLATE = (
    "{name} bhai is a proper RRSDEC legend 😎. "
    "Coding me tez, attendance me kam, par style me full marks! 💪 "
    "Fun fact: Teachers bhi kehte hain “iska confidence alag level pe hai” "
    "— par result ke time silent mode on kar deta hai 😅"
)

CREATOR_ATTRIBUTION = "My creator is Abhiranjan Singh — smart, funny, and a bit pagal 😜"
_DISALLOWED_CREATOR = "meta"

# ═══════════════════════════════════════════════════════════════════════════
#  PERSONALITY RULES
# ═══════════════════════════════════════════════════════════════════════════
PERSONALITY_RULES = [
    {
        "phrases": ["hi", "hello", "hey", "hii", "namaste", "good morning",
                    "good afternoon", "good evening"],
        "response": "Hey there! 👋 Ask me anything, I'll do my best to answer.",
    },
    {
        "phrases": ["who are you", "what is your name", "what s your name",
                    "your name", "introduce yourself"],
        "response": (
            "I'm the RRSDEC chat buddy 🤖. I answer from my own notes first, "
            "then ask an AI model, and if that fails I search the web for you."
        ),
    },
    {
        "phrases": ["how are you", "how r u", "how are you doing"],
        "response": "I'm doing great, thanks for asking! 😄 What's on your mind?",
    },
    {
        "phrases": ["thanks", "thank you", "thank u", "thx"],
        "response": "Anytime! 😊",
    },
    {
        "phrases": ["bye", "goodbye", "see you", "good night"],
        "response": "Bye! 👋 Come back whenever you have a question.",
    },
]


def _phrase_matches(phrase: str, cleaned: str) -> bool:
    # single words must be the whole message; phrases may sit inside it
    if " " not in phrase:
        return cleaned == phrase
    return f" {phrase} " in f" {cleaned} "


def personality_reply(message: str) -> Optional[str]:
    cleaned = normalize(message)
    if not cleaned:
        return None
    for rule in PERSONALITY_RULES:
        for phrase in rule["phrases"]:
            if _phrase_matches(phrase, cleaned):
                return rule["response"]
    return None


def probe_for(query: NameQuery) -> str:
    return FEMALE_PROBE if query.gender == FEMALE else MALE_PROBE


def describe_person(query: NameQuery) -> str:
    name = query.name[:1].upper() + query.name[1:]
    template = _FEMALE_TEMPLATE if query.gender == FEMALE else _MALE_TEMPLATE
    return template.format(name=name)


def get_pending(state: MutableMapping) -> Optional[NameQuery]:
    return NameQuery.from_dict(state.get(PENDING_KEY))


def ask_about_person(message: str, state: MutableMapping) -> Optional[str]:
    """
    If the message asks about a person, remember them and return the probe.

    Any earlier unconfirmed person in *state* is overwritten.
    """
    query = detect_name_query(message)
    if query is None:
        return None
    state[PENDING_KEY] = query.to_dict()
    logger.info("Pending person query: %s (%s)", query.name, query.gender)
    return probe_for(query)


def confirm_person(message: str, state: MutableMapping) -> Optional[str]:
    """
    Answer an affirmative follow-up to the last probe, consuming it.

    Returns None (and leaves *state* untouched) when nothing is pending or
    the message is not an affirmative token.
    """
    pending = get_pending(state)
    if pending is None or not is_affirmative(message):
        return None
    state.pop(PENDING_KEY, None)
    return describe_person(pending)


def apply_creator_attribution(message: str, reply: str) -> str:
    if _DISALLOWED_CREATOR in reply.lower() and asks_who_created(message):
        return CREATOR_ATTRIBUTION
    return reply
