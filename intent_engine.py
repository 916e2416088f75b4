"""
intent_engine.py
----------------
Regex classifiers for the chat pipeline.  Each one looks at a raw user
message and returns a plain tagged result, so the orchestrator and the web
fallbacks never carry inline pattern checks.

  detect_name_query()    "who is priya" -> NameQuery("priya", "female")
  is_affirmative()       "yes" / "haan" / ...
  is_coding_question()   queries that should search for code
  guess_code_language()  fence tag for a code answer
  asks_who_created()     "who created ..." questions
"""

import re
from dataclasses import dataclass
from typing import Optional

FEMALE = "female"
MALE   = "male"

_NAME_QUERY_RE = re.compile(
    r"\b(do you know|tell me about|who is|what about)\s+([a-z]+)\b",
    re.IGNORECASE,
)

AFFIRMATIVE_TOKENS = frozenset({"yes", "yaa", "ha", "haan", "yup"})

_CODING_RE = re.compile(
    r"\b(code|program|algorithm|sort|sorting|implement|c program|c code|cpp|"
    r"c\+\+|java|python|javascript|function|snippet)\b",
    re.IGNORECASE,
)

_CODE_LANGUAGE_RE = re.compile(r"\b(c|cpp|java|python|javascript|js)\b", re.IGNORECASE)
DEFAULT_CODE_LANGUAGE = "txt"


@dataclass(frozen=True)
class NameQuery:
    """A person the user asked about, awaiting a yes/no confirmation."""
    name:   str
    gender: str

    def to_dict(self) -> dict:
        return {"name": self.name, "gender": self.gender}

    @classmethod
    def from_dict(cls, data) -> Optional["NameQuery"]:
        if not isinstance(data, dict) or not data.get("name"):
            return None
        gender = FEMALE if data.get("gender") == FEMALE else MALE
        return cls(name=str(data["name"]), gender=gender)


def infer_gender(name: str) -> str:
    # names ending in "a" or "i" are read as female
    return FEMALE if name.endswith(("a", "i")) else MALE


def detect_name_query(message: str) -> Optional[NameQuery]:
    match = _NAME_QUERY_RE.search((message or "").lower())
    if not match:
        return None
    name = match.group(2)
    return NameQuery(name=name, gender=infer_gender(name))


def is_affirmative(message: str) -> bool:
    """True only when the whole message is an affirmative token (any case)."""
    return (message or "").lower() in AFFIRMATIVE_TOKENS


def is_coding_question(message: str) -> bool:
    return bool(_CODING_RE.search(message or ""))


def guess_code_language(query: str) -> str:
    match = _CODE_LANGUAGE_RE.search(query or "")
    return match.group(1).lower() if match else DEFAULT_CODE_LANGUAGE


def asks_who_created(message: str) -> bool:
    return "who created" in (message or "").lower()
