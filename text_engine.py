"""
text_engine.py
--------------
Small text helpers shared by the dataset matcher and the web fallbacks:
  - normalize()       lowercase, strip punctuation, collapse whitespace
  - keywords()        normalized tokens minus stop words
  - keyword_score()   Jaccard overlap with a containment boost
  - looks_english()   cheap "is this mostly English" check for scraped text
  - split_sentences() split on terminal punctuation
"""

import re

# Stop words (excluded from keyword matching)
STOP_WORDS = frozenset({
    "the", "is", "in", "at", "which", "on", "a", "an", "and", "of", "for",
    "to", "from", "by", "what", "who", "when", "where", "why", "how",
    "about", "tell", "me",
})

# Score floor applied when one normalized string contains the other
CONTAINMENT_SCORE = 0.8

# Non-ASCII fraction at or above which text is treated as non-English
_MAX_NON_ASCII_RATIO = 0.15
_MIN_LATIN_LETTERS   = 5

_PUNCT_RE      = re.compile(r"[^\w\s]|_")
_SPACE_RE      = re.compile(r"\s+")
_LATIN_RE      = re.compile(r"[A-Za-z]")
_NON_ASCII_RE  = re.compile(r"[^\x00-\x7F]")
_SENTENCE_RE   = re.compile(r"(?<=[.?!])\s+")


def normalize(text) -> str:
    """Lowercase, replace punctuation with spaces and collapse whitespace."""
    text = (text or "").lower()
    text = _PUNCT_RE.sub(" ", text)
    return _SPACE_RE.sub(" ", text).strip()


def keywords(text) -> set:
    return {w for w in normalize(text).split(" ") if w and w not in STOP_WORDS}


def keyword_score(a, b) -> float:
    """
    Similarity in [0, 1] between two strings.

    Score = |A ∩ B| / |A ∪ B| over the keyword sets.  When either normalized
    string contains the other the score is raised to at least 0.8.  Returns
    0.0 if either side has no keywords.
    """
    a_kws = keywords(a)
    b_kws = keywords(b)
    if not a_kws or not b_kws:
        return 0.0

    score = len(a_kws & b_kws) / len(a_kws | b_kws)

    norm_a, norm_b = normalize(a), normalize(b)
    if norm_b in norm_a or norm_a in norm_b:
        score = max(score, CONTAINMENT_SCORE)
    return score


def looks_english(text) -> bool:
    if not text:
        return False
    letters   = len(_LATIN_RE.findall(text))
    non_ascii = len(_NON_ASCII_RE.findall(text))
    return letters > _MIN_LATIN_LETTERS and non_ascii / len(text) < _MAX_NON_ASCII_RATIO


def split_sentences(text) -> list:
    """Split on whitespace that follows '.', '?' or '!'."""
    if not text:
        return []
    return [s for s in _SENTENCE_RE.split(text) if s]
