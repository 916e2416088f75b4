"""
dataset_engine.py
-----------------
Local question/answer dataset.

The dataset is a JSON file holding a list of {"question", "answer"} objects.
It is read wholly into memory at start-up and again on GET /reload; a reload
replaces the whole collection.  Every incoming message is scored against
every question with text_engine.keyword_score() and the best answer is
returned when it clears MATCH_THRESHOLD.

A missing or malformed file is not fatal: the dataset becomes empty and the
server keeps answering from the later tiers.
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from text_engine import keyword_score

logger = logging.getLogger(__name__)

MATCH_THRESHOLD = 0.55


@dataclass(frozen=True)
class QAEntry:
    question: str
    answer:   str


def _parse_entries(raw) -> tuple:
    if not isinstance(raw, list):
        raise ValueError(f"expected a JSON list, got {type(raw).__name__}")

    entries = []
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            logger.warning("Skipping dataset item %d: not an object", idx)
            continue
        entries.append(QAEntry(
            question = str(item.get("question") or ""),
            answer   = str(item.get("answer") or ""),
        ))
    return tuple(entries)


class QADataset:
    """In-memory Q/A collection backed by a JSON file."""

    def __init__(self, path: str):
        self.path = path
        self._entries: tuple = ()

    @property
    def entries(self) -> tuple:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> bool:
        """
        (Re)read the backing file.  Returns True on success.

        On any failure the collection is set to empty and False is returned;
        this method never raises.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                entries = _parse_entries(json.load(fh))
        except (OSError, ValueError) as exc:
            logger.error("Could not read dataset %s: %s", self.path, exc)
            self._entries = ()
            return False

        self._entries = entries
        logger.info("Loaded dataset %s (%d entries)", self.path, len(entries))
        return True

    def find_best_match(self, message: str) -> tuple:
        """
        Return (best_entry_or_None, best_score).

        Strict '>' keeps the first-seen entry on ties; a zero score never
        produces a match.
        """
        best       = None
        best_score = 0.0
        for entry in self._entries:
            score = keyword_score(message, entry.question)
            if score > best_score:
                best, best_score = entry, score
        return best, best_score

    def find_best_answer(self, message: str) -> Optional[str]:
        best, best_score = self.find_best_match(message)
        if best is not None and best_score >= MATCH_THRESHOLD:
            logger.info("Dataset match (score=%.2f): %s", best_score, best.question)
            return best.answer
        logger.info("No dataset match (best=%.2f)", best_score)
        return None
