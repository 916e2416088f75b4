"""
web_search.py
-------------
Last-resort answers scraped or queried from the public web.

Providers (tried strictly in this order by web_fallback()):
  1. Google        – result-page HTML scrape; coding questions first try to
                     pull a code block from StackOverflow / GitHub results
  2. DuckDuckGo    – instant-answer JSON API
  3. Wikipedia     – search API + plain-text intro extract

Each provider is best-effort: network errors, timeouts, odd payloads and
empty results all collapse to None.  Nothing is retried.  web_fallback()
itself always returns a string.

Google's markup is not under our control and drifts; the selectors below
are checked against saved pages in tests/fixtures/.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import unquote

import requests
from bs4 import BeautifulSoup

from intent_engine import guess_code_language, is_coding_question
from text_engine import looks_english, split_sentences

logger = logging.getLogger(__name__)

_GOOGLE_URL     = "https://www.google.com/search"
_DDG_URL        = "https://api.duckduckgo.com/"
_WIKI_API       = "https://en.wikipedia.org/w/api.php"

_HEADERS = {"User-Agent": "Mozilla/5.0"}

_GOOGLE_TIMEOUT = 12
_PAGE_TIMEOUT   = 10
_API_TIMEOUT    = 10

# Result-snippet containers on Google's basic-HTML result page
_SNIPPET_SELECTOR = "div.BNeawe.s3v9rd.AP7Wnd, div.IsZvec"
_MIN_SNIPPET_CHARS  = 40
_MAX_SNIPPETS       = 5
_MIN_SENTENCE_CHARS = 20
_MAX_SENTENCES      = 3

_CODE_SITES        = "site:stackoverflow.com OR site:github.com"
_REDIRECT_RE       = re.compile(r"/url\?q=([^&]+)")
_MAX_CODE_LINKS    = 5
_MIN_CODE_CHARS    = 20
_MIN_CODE_LINES    = 3

_WIKI_SEARCH_LIMIT = 2


# --------------------------------------------------------------------------- #
#  Internal helpers                                                            #
# --------------------------------------------------------------------------- #

def _safe_get(url: str, params: Optional[dict] = None, timeout: int = _API_TIMEOUT,
              headers: Optional[dict] = None) -> Optional[requests.Response]:
    """GET with error handling; returns the response on 200, else None."""
    try:
        response = requests.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("GET %s failed: %s", url, exc)
        return None
    if response.status_code != 200:
        logger.warning("GET %s → %s", url, response.status_code)
        return None
    return response


def _safe_get_json(url: str, params: dict, timeout: int = _API_TIMEOUT):
    response = _safe_get(url, params=params, timeout=timeout)
    if response is None:
        return None
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("Non-JSON response from %s: %s", url, exc)
        return None


def _google_html(query: str) -> Optional[str]:
    response = _safe_get(
        _GOOGLE_URL,
        params  = {"q": query, "hl": "en"},
        headers = _HEADERS,
        timeout = _GOOGLE_TIMEOUT,
    )
    return response.text if response is not None else None


def extract_snippets(html: str) -> list:
    """English result snippets longer than 40 chars, deduplicated, at most 5."""
    soup = BeautifulSoup(html, "html.parser")
    snippets = []
    for el in soup.select(_SNIPPET_SELECTOR):
        text = el.get_text().strip()
        if len(text) > _MIN_SNIPPET_CHARS and looks_english(text) and text not in snippets:
            snippets.append(text)
    return snippets[:_MAX_SNIPPETS]


def extract_code_links(html: str) -> list:
    """StackOverflow question / GitHub targets of Google redirect links."""
    soup = BeautifulSoup(html, "html.parser")
    links = []
    for anchor in soup.find_all("a", href=True):
        match = _REDIRECT_RE.search(anchor["href"])
        if not match:
            continue
        link = unquote(match.group(1))
        if ("stackoverflow.com/questions" in link or "github.com/" in link) and link not in links:
            links.append(link)
    return links


def extract_code_blocks(html: str) -> list:
    """Text of <pre>/<code> elements longer than 20 chars and spanning > 2 lines."""
    soup = BeautifulSoup(html, "html.parser")
    blocks = []
    for el in soup.select("pre, code"):
        text = el.get_text().strip()
        if len(text) > _MIN_CODE_CHARS and len(text.split("\n")) >= _MIN_CODE_LINES:
            blocks.append(text)
    return blocks


# --------------------------------------------------------------------------- #
#  Providers                                                                   #
# --------------------------------------------------------------------------- #

def search_code_online(query: str) -> Optional[str]:
    """Fetch the longest code block from the first useful StackOverflow/GitHub hit."""
    logger.info("Searching StackOverflow/GitHub code for: %s", query)
    html = _google_html(f"{query} {_CODE_SITES}")
    if not html:
        return None

    for link in extract_code_links(html)[:_MAX_CODE_LINKS]:
        page = _safe_get(link, headers=_HEADERS, timeout=_PAGE_TIMEOUT)
        if page is None:
            continue
        blocks = extract_code_blocks(page.text)
        if blocks:
            best = max(blocks, key=len)
            lang = guess_code_language(query)
            return f"```{lang}\n{best}\n```"
    return None


def google_search(query: str) -> Optional[str]:
    logger.info("Searching Google: %s", query)
    if is_coding_question(query):
        code = search_code_online(query)
        if code:
            return code

    html = _google_html(query)
    if not html:
        return None

    combined  = " ".join(extract_snippets(html))
    sentences = [s for s in split_sentences(combined) if len(s) > _MIN_SENTENCE_CHARS]
    return " ".join(sentences[:_MAX_SENTENCES]) or None


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _english_text(value) -> Optional[str]:
    if isinstance(value, str) and looks_english(value):
        return value
    return None


def duckduckgo_search(query: str) -> Optional[str]:
    logger.info("Searching DuckDuckGo: %s", query)
    data = _safe_get_json(_DDG_URL, {"q": query, "format": "json", "no_html": 1})
    if not isinstance(data, dict):
        return None

    abstract = _english_text(data.get("AbstractText"))
    if abstract:
        return abstract

    related = _as_list(data.get("RelatedTopics"))
    first = _as_dict(related[0]) if related else {}
    return _english_text(first.get("Text"))


def _wiki_intro(title: str) -> Optional[str]:
    data = _safe_get_json(_WIKI_API, {
        "action":      "query",
        "prop":        "extracts",
        "exintro":     1,
        "explaintext": 1,
        "format":      "json",
        "titles":      title,
    })
    pages = _as_dict(_as_dict(_as_dict(data).get("query")).get("pages"))
    for page in pages.values():
        extract = _as_dict(page).get("extract")
        return extract if isinstance(extract, str) else None
    return None


def wikipedia_search(query: str) -> Optional[str]:
    logger.info("Searching Wikipedia: %s", query)
    data = _safe_get_json(_WIKI_API, {
        "action":   "query",
        "list":     "search",
        "srsearch": query,
        "utf8":     "",
        "format":   "json",
        "srlimit":  _WIKI_SEARCH_LIMIT,
    })
    if not isinstance(data, dict):
        return None

    for hit in _as_list(_as_dict(data.get("query")).get("search")):
        title = _as_dict(hit).get("title")
        if not isinstance(title, str) or not title:
            continue
        extract = _english_text(_wiki_intro(title))
        if extract:
            return " ".join(split_sentences(extract)[:_MAX_SENTENCES])
    return None


# --------------------------------------------------------------------------- #
#  Public API                                                                  #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class WebProvider:
    """A labelled search function; attempt() prefixes the source label."""
    label:  str
    search: Callable[[str], Optional[str]]

    def attempt(self, query: str) -> Optional[str]:
        result = self.search(query)
        if not result:
            return None
        return f"From {self.label}: {result}"


def default_providers() -> tuple:
    return (
        WebProvider("Google",     google_search),
        WebProvider("DuckDuckGo", duckduckgo_search),
        WebProvider("Wikipedia",  wikipedia_search),
    )


def not_found_message(query: str) -> str:
    return f"I couldn't find a clear English answer for “{query}”."


def web_fallback(query: str, providers=None) -> str:
    """
    Try each provider in order and return the first labelled answer.

    Falls back to not_found_message(query) when every provider comes up
    empty, so the result is never None.
    """
    for provider in providers if providers is not None else default_providers():
        answer = provider.attempt(query)
        if answer:
            logger.info("Web answer from %s", provider.label)
            return answer
    logger.info("No web provider answered: %s", query)
    return not_found_message(query)
