"""Tiered fuzzy matching for launcher queries.

``score(query, candidate)`` returns a non-negative integer, 0 meaning "no
match". Both strings are normalized the same way, then tried against six
tiers in order; the first tier that matches decides the score:

    exact         1200
    prefix        1000 - len(candidate)
    word prefix    860 - len(candidate)
    substring      760 - len(candidate)
    subsequence    620 - 7 * gaps - len(candidate)
    typo (<= 2)    520 - 120 * distance - len(candidate)

Lengths are measured on the normalized candidate. The typo tier only runs for
queries up to 24 and candidates up to 64 characters, which bounds the
edit-distance work done per keystroke.
"""

from __future__ import annotations

import re
import unicodedata

EXACT_SCORE = 1200
PREFIX_BASE = 1000
WORD_PREFIX_BASE = 860
SUBSTRING_BASE = 760
SUBSEQUENCE_BASE = 620
SUBSEQUENCE_GAP_PENALTY = 7
TYPO_BASE = 520
TYPO_DISTANCE_PENALTY = 120

MAX_TYPO_DISTANCE = 2
MAX_TYPO_QUERY_LENGTH = 24
MAX_TYPO_CANDIDATE_LENGTH = 64

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def normalize(value: str) -> str:
    """Strip diacritics, fold case and collapse non-alphanumeric runs to one space."""
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM_RUN.sub(" ", stripped.casefold()).strip()


def word_prefix_match(query: str, candidate: str) -> bool:
    return any(word.startswith(query) for word in candidate.split(" "))


def subsequence_score(query: str, candidate: str) -> int:
    """Score ``query`` embedded in order inside ``candidate``; 0 if it is not.

    Gaps count the candidate characters skipped between consecutive matched
    characters. Matching is greedy, leftmost first. The result may be zero or
    negative for long candidates with wide gaps; callers treat that as no match.
    """
    if not query or not candidate:
        return 0

    q_index = 0
    last_match = -1
    gaps = 0
    for c_index, ch in enumerate(candidate):
        if q_index == len(query):
            break
        if ch == query[q_index]:
            if last_match >= 0:
                gaps += max(0, c_index - last_match - 1)
            last_match = c_index
            q_index += 1

    if q_index != len(query):
        return 0
    return SUBSEQUENCE_BASE - gaps * SUBSEQUENCE_GAP_PENALTY - len(candidate)


def levenshtein_distance(lhs: str, rhs: str) -> int:
    """Unit-cost edit distance using two rolling rows."""
    if not lhs:
        return len(rhs)
    if not rhs:
        return len(lhs)

    previous = list(range(len(rhs) + 1))
    current = [0] * (len(rhs) + 1)
    for i, a_char in enumerate(lhs):
        current[0] = i + 1
        for j, b_char in enumerate(rhs):
            substitution_cost = 0 if a_char == b_char else 1
            current[j + 1] = min(
                previous[j + 1] + 1,
                current[j] + 1,
                previous[j] + substitution_cost,
            )
        previous, current = current, previous
    return previous[len(rhs)]


def score(query: str, candidate: str) -> int:
    """Relevance of ``candidate`` for ``query``; 0 excludes the candidate."""
    query = normalize(query)
    candidate = normalize(candidate)
    if not query or not candidate:
        return 0

    length = len(candidate)
    if candidate == query:
        return EXACT_SCORE
    if candidate.startswith(query):
        return PREFIX_BASE - length
    if word_prefix_match(query, candidate):
        return WORD_PREFIX_BASE - length
    if query in candidate:
        return SUBSTRING_BASE - length

    subsequence = subsequence_score(query, candidate)
    if subsequence > 0:
        return subsequence

    if len(query) <= MAX_TYPO_QUERY_LENGTH and length <= MAX_TYPO_CANDIDATE_LENGTH:
        distance = levenshtein_distance(query, candidate)
        if distance <= MAX_TYPO_DISTANCE:
            return TYPO_BASE - distance * TYPO_DISTANCE_PENALTY - length

    return 0
