"""Text analysis helpers shared by the generators.

Two matching styles are used on purpose:
- ``normalize`` produces whole-word tokens for keyword gates.
- ``detect_component`` and ``detect_user_types`` use substring containment,
  which over-matches so that text always gets a classification.
"""

import re
from collections.abc import Iterable

from ..models import Component
from .taxonomy import COMPONENT_KEYWORDS, DEFAULT_USER_TYPE, USER_TYPES


_NON_WORD = re.compile(r"[^a-z0-9\s]")
MIN_TOKEN_LENGTH = 3


def normalize(text: str) -> set[str]:
    """Tokenize free text into a set of lowercase keywords.

    Every character outside ``[a-z0-9]`` and whitespace becomes a space;
    tokens shorter than three characters are dropped.

    Args:
        text: Free text (goal, constraints, ...).

    Returns:
        Set of tokens. Order is not significant.
    """
    cleaned = _NON_WORD.sub(" ", text.lower())
    return {token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH}


def mentions_any(tokens: set[str], keywords: Iterable[str]) -> bool:
    """Check whether any keyword is one of the normalized tokens."""
    return any(keyword in tokens for keyword in keywords)


def detect_component(text: str) -> Component:
    """Classify text into the first component with a keyword inside it.

    Args:
        text: Free text.

    Returns:
        Matching component, or frontend when nothing matches.
    """
    lower = text.lower()
    for component, keywords in COMPONENT_KEYWORDS.items():
        if any(keyword in lower for keyword in keywords):
            return component
    return Component.FRONTEND


def detect_user_types(text: str) -> list[str]:
    """Find user-type labels mentioned in text, in vocabulary order.

    Args:
        text: Target users description.

    Returns:
        Non-empty list of labels; ``["end user"]`` when none is mentioned.
    """
    lower = text.lower()
    found = [user_type for user_type in USER_TYPES if user_type in lower]
    return found or [DEFAULT_USER_TYPE]
