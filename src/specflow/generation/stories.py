"""User story generation from goal, target users and constraints."""

from ..models import ItemType
from .analyzer import detect_user_types, mentions_any, normalize
from .drafts import ItemDraft
from .taxonomy import (
    ACCESSIBILITY_CONSTRAINT_KEYWORDS,
    COLLABORATION_KEYWORDS,
    MOBILE_KEYWORDS,
    PERSISTENCE_KEYWORDS,
    SECURITY_CONSTRAINT_KEYWORDS,
    SPEED_CONSTRAINT_KEYWORDS,
)


def _story(title: str) -> ItemDraft:
    return ItemDraft(title=title, type=ItemType.STORY)


def _goal_phrase(goal: str) -> str:
    """Lowercase the goal and drop one trailing period."""
    phrase = goal.lower()
    if phrase.endswith("."):
        phrase = phrase[:-1]
    return phrase


def generate_stories(goal: str, target_users: str, constraints: str = "") -> list[ItemDraft]:
    """Generate user stories in a fixed, deterministic order.

    Args:
        goal: Feature goal.
        target_users: Free-text description of who the feature is for.
        constraints: Optional constraints (performance, security, ...).

    Returns:
        Story drafts. Components and phases are assigned by the assembler.
    """
    user_types = detect_user_types(target_users)
    primary = user_types[0]
    keywords = normalize(goal)
    phrase = _goal_phrase(goal)

    # Core story per user type
    stories = [
        _story(
            f"As a {user_type}, I want to {phrase} so that I can accomplish "
            f"my objectives efficiently"
        )
        for user_type in user_types
    ]

    stories.append(_story(
        f"As a {primary}, I want to easily find and access the feature so that "
        f"I can use it without confusion"
    ))
    stories.append(_story(
        f"As a {primary}, I want to receive clear feedback when performing actions "
        f"so that I know my actions were successful"
    ))
    stories.append(_story(
        f"As a {primary}, I want to see helpful error messages when something goes "
        f"wrong so that I can recover quickly"
    ))

    if mentions_any(keywords, PERSISTENCE_KEYWORDS):
        stories.append(_story(
            f"As a {primary}, I want my data to be saved automatically so that "
            f"I don't lose my work"
        ))

    if mentions_any(keywords, MOBILE_KEYWORDS):
        stories.append(_story(
            "As a mobile user, I want the feature to work seamlessly on my device "
            "so that I can use it on the go"
        ))

    if mentions_any(keywords, COLLABORATION_KEYWORDS):
        stories.append(_story(
            "As a team member, I want to share and collaborate on content so that "
            "my team stays aligned"
        ))

    stories.append(_story(
        f"As a {primary}, I want to customize my preferences so that the feature "
        f"works the way I prefer"
    ))

    if constraints:
        stories.extend(_constraint_stories(primary, normalize(constraints)))

    return stories


def _constraint_stories(primary: str, keywords: set[str]) -> list[ItemDraft]:
    """Stories driven by performance, security and accessibility constraints."""
    stories = []

    if mentions_any(keywords, SPEED_CONSTRAINT_KEYWORDS):
        stories.append(_story(
            f"As a {primary}, I want the feature to load quickly so that I'm not "
            f"frustrated by delays"
        ))

    if mentions_any(keywords, SECURITY_CONSTRAINT_KEYWORDS):
        stories.append(_story(
            f"As a {primary}, I want my data to be secure so that my privacy is protected"
        ))

    if mentions_any(keywords, ACCESSIBILITY_CONSTRAINT_KEYWORDS):
        stories.append(_story(
            f"As a {primary} with accessibility needs, I want the feature to be fully "
            f"accessible so that I can use it without barriers"
        ))

    return stories
