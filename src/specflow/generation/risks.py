"""Risk, assumption and blocker generation."""

from ..models import RiskType, Template
from .analyzer import mentions_any, normalize
from .drafts import RiskDraft
from .taxonomy import (
    COMPLIANCE_CONSTRAINT_KEYWORDS,
    INTEGRATION_GOAL_KEYWORDS,
    MIGRATION_GOAL_KEYWORDS,
    PERFORMANCE_CONSTRAINT_KEYWORDS,
    SCALE_GOAL_KEYWORDS,
    SENSITIVE_GOAL_KEYWORDS,
    TEMPLATE_RISKS,
    resolve_template,
)


STABLE_REQUIREMENTS = RiskDraft(
    RiskType.ASSUMPTION,
    "User requirements are assumed to be stable. Scope changes during development "
    "may impact timeline and resource allocation.",
)

THIRD_PARTY_AVAILABILITY = RiskDraft(
    RiskType.UNKNOWN,
    "Third-party service availability and API rate limits need to be validated "
    "before integration.",
)

PERFORMANCE_AT_SCALE = RiskDraft(
    RiskType.BLOCKER,
    "Performance at scale has not been validated. Load testing is required to "
    "identify bottlenecks before launch.",
)

SECURITY_COMPLIANCE = RiskDraft(
    RiskType.BLOCKER,
    "Security audit and compliance review required. Data handling must comply "
    "with relevant regulations before deployment.",
)

EXTERNAL_API_CONTRACTS = RiskDraft(
    RiskType.UNKNOWN,
    "External API contracts and versioning strategy need clarification. Changes "
    "to third-party APIs could break integration.",
)

LEGACY_MIGRATION = RiskDraft(
    RiskType.BLOCKER,
    "Data migration from legacy systems requires detailed mapping. Incomplete "
    "migrations could cause data loss.",
)

TEAM_CAPACITY = RiskDraft(
    RiskType.ASSUMPTION,
    "Team capacity and skill availability are sufficient for the estimated "
    "timeline. Resource conflicts may delay delivery.",
)


def generate_risks(
    goal: str,
    constraints: str = "",
    template: Template | str | None = None,
) -> list[RiskDraft]:
    """Generate risks in the fixed check order.

    Args:
        goal: Feature goal.
        constraints: Optional constraints text.
        template: Project template; unknown values add no template risks.

    Returns:
        Risk drafts, always starting with the two baseline risks and
        ending with the team capacity assumption.
    """
    keywords = normalize(goal)
    constraint_keywords = normalize(constraints) if constraints else set()

    risks = [STABLE_REQUIREMENTS, THIRD_PARTY_AVAILABILITY]

    if (mentions_any(keywords, SCALE_GOAL_KEYWORDS)
            or mentions_any(constraint_keywords, PERFORMANCE_CONSTRAINT_KEYWORDS)):
        risks.append(PERFORMANCE_AT_SCALE)

    if (mentions_any(keywords, SENSITIVE_GOAL_KEYWORDS)
            or mentions_any(constraint_keywords, COMPLIANCE_CONSTRAINT_KEYWORDS)):
        risks.append(SECURITY_COMPLIANCE)

    if mentions_any(keywords, INTEGRATION_GOAL_KEYWORDS):
        risks.append(EXTERNAL_API_CONTRACTS)

    risks.extend(
        RiskDraft(risk_type, text)
        for risk_type, text in TEMPLATE_RISKS.get(resolve_template(template), ())
    )

    if mentions_any(keywords, MIGRATION_GOAL_KEYWORDS):
        risks.append(LEGACY_MIGRATION)

    risks.append(TEAM_CAPACITY)
    return risks
