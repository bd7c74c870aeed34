"""Keyword taxonomy and fixed dispatch tables for the generation engine.

All tables are ordered: classification and emission order follow
declaration order.
"""

from ..models import Component, Phase, RiskType, Template


# Component classification keywords, matched by substring containment
COMPONENT_KEYWORDS: dict[Component, tuple[str, ...]] = {
    Component.FRONTEND: (
        "ui", "interface", "page", "form", "button", "layout", "display", "view",
        "dashboard", "screen", "widget", "modal", "component", "responsive",
        "animation", "theme", "navigation", "menu", "sidebar", "header", "footer",
        "card", "list", "table", "chart", "graph", "notification", "toast", "popup",
    ),
    Component.BACKEND: (
        "api", "server", "database", "endpoint", "auth", "data", "storage",
        "service", "logic", "process", "queue", "cache", "webhook", "cron",
        "migration", "model", "controller", "middleware", "session", "token",
        "encryption",
    ),
    Component.DESIGN: (
        "design", "ux", "wireframe", "mockup", "prototype", "brand", "style",
        "color", "typography", "icon", "illustration", "accessibility", "usability",
    ),
    Component.TESTING: (
        "test", "qa", "quality", "bug", "regression", "automation", "coverage",
        "integration", "e2e", "unit", "performance", "load", "stress",
    ),
    Component.DEVOPS: (
        "deploy", "ci", "cd", "pipeline", "docker", "cloud", "monitoring",
        "logging", "infrastructure", "scaling", "ssl", "domain", "cdn", "hosting",
    ),
}

USER_TYPES: tuple[str, ...] = (
    "end user", "admin", "team member", "manager", "developer",
    "new user", "power user", "mobile user", "guest", "subscriber",
)

DEFAULT_USER_TYPE = "end user"


# Component to phase; anything absent is scheduled into development
COMPONENT_PHASES: dict[Component, Phase] = {
    Component.TESTING: Phase.TESTING,
    Component.DEVOPS: Phase.DEPLOYMENT,
    Component.DESIGN: Phase.PLANNING,
}


# ---------------------------------------------------------------------------
# Story gates (normalized goal / constraint tokens)
# ---------------------------------------------------------------------------

PERSISTENCE_KEYWORDS = frozenset({"save", "store", "data", "record", "history", "draft"})
MOBILE_KEYWORDS = frozenset({"mobile", "responsive", "phone", "tablet"})
COLLABORATION_KEYWORDS = frozenset({"team", "share", "collaborate", "invite", "assign"})

SPEED_CONSTRAINT_KEYWORDS = frozenset({"performance", "fast", "speed", "quick", "responsive"})
SECURITY_CONSTRAINT_KEYWORDS = frozenset({"secure", "security", "privacy", "encrypt", "auth"})
ACCESSIBILITY_CONSTRAINT_KEYWORDS = frozenset({
    "accessible", "accessibility", "a11y", "wcag", "screen reader",
})


# ---------------------------------------------------------------------------
# Task tables
# ---------------------------------------------------------------------------

# Baseline tasks emitted for every goal; "{goal}" is the lowercased goal
BASELINE_TASKS: tuple[tuple[str, Component], ...] = (
    ("Frontend: Design and implement main UI layout for {goal}", Component.FRONTEND),
    ("Frontend: Build interactive form components with validation", Component.FRONTEND),
    ("Frontend: Implement responsive design for mobile and tablet viewports", Component.FRONTEND),
    ("Frontend: Add loading states and skeleton screens for async operations", Component.FRONTEND),
    ("Frontend: Implement error handling UI with user-friendly messages", Component.FRONTEND),
    ("Backend: Design data models and schema for {goal}", Component.BACKEND),
    ("Backend: Implement API endpoints for CRUD operations", Component.BACKEND),
    ("Backend: Add input validation and sanitization middleware", Component.BACKEND),
    ("Backend: Implement error handling and logging", Component.BACKEND),
    ("Design: Create wireframes and high-fidelity mockups", Component.DESIGN),
    ("Design: Define component library and design tokens", Component.DESIGN),
    ("Testing: Write unit tests for core business logic", Component.TESTING),
    ("Testing: Create integration tests for API endpoints", Component.TESTING),
    ("Testing: Perform cross-browser and device testing", Component.TESTING),
    ("DevOps: Set up CI/CD pipeline for automated deployments", Component.DEVOPS),
    ("DevOps: Configure staging and production environments", Component.DEVOPS),
)

# Gated task pairs, checked in this order against normalized goal tokens
CONDITIONAL_TASKS: tuple[tuple[frozenset[str], tuple[tuple[str, Component], ...]], ...] = (
    (
        frozenset({"search", "filter", "find", "query"}),
        (
            ("Frontend: Build search and filter UI with real-time results", Component.FRONTEND),
            ("Backend: Implement search indexing and query optimization", Component.BACKEND),
        ),
    ),
    (
        frozenset({"notification", "alert", "email", "notify"}),
        (
            ("Backend: Implement notification service with email and in-app support", Component.BACKEND),
            ("Frontend: Build notification center UI component", Component.FRONTEND),
        ),
    ),
    (
        frozenset({"upload", "file", "image", "media", "attachment"}),
        (
            ("Backend: Implement file upload service with validation and storage", Component.BACKEND),
            ("Frontend: Build drag-and-drop file upload component", Component.FRONTEND),
        ),
    ),
    (
        frozenset({"auth", "login", "password", "account", "user"}),
        (
            ("Backend: Implement authentication flow with JWT tokens", Component.BACKEND),
            ("Frontend: Build login, registration, and password reset pages", Component.FRONTEND),
        ),
    ),
)

TEMPLATE_TASKS: dict[Template, tuple[tuple[str, Component], ...]] = {
    Template.MOBILE: (
        ("Testing: Perform iOS device testing across multiple screen sizes", Component.TESTING),
        ("Testing: Perform Android device testing across multiple screen sizes", Component.TESTING),
        ("Testing: Validate touch interactions and gesture support", Component.TESTING),
        ("DevOps: Prepare App Store submission and metadata", Component.DEVOPS),
        ("DevOps: Prepare Google Play Store submission and metadata", Component.DEVOPS),
        ("Frontend: Implement offline-first caching strategy", Component.FRONTEND),
        ("Frontend: Optimize assets and bundle size for mobile networks", Component.FRONTEND),
        ("Design: Create app store screenshots and promotional graphics", Component.DESIGN),
    ),
    Template.WEB: (
        ("Testing: Verify cross-browser compatibility (Chrome, Firefox, Safari, Edge)", Component.TESTING),
        ("Frontend: Implement SEO meta tags, structured data, and sitemap", Component.FRONTEND),
        ("DevOps: Configure CDN for static asset delivery", Component.DEVOPS),
        ("Frontend: Implement Open Graph and social sharing metadata", Component.FRONTEND),
        ("DevOps: Set up SSL certificates and HTTPS redirects", Component.DEVOPS),
        ("Frontend: Optimize Core Web Vitals (LCP, FID, CLS)", Component.FRONTEND),
        ("Backend: Implement server-side rendering or static generation", Component.BACKEND),
    ),
    Template.INTERNAL: (
        ("Backend: Implement role-based permission system with granular access controls", Component.BACKEND),
        ("Backend: Build comprehensive audit logging for all user actions", Component.BACKEND),
        ("Frontend: Build admin dashboard with user management and analytics", Component.FRONTEND),
        ("Backend: Implement SSO/LDAP integration for enterprise authentication", Component.BACKEND),
        ("Frontend: Build activity log viewer for audit trail", Component.FRONTEND),
        ("Backend: Implement data export and reporting endpoints", Component.BACKEND),
    ),
}


# ---------------------------------------------------------------------------
# Risk gates and tables
# ---------------------------------------------------------------------------

SCALE_GOAL_KEYWORDS = frozenset({"large", "scale", "data", "real-time", "streaming", "big"})
PERFORMANCE_CONSTRAINT_KEYWORDS = frozenset({"performance", "fast", "latency"})

SENSITIVE_GOAL_KEYWORDS = frozenset({"auth", "payment", "sensitive", "personal", "financial", "health"})
COMPLIANCE_CONSTRAINT_KEYWORDS = frozenset({"security", "compliance", "gdpr", "hipaa", "pci"})

INTEGRATION_GOAL_KEYWORDS = frozenset({"integrate", "api", "third-party", "external", "connect", "sync"})
MIGRATION_GOAL_KEYWORDS = frozenset({"migrate", "legacy", "existing", "convert", "import"})

TEMPLATE_RISKS: dict[Template, tuple[tuple[RiskType, str], ...]] = {
    Template.MOBILE: (
        (
            RiskType.BLOCKER,
            "App store review timelines are unpredictable. Submit early to allow "
            "for rejection and resubmission cycles.",
        ),
        (
            RiskType.UNKNOWN,
            "Device fragmentation on Android may introduce rendering inconsistencies "
            "that need device-specific fixes.",
        ),
    ),
    Template.WEB: (
        (
            RiskType.UNKNOWN,
            "SEO impact of client-side rendering needs evaluation. Server-side "
            "rendering may be required for search visibility.",
        ),
    ),
    Template.INTERNAL: (
        (
            RiskType.ASSUMPTION,
            "Existing permission infrastructure can support the required granularity. "
            "Custom permission system may be needed.",
        ),
        (
            RiskType.UNKNOWN,
            "Integration with existing enterprise identity providers (SSO/LDAP) "
            "needs technical investigation.",
        ),
    ),
}


def resolve_template(template: Template | str | None) -> Template:
    """Map a raw template value onto the enum.

    Unrecognized values degrade to ``custom``, which carries no extra
    tasks or risks.
    """
    if isinstance(template, Template):
        return template
    try:
        return Template(template)
    except ValueError:
        return Template.CUSTOM
