"""Per-task validators for the product-management simulation.

Each validator parses its raw payload into a typed submission, computes
3-5 sub-scores on a 0-5 scale, combines them with fixed weights (summing
to 1.0) and converts the weighted sum to a 0-100 score. Keyword lists and
weights are read-only tables passed in as parameters.

Task map:
    task1  market research      -> validate_market_research
    task2  team & tech stack    -> validate_team_composition
    task3  roadmap & phases     -> validate_roadmap
    task4  wireframe            -> validate_wireframe
    task5  go-to-market         -> validate_gtm_strategy
    task6  post-launch analytics-> validate_analytics
    task7  final pitch          -> validate_final_pitch
"""

from types import MappingProxyType
from typing import Any, Mapping, Sequence

from models.responses import ValidationResult
from models.schemas.submissions import (
    AnalyticsSubmission,
    FinalPitchSubmission,
    GtmSubmission,
    MarketResearchSubmission,
    RoadmapSubmission,
    TeamCompositionSubmission,
    WireframeSubmission,
)
from services.scoring.extractors import (
    any_item_contains,
    check_keywords,
    contains_any,
    count_items,
    longer_than,
    scale_to_100,
)
from services.scoring.feedback import (
    DEFAULT_THRESHOLDS,
    FeedbackThresholds,
    generate_improvements,
    generate_strengths,
)

MAX_SUBSCORE = 5.0

# ---------------------------------------------------------------------------
# Keyword tables
# ---------------------------------------------------------------------------

MARKET_RESEARCH_KEYWORDS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "target_market": ("persona", "target", "age", "demographic", "segment", "user", "customer"),
    "user_needs": ("need", "requirement", "want", "desire", "pain", "problem", "challenge"),
    "competitive": ("competitor", "competitive", "differentiator", "advantage", "unique", "vs", "versus"),
    "constraints": (
        "regulatory", "hipaa", "privacy", "battery", "price", "cost",
        "budget", "constraint", "limit", "regulation",
    ),
})

ANALYTICS_KEYWORDS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "battery": ("battery", "power", "charge", "life", "endurance"),
    "accuracy": ("accuracy", "accurate", "step", "count", "sensor", "measurement", "precise"),
    "retention": ("retention", "churn", "drop", "leave", "abandon"),
})

# Role id -> contribution to role coverage (before the full-team bonus)
ESSENTIAL_ROLES: Mapping[str, float] = MappingProxyType({
    "embedded-eng": 0.2,
    "compliance": 0.2,
    "backend-eng": 0.15,
    "mobile-dev": 0.15,
    "ux-designer": 0.15,
})
FULL_TEAM_SIZE = 5
FULL_TEAM_BONUS = 0.15

# ---------------------------------------------------------------------------
# Criterion weights (each table sums to 1.0)
# ---------------------------------------------------------------------------

MARKET_RESEARCH_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "target_market": 0.3, "user_needs": 0.3, "competitive": 0.2, "constraints": 0.2,
})
TEAM_COMPOSITION_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "role_coverage": 0.4, "stack_suitability": 0.3, "resources_timeline": 0.2, "cost_awareness": 0.1,
})
ROADMAP_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "completeness": 0.35, "durations": 0.25, "prioritization": 0.25, "risk_identification": 0.15,
})
WIREFRAME_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "user_flow": 0.3, "glanceability": 0.25, "accessibility": 0.15, "rationale": 0.3,
})
GTM_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "positioning": 0.3, "channels_kpis": 0.3, "ambassador": 0.25, "pricing": 0.15,
})
ANALYTICS_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "insights": 0.4, "prioritization": 0.3, "communication": 0.3,
})
FINAL_PITCH_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "synthesis": 0.4, "pitch": 0.4, "next_steps": 0.2,
})

CRITERION_WEIGHTS: Mapping[str, Mapping[str, float]] = MappingProxyType({
    "market_research": MARKET_RESEARCH_WEIGHTS,
    "team_composition": TEAM_COMPOSITION_WEIGHTS,
    "roadmap": ROADMAP_WEIGHTS,
    "wireframe": WIREFRAME_WEIGHTS,
    "gtm_strategy": GTM_WEIGHTS,
    "analytics": ANALYTICS_WEIGHTS,
    "final_pitch": FINAL_PITCH_WEIGHTS,
})


def build_result(
    breakdown: Mapping[str, float],
    weights: Mapping[str, float],
    warnings: Sequence[str | None] = (),
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    """Combine 0-5 sub-scores into a ValidationResult."""
    breakdown = {k: min(max(v, 0.0), MAX_SUBSCORE) for k, v in breakdown.items()}
    weighted = sum(breakdown.get(name, 0.0) * w for name, w in weights.items())
    return ValidationResult(
        score=scale_to_100(weighted, MAX_SUBSCORE),
        breakdown={k: round(v, 2) for k, v in breakdown.items()},
        strengths=generate_strengths(breakdown, thresholds),
        improvements=generate_improvements(breakdown, thresholds),
        warnings=[w for w in warnings if w],
    )


def _keyword_subscore(text: str, keywords: Sequence[str]) -> float:
    return min(check_keywords(text, keywords) * MAX_SUBSCORE, MAX_SUBSCORE)


# ---------------------------------------------------------------------------
# task1: market research
# ---------------------------------------------------------------------------

def validate_market_research(
    data: Any,
    keywords: Mapping[str, Sequence[str]] = MARKET_RESEARCH_KEYWORDS,
    weights: Mapping[str, float] = MARKET_RESEARCH_WEIGHTS,
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    sub = MarketResearchSubmission.parse(data)
    all_text = " ".join(
        [sub.target_market, sub.user_needs, sub.competitive_diff, sub.constraints]
    ).lower()

    target_market = _keyword_subscore(sub.target_market, keywords.get("target_market", ()))
    if longer_than(sub.target_market, 50):
        target_market += 1

    user_needs = _keyword_subscore(sub.user_needs, keywords.get("user_needs", ()))
    if count_items(sub.user_needs) >= 3:
        user_needs += 1

    competitive = _keyword_subscore(sub.competitive_diff, keywords.get("competitive", ()))
    if longer_than(sub.competitive_diff, 30):
        competitive += 0.5

    # Constraints often surface elsewhere in the answer when left blank
    constraints = _keyword_subscore(sub.constraints or all_text, keywords.get("constraints", ()))

    breakdown = {
        "target_market": target_market,
        "user_needs": user_needs,
        "competitive": competitive,
        "constraints": constraints,
    }
    return build_result(breakdown, weights, thresholds=thresholds)


# ---------------------------------------------------------------------------
# task2: team composition & tech stack
# ---------------------------------------------------------------------------

def validate_team_composition(
    data: Any,
    essential_roles: Mapping[str, float] = ESSENTIAL_ROLES,
    weights: Mapping[str, float] = TEAM_COMPOSITION_WEIGHTS,
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    sub = TeamCompositionSubmission.parse(data)
    roles = set(sub.selected_roles)

    role_coverage = sum(w for role, w in essential_roles.items() if role in roles)
    if len(sub.selected_roles) >= FULL_TEAM_SIZE:
        role_coverage += FULL_TEAM_BONUS

    stack = sub.tech_stack
    stack_suitability = (
        (0.33 if stack.backend else 0)
        + (0.33 if stack.database else 0)
        + (0.34 if stack.cloud else 0)
    )

    timeline = sub.hiring_timeline
    resources_timeline = 4 if timeline and timeline > 0 else 2
    if timeline and timeline >= 8:
        resources_timeline += 1

    breakdown = {
        "role_coverage": role_coverage * MAX_SUBSCORE,
        "stack_suitability": stack_suitability * MAX_SUBSCORE,
        "resources_timeline": resources_timeline,
        "cost_awareness": 4 if sub.budget else 2,
    }
    warnings = [
        "embedded-eng" not in roles
        and "Warning: Embedded Engineer is essential for IoT device development",
        "compliance" not in roles
        and "Warning: Regulatory/Compliance role is critical for healthcare products",
    ]
    return build_result(breakdown, weights, warnings, thresholds)


# ---------------------------------------------------------------------------
# task3: roadmap & phases
# ---------------------------------------------------------------------------

_PHASE_STAGES: tuple[tuple[str, ...], ...] = (
    ("discovery", "ideation"),
    ("development", "build"),
    ("test", "certification"),
    ("deploy", "launch"),
)


def _duration_subscore(total_weeks: int) -> float:
    if 12 <= total_weeks <= 52:
        return 5
    if 8 <= total_weeks < 12:
        return 3
    if total_weeks > 52:
        return 2
    return 1


def validate_roadmap(
    data: Any,
    weights: Mapping[str, float] = ROADMAP_WEIGHTS,
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    sub = RoadmapSubmission.parse(data)
    names = [p.name for p in sub.phases]

    stages_present = [any_item_contains(names, terms) for terms in _PHASE_STAGES]
    has_testing = stages_present[2]
    completeness = sum(0.25 for present in stages_present if present) * MAX_SUBSCORE

    total_weeks = sum(p.duration for p in sub.phases)

    has_mvp = any(
        contains_any(p.name, ["mvp"]) or contains_any(p.deliverables, ["mvp"])
        for p in sub.phases
    )
    prioritization = (3 if has_mvp else 1) + (2 if len(sub.phases) >= 4 else 1)

    has_risks = any(p.risks for p in sub.phases) or sub.overall_risks is not None

    breakdown = {
        "completeness": completeness,
        "durations": _duration_subscore(total_weeks),
        "prioritization": prioritization,
        "risk_identification": 4 if has_risks else 2,
    }
    warnings = [
        total_weeks < 12 and "Warning: Timeline seems too short for IoT + app development",
        not has_testing and "Warning: Testing/certification phase is critical for healthcare devices",
    ]
    return build_result(breakdown, weights, warnings, thresholds)


# ---------------------------------------------------------------------------
# task4: wireframe explanation
# ---------------------------------------------------------------------------

def validate_wireframe(
    data: Any,
    weights: Mapping[str, float] = WIREFRAME_WEIGHTS,
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    sub = WireframeSubmission.parse(data)
    text = sub.explanation

    glanceability = (2 if contains_any(text, ["metric", "data"]) else 1) + (
        2 if longer_than(text, 100) else 1
    )
    breakdown = {
        "user_flow": 4 if longer_than(text, 50) else 2,
        "glanceability": glanceability,
        "accessibility": 4 if contains_any(text, ["accessibility", "font", "contrast"]) else 2,
        "rationale": 4 if longer_than(text, 50) else 1,
    }
    warnings = [not text and "Warning: Explanation text is required for full credit"]
    return build_result(breakdown, weights, warnings, thresholds)


# ---------------------------------------------------------------------------
# task5: go-to-market strategy
# ---------------------------------------------------------------------------

def validate_gtm_strategy(
    data: Any,
    weights: Mapping[str, float] = GTM_WEIGHTS,
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    sub = GtmSubmission.parse(data)

    channels_kpis = (2 if sub.channels else 1) + (2 if sub.kpis else 1)
    ambassador = (2 if sub.ambassador_id else 0) + (
        3 if longer_than(sub.ambassador_justification, 30) else 1
    )
    breakdown = {
        "positioning": 4 if longer_than(sub.positioning, 20) else 2,
        "channels_kpis": channels_kpis,
        "ambassador": ambassador,
        "pricing": 4 if sub.pricing else 2,
    }
    return build_result(breakdown, weights, thresholds=thresholds)


# ---------------------------------------------------------------------------
# task6: post-launch analytics
# ---------------------------------------------------------------------------

def validate_analytics(
    data: Any,
    keywords: Mapping[str, Sequence[str]] = ANALYTICS_KEYWORDS,
    weights: Mapping[str, float] = ANALYTICS_WEIGHTS,
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    sub = AnalyticsSubmission.parse(data)

    insights = (
        (0.4 if check_keywords(sub.insights, keywords.get("battery", ())) > 0 else 0)
        + (0.4 if check_keywords(sub.insights, keywords.get("accuracy", ())) > 0 else 0)
        + (0.2 if check_keywords(sub.insights, keywords.get("retention", ())) > 0 else 0)
    ) * MAX_SUBSCORE

    actions = sub.prioritized_actions
    prioritization = (2 if len(actions) >= 3 else 1) + (
        3 if any_item_contains(actions, ["battery", "firmware"]) else 1
    )

    replies = sub.customer_replies
    avg_length = sum(len(r) for r in replies) / len(replies) if replies else 0
    communication = (
        (2 if len(replies) >= 2 else 0)
        + (2 if avg_length > 50 else 1)
        + (1 if any_item_contains(replies, ["sorry", "apologize", "understand"]) else 0)
    )

    breakdown = {
        "insights": insights,
        "prioritization": prioritization,
        "communication": communication,
    }
    return build_result(breakdown, weights, thresholds=thresholds)


# ---------------------------------------------------------------------------
# task7: final pitch
# ---------------------------------------------------------------------------

def validate_final_pitch(
    data: Any,
    weights: Mapping[str, float] = FINAL_PITCH_WEIGHTS,
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> ValidationResult:
    sub = FinalPitchSubmission.parse(data)
    report = sub.consolidated_report
    pitch = sub.pitch

    synthesis = (
        (0.33 if contains_any(report, ["kpi", "metric"]) else 0)
        + (0.33 if contains_any(report, ["roadmap", "timeline"]) else 0)
        + (0.34 if contains_any(report, ["budget", "cost"]) else 0)
    ) * MAX_SUBSCORE

    pitch_score = (
        (2 if longer_than(pitch, 100) else 1)
        + (2 if longer_than(pitch, 200) else 1)
        + (1 if contains_any(pitch, ["invest", "fund", "support"]) else 0)
    )

    has_next_steps = contains_any(pitch, ["next"]) or contains_any(report, ["next", "action"])

    breakdown = {
        "synthesis": synthesis,
        "pitch": pitch_score,
        "next_steps": 4 if has_next_steps else 2,
    }
    return build_result(breakdown, weights, thresholds=thresholds)
