"""Tests for the product-management task validators."""

import pytest

from services.scoring.feedback import FeedbackThresholds, generate_improvements, generate_strengths
from services.scoring.validators import (
    CRITERION_WEIGHTS,
    validate_analytics,
    validate_final_pitch,
    validate_gtm_strategy,
    validate_market_research,
    validate_roadmap,
    validate_team_composition,
    validate_wireframe,
)

ALL_VALIDATORS = [
    validate_market_research,
    validate_team_composition,
    validate_roadmap,
    validate_wireframe,
    validate_gtm_strategy,
    validate_analytics,
    validate_final_pitch,
]

MALFORMED_INPUTS = [
    {},
    None,
    "just a string",
    [1, 2, 3],
    {"targetMarket": 42, "selectedRoles": "backend-eng", "phases": "none"},
    {"phases": [{"name": None, "duration": "abc"}], "channels": {"a": 1}},
    {"customerReplies": [None, 3, "ok"], "pitch": ["not", "text"]},
]

STRONG_MARKET_RESEARCH = {
    "targetMarket": (
        "Our primary persona is a health-conscious user aged 25-35, a segment of "
        "urban professionals who track workouts daily."
    ),
    "userNeeds": (
        "They need accurate heart rate, want long battery life, desire all-day "
        "comfort, feel pain when charging, face the problem of missed reminders"
    ),
    "competitiveDiff": (
        "Our unique advantage versus competitors is medical-grade sensors at a "
        "consumer price."
    ),
    "constraints": "HIPAA privacy regulation, battery limits and a tight cost budget",
}


class TestWeightTables:
    @pytest.mark.parametrize("name", sorted(CRITERION_WEIGHTS))
    def test_weights_sum_to_one(self, name):
        assert sum(CRITERION_WEIGHTS[name].values()) == pytest.approx(1.0)


class TestScoreBounds:
    @pytest.mark.parametrize("validator", ALL_VALIDATORS)
    @pytest.mark.parametrize("data", MALFORMED_INPUTS)
    def test_score_in_range_on_malformed_input(self, validator, data):
        result = validator(data)
        assert 0 <= result.score <= 100
        assert result.strengths
        assert result.improvements

    @pytest.mark.parametrize("validator", ALL_VALIDATORS)
    def test_idempotent(self, validator):
        assert validator(STRONG_MARKET_RESEARCH) == validator(STRONG_MARKET_RESEARCH)


class TestMarketResearch:
    def test_empty_submission(self):
        result = validate_market_research({})
        assert result.score == 0
        assert result.strengths == ["Completed the task"]
        assert "Consider providing more detailed responses" in result.improvements

    def test_strong_submission(self):
        result = validate_market_research(STRONG_MARKET_RESEARCH)
        assert result.score >= 70
        assert set(result.breakdown) == {"target_market", "user_needs", "competitive", "constraints"}
        assert all(0 <= v <= 5 for v in result.breakdown.values())

    def test_snake_case_keys_accepted(self):
        camel = validate_market_research(STRONG_MARKET_RESEARCH)
        snake = validate_market_research({
            "target_market": STRONG_MARKET_RESEARCH["targetMarket"],
            "user_needs": STRONG_MARKET_RESEARCH["userNeeds"],
            "competitive_diff": STRONG_MARKET_RESEARCH["competitiveDiff"],
            "constraints": STRONG_MARKET_RESEARCH["constraints"],
        })
        assert camel.score == snake.score


class TestTeamComposition:
    def test_full_team(self):
        result = validate_team_composition({
            "selectedRoles": ["embedded-eng", "compliance", "backend-eng", "mobile-dev", "ux-designer"],
            "techStack": {"backend": ["Go"], "database": ["PostgreSQL"], "cloud": ["AWS"]},
            "hiringTimeline": "10",
            "budget": "50000",
        })
        assert result.score == 98
        assert result.warnings == []

    def test_empty_team_warns(self):
        result = validate_team_composition({})
        assert result.score == 12
        assert len(result.warnings) == 2
        assert any("Embedded Engineer" in w for w in result.warnings)
        assert any("Compliance" in w for w in result.warnings)

    def test_roles_as_objects(self):
        result = validate_team_composition({
            "selectedRoles": [{"id": "embedded-eng"}, {"id": "compliance"}],
        })
        assert result.warnings == []


class TestRoadmap:
    def test_complete_roadmap(self):
        result = validate_roadmap({
            "phases": [
                {"name": "Discovery", "duration": 4},
                {"name": "MVP Development", "duration": 12, "deliverables": "MVP watch + app"},
                {"name": "Testing & Certification", "duration": 6, "risks": ["FDA delay"]},
                {"name": "Launch", "duration": 4},
            ],
        })
        assert result.score == 97
        assert result.warnings == []

    def test_empty_roadmap(self):
        result = validate_roadmap({})
        assert result.score == 21
        assert len(result.warnings) == 2


class TestWireframe:
    def test_missing_explanation(self):
        result = validate_wireframe({})
        assert result.score == 34
        assert result.warnings == ["Warning: Explanation text is required for full credit"]

    def test_detailed_explanation(self):
        text = (
            "The home screen shows the key health metric data at a glance, with large "
            "fonts and high contrast for accessibility. Users swipe to reach sleep and "
            "workout details."
        )
        result = validate_wireframe({"explanation": text})
        assert result.score > 34
        assert result.warnings == []


class TestGtmStrategy:
    def test_empty(self):
        assert validate_gtm_strategy({}).score == 35

    def test_complete(self):
        result = validate_gtm_strategy({
            "positioning": "The smartwatch trusted by doctors for everyday health",
            "pricing": "$149",
            "channels": ["Pharmacies", "Instagram"],
            "kpis": ["Activation rate"],
            "ambassador": {"id": "support-responses"},
            "ambassadorJustification": "Proactive support builds trust with first-time wearers",
        })
        assert result.score > 80


class TestAnalytics:
    def test_keyword_driven_insights(self):
        result = validate_analytics({
            "insights": "Battery drain and heart rate accuracy complaints are driving churn",
            "prioritizedActions": ["Firmware battery fix", "Sensor recalibration", "FAQ"],
            "customerReplies": [
                "We are sorry about the battery drain, a firmware update ships next week.",
                "We understand the accuracy concern and are recalibrating the sensor now.",
            ],
        })
        assert result.score == 100

    def test_empty(self):
        result = validate_analytics({})
        assert result.breakdown["insights"] == 0


class TestFinalPitch:
    def test_strong_pitch(self):
        pitch = (
            "We ask leadership to invest in a medical-grade smartwatch that fits a "
            "growing market. " * 3 + "Next we will run a pilot with pharmacies."
        )
        result = validate_final_pitch({
            "pitch": pitch,
            "consolidatedReport": "KPI targets, roadmap timeline and budget cost plan",
        })
        assert result.score == 96

    def test_empty(self):
        result = validate_final_pitch({})
        assert 0 < result.score < 50


class TestFeedback:
    def test_strong_breakdown(self):
        strengths = generate_strengths({"a": 5.0, "b": 4.5})
        assert strengths == [
            "Strong overall performance across all criteria",
            "Excellent performance in key areas",
            "Good understanding of core concepts",
        ]
        assert generate_improvements({"a": 5.0, "b": 4.5}) == ["Continue practicing"]

    def test_weak_breakdown(self):
        assert generate_strengths({"a": 1.0}) == ["Completed the task"]
        assert generate_improvements({"a": 1.0}) == [
            "Consider providing more detailed responses",
            "Some areas need more attention to detail",
            "Review the example answers for guidance",
        ]

    def test_custom_thresholds(self):
        lenient = FeedbackThresholds(strong_average=1.0, excellent_any=1.0, good_average=1.0)
        assert len(generate_strengths({"a": 1.0}, lenient)) == 3
