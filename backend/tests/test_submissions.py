"""Tests for parsing raw UI payloads into typed submissions."""

import pytest

from models.schemas.submissions import (
    GtmSubmission,
    MarketResearchSubmission,
    RoadmapSubmission,
    TeamCompositionSubmission,
    coerce_int,
)


class TestCoerceInt:
    @pytest.mark.parametrize("value,expected", [
        (12, 12),
        (12.9, 12),
        ("12 weeks", 12),
        ("  -3", -3),
        ("weeks", None),
        (None, None),
        (True, None),
        (float("nan"), None),
        (float("inf"), None),
        ([1], None),
    ])
    def test_values(self, value, expected):
        assert coerce_int(value) == expected

    def test_oversized_digit_string(self):
        assert coerce_int("9" * 5000) is None


class TestParse:
    def test_missing_fields_default_to_empty(self):
        sub = MarketResearchSubmission.parse({})
        assert sub.target_market == ""
        assert sub.constraints == ""

    @pytest.mark.parametrize("raw", [None, "text", 42, [1, 2]])
    def test_non_mapping_gives_empty_submission(self, raw):
        assert TeamCompositionSubmission.parse(raw) == TeamCompositionSubmission()

    def test_team_payload(self):
        sub = TeamCompositionSubmission.parse({
            "selectedRoles": ["qa", {"id": "devops"}, {"name": "no id"}, None],
            "techStack": {"backend": "Go", "cloud": ["AWS", {"label": "GCP"}]},
            "hiringTimeline": "6",
            "budget": "   ",
        })
        assert sub.selected_roles == ["qa", "devops"]
        assert sub.tech_stack.backend == ["Go"]
        assert sub.tech_stack.cloud == ["AWS", "GCP"]
        assert sub.hiring_timeline == 6
        assert sub.budget is None

    def test_roadmap_phases(self):
        sub = RoadmapSubmission.parse({
            "phases": [{"name": "Build", "duration": "8"}, "junk", {"risks": "supply"}],
            "overallRisks": "",
        })
        assert [p.name for p in sub.phases] == ["Build", ""]
        assert sub.phases[0].duration == 8
        assert sub.phases[1].risks == ["supply"]
        assert sub.overall_risks is None

    def test_gtm_ambassador_alias(self):
        assert GtmSubmission.parse({"ambassador": "support-responses"}).ambassador_id == "support-responses"
        assert GtmSubmission.parse({"ambassador": {"id": "x"}}).ambassador_id == "x"
        assert GtmSubmission.parse({"ambassador": ""}).ambassador_id is None

    def test_unknown_keys_ignored(self):
        sub = MarketResearchSubmission.parse({"targetMarket": "Runners", "extra": 1})
        assert sub.target_market == "Runners"
