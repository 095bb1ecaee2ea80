"""Tests for the built-in simulation configurations."""

import pytest
from pydantic import ValidationError

from models.schemas.simulation import SimulationConfig
from services.catalog import ARGO, NOAH, PERSONA, get_simulation, list_simulations
from services.scoring.registry import resolve_validator

ALL = [NOAH, ARGO, PERSONA]


class TestCatalog:
    def test_lookup(self):
        assert get_simulation("persona-finding") is PERSONA
        assert get_simulation("missing") is None
        assert [s.slug for s in list_simulations()] == [
            "noah-smart-fitness-watch",
            "argo-marketing-foundations",
            "persona-finding",
        ]

    @pytest.mark.parametrize("simulation", ALL, ids=lambda s: s.slug)
    def test_task_weights_sum_to_100(self, simulation):
        assert sum(simulation.task_weights.values()) == 100
        assert set(simulation.task_weights) == set(simulation.required_task_ids)

    def test_noah_skill_weights_sum_to_one(self):
        for mapping in NOAH.skill_weights.values():
            assert sum(mapping.values()) == pytest.approx(1.0)

    @pytest.mark.parametrize("simulation", ALL, ids=lambda s: s.slug)
    def test_every_scored_task_has_a_known_validator(self, simulation):
        for task_id in simulation.required_task_ids:
            rule = simulation.validation_rules.get(task_id) or simulation.task(task_id).validation
            assert rule is not None
            assert resolve_validator(rule.validator) is not None

    @pytest.mark.parametrize("simulation", ALL, ids=lambda s: s.slug)
    def test_intro_is_not_required(self, simulation):
        assert "task0" not in simulation.required_task_ids
        assert simulation.task("task0").scored is False

    def test_persona_loops(self):
        assert PERSONA.total_budget == 15000
        loops = [PERSONA.task(t).decision for t in PERSONA.required_task_ids]
        assert [loop.loop_number for loop in loops] == [1, 2, 3, 4]
        for loop in loops:
            assert set(loop.scoring.option_scores) == {o.id for o in loop.options}
            assert set(loop.feedback) == {o.id for o in loop.options}


class TestConfigValidation:
    def test_bad_task_weights_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(slug="x", title="X", task_weights={"task1": 60, "task2": 30})

    def test_bad_skill_weights_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(slug="x", title="X", skill_weights={"task1": {"A": 0.5, "B": 0.2}})
