"""Pydantic contracts shared by the scoring engine, store and API."""

from models.schemas.decision import (
    DecisionChoice,
    DecisionFeedback,
    DecisionLoopConfig,
    DecisionOption,
    DecisionScoring,
    DecisionState,
)
from models.schemas.progress import ProgressRecord
from models.schemas.simulation import (
    ChoiceOption,
    Ending,
    RubricCriterion,
    SimulationConfig,
    TaskConfig,
    TaskDefinition,
    ValidationRule,
)

__all__ = [
    "ChoiceOption",
    "DecisionChoice",
    "DecisionFeedback",
    "DecisionLoopConfig",
    "DecisionOption",
    "DecisionScoring",
    "DecisionState",
    "Ending",
    "ProgressRecord",
    "RubricCriterion",
    "SimulationConfig",
    "TaskConfig",
    "TaskDefinition",
    "ValidationRule",
]
