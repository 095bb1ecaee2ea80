"""Decision-loop configuration and the per-task state carried between loops."""

from pydantic import BaseModel, ConfigDict


class DecisionOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    cost: int = 0
    recommended_after: tuple[str, ...] = ()
    is_best: bool = False


class DecisionFeedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = "Feedback"
    data: str = ""
    insight: str = ""
    signals: tuple[str, ...] = ()
    outcome: str = ""  # positive, negative, strong, moderate


class DecisionScoring(BaseModel):
    """Static score table for one loop plus the bonuses applied on top."""
    model_config = ConfigDict(frozen=True)

    option_scores: dict[str, int] = {}
    budget_bonus: int = 5
    budget_bonus_threshold: int = 5000
    sequence_bonus: int = 10


class DecisionLoopConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    loop_number: int = 1
    context: str = ""
    options: tuple[DecisionOption, ...] = ()
    feedback: dict[str, DecisionFeedback] = {}
    scoring: DecisionScoring = DecisionScoring()

    def option(self, option_id: str | None) -> DecisionOption | None:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


class DecisionChoice(BaseModel):
    task_id: str
    option: str
    cost: int = 0


class DecisionState(BaseModel):
    """Persisted state of one decision-loop task.

    ``budget_remaining`` is carried forward to the next loop rather than
    recomputed from the history.
    """
    selected_option: str | None = None
    submitted: bool = False
    budget_remaining: int = 0
    choices_history: list[DecisionChoice] = []
    feedback: DecisionFeedback | None = None
