"""Typed task submissions parsed from raw UI payloads.

Parsing is the one place where missing or malformed input is normalised:
text fields become ``""``, list fields become ``[]`` and optional scalars
become ``None``. Validators downstream never re-check for absence.
"""

import logging
import math
import re
from typing import Annotated, Any, Mapping

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _as_optional_text(value: Any) -> str | None:
    text = _as_text(value)
    return text if text.strip() else None


def coerce_int(value: Any) -> int | None:
    """Parse like ``parseInt``: leading integer of a string, else None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        m = _LEADING_INT_RE.match(value)
        if m is None:
            return None
        try:
            return int(m.group(1))
        except ValueError:
            # Past the interpreter's integer string conversion limit
            return None
    return None


def _as_text_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        return []
    items: list[str] = []
    for item in value:
        if isinstance(item, Mapping):
            item = item.get("label") or item.get("id")
        text = _as_text(item)
        if text:
            items.append(text)
    return items


def _as_id(value: Any) -> str | None:
    if isinstance(value, Mapping):
        value = value.get("id")
    return _as_optional_text(value)


def _as_id_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    ids = [_as_id(item) for item in value]
    return [i for i in ids if i]


def _as_mapping(value: Any) -> dict:
    return dict(value) if isinstance(value, Mapping) else {}


def _as_mapping_list(value: Any) -> list[dict]:
    if not isinstance(value, (list, tuple)):
        return []
    return [dict(item) for item in value if isinstance(item, Mapping)]


Text = Annotated[str, BeforeValidator(_as_text)]
OptionalText = Annotated[str | None, BeforeValidator(_as_optional_text)]
OptionalInt = Annotated[int | None, BeforeValidator(coerce_int)]
Count = Annotated[int, BeforeValidator(lambda v: coerce_int(v) or 0)]
TextList = Annotated[list[str], BeforeValidator(_as_text_list)]
IdList = Annotated[list[str], BeforeValidator(_as_id_list)]
OptionalId = Annotated[str | None, BeforeValidator(_as_id)]


class Submission(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def parse(cls, raw: Any):
        """Build a submission from a raw payload. Never raises."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, Mapping):
            return cls()
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            logger.warning("Malformed %s payload, scoring as empty: %s", cls.__name__, e)
            return cls()


class MarketResearchSubmission(Submission):
    target_market: Text = ""
    user_needs: Text = ""
    competitive_diff: Text = ""
    constraints: Text = ""


class TechStack(Submission):
    backend: TextList = []
    database: TextList = []
    cloud: TextList = []
    mobile: TextList = []
    embedded: TextList = []
    analytics: TextList = []


class TeamCompositionSubmission(Submission):
    selected_roles: IdList = []
    tech_stack: Annotated[TechStack, BeforeValidator(_as_mapping)] = TechStack()
    hiring_timeline: OptionalInt = None  # weeks
    budget: OptionalText = None


class RoadmapPhase(Submission):
    name: Text = ""
    duration: Count = 0  # weeks
    deliverables: Text = ""
    risks: TextList = []


class RoadmapSubmission(Submission):
    phases: Annotated[list[RoadmapPhase], BeforeValidator(_as_mapping_list)] = []
    overall_risks: OptionalText = None


class WireframeSubmission(Submission):
    explanation: Text = ""


class GtmSubmission(Submission):
    positioning: Text = ""
    pricing: OptionalText = None
    channels: TextList = []
    kpis: TextList = []
    ambassador_id: OptionalId = Field(default=None, alias="ambassador")
    ambassador_justification: Text = ""


class AnalyticsSubmission(Submission):
    insights: Text = ""
    prioritized_actions: TextList = []
    customer_replies: TextList = []


class FinalPitchSubmission(Submission):
    pitch: Text = ""
    consolidated_report: Text = ""


class ChoiceSubmission(Submission):
    selected_option: OptionalText = None


class TextResponseSubmission(Submission):
    response: Text = ""
