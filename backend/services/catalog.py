"""Built-in simulations.

Three task-based simulations ship with the service:

- ``noah-smart-fitness-watch``: 7 product-management tasks, weighted
  ``task -> {skill: weight}`` skill table
- ``argo-marketing-foundations``: multiple choice, short text and
  reflection tasks, ``skill -> [tasks]`` skill table
- ``persona-finding``: 4 budget-tracked decision loops with endings

Configurations are validated on import (task weights sum to 100, skill
weights per task sum to 1.0) and never mutated afterwards.
"""

from models.schemas.decision import (
    DecisionFeedback,
    DecisionLoopConfig,
    DecisionOption,
    DecisionScoring,
)
from models.schemas.simulation import (
    ChoiceOption,
    Ending,
    SimulationConfig,
    TaskConfig,
    TaskDefinition,
    ValidationRule,
)
from services.scoring.registry import ValidatorKind


def _rule(kind: ValidatorKind) -> ValidationRule:
    return ValidationRule(method="rule-based", validator=kind.value)


def _intro(body: str) -> TaskDefinition:
    return TaskDefinition(
        id="task0", type="intro", name="Introduction", scored=False,
        config=TaskConfig(instruction=body),
    )


# ---------------------------------------------------------------------------
# Noah Healthcare: smart fitness watch (product management)
# ---------------------------------------------------------------------------

NOAH_SKILLS = (
    "Product Sense",
    "Technical Feasibility",
    "Teaming & Planning",
    "UX",
    "GTM & Marketing",
    "Data Insights",
    "Communication",
)

NOAH_TASK_WEIGHTS = {
    "task1": 18, "task2": 12, "task3": 12, "task4": 12,
    "task5": 14, "task6": 22, "task7": 10,
}

NOAH_SKILL_WEIGHTS = {
    "task1": {"Product Sense": 0.4, "Data Insights": 0.3, "Communication": 0.3},
    "task2": {"Technical Feasibility": 0.5, "Teaming & Planning": 0.5},
    "task3": {"Teaming & Planning": 0.6, "Product Sense": 0.4},
    "task4": {"UX": 1.0},
    "task5": {"GTM & Marketing": 0.7, "Product Sense": 0.3},
    "task6": {"Data Insights": 0.5, "Communication": 0.5},
    "task7": {"Communication": 0.6, "Product Sense": 0.4},
}

_NOAH_TASKS = (
    ("task1", "multi-text-input", "Market Research", ValidatorKind.MARKET_RESEARCH),
    ("task2", "multi-select-form", "Team & Tech Stack", ValidatorKind.TEAM_COMPOSITION),
    ("task3", "roadmap", "Roadmap & Phases", ValidatorKind.ROADMAP),
    ("task4", "wireframe", "Wireframe Design", ValidatorKind.WIREFRAME),
    ("task5", "gtm-strategy", "GTM Strategy", ValidatorKind.GTM_STRATEGY),
    ("task6", "analytics-dashboard", "Post-Launch Analytics", ValidatorKind.ANALYTICS),
    ("task7", "final-submission", "Final Submission", ValidatorKind.FINAL_PITCH),
)

NOAH = SimulationConfig(
    slug="noah-smart-fitness-watch",
    title="Noah Smart Fitness Watch - Product Management",
    description=(
        "End-to-end product management simulation: from market research to "
        "post-launch analytics across 7 tasks covering the product lifecycle."
    ),
    category="Product Management",
    company_name="Noah Healthcare",
    tasks=(
        _intro("Noah Healthcare is building a consumer health & fitness smartwatch."),
        *(
            TaskDefinition(
                id=task_id, type=task_type, name=name,
                skills_tested=tuple(NOAH_SKILL_WEIGHTS[task_id]),
            )
            for task_id, task_type, name, _ in _NOAH_TASKS
        ),
    ),
    skills_tested=NOAH_SKILLS,
    task_weights=NOAH_TASK_WEIGHTS,
    skill_weights=NOAH_SKILL_WEIGHTS,
    validation_rules={task_id: _rule(kind) for task_id, _, _, kind in _NOAH_TASKS},
)


# ---------------------------------------------------------------------------
# Argo Financial: marketing foundations
# ---------------------------------------------------------------------------

ARGO_SKILL_TASKS = {
    "Creative Writing": ("task1",),
    "Brand Tone": ("task1",),
    "Analytics": ("task2",),
    "Data Insight": ("task2",),
    "Customer Insight": ("task3",),
    "Product Recommendation": ("task3",),
    "SEO": ("task4",),
    "Keyword Selection": ("task4",),
    "Reflection": ("task5",),
}

CREATIVE_HEADLINES = (
    ChoiceOption(id="opt1", text="Start saving now - tomorrow thanks you."),
    ChoiceOption(id="opt2", text="Adulting? We've got tips. Save smarter."),
    ChoiceOption(id="opt3", text="Be boring. Be safe. Save later."),
    ChoiceOption(id="opt4", text="Make saving fun - start today.", is_correct=True),
)

SEO_KEYWORDS = (
    ChoiceOption(id="opt1", text="budgeting apps for teens", is_correct=True),
    ChoiceOption(id="opt2", text="how to save money for college"),
    ChoiceOption(id="opt3", text="best budget spreadsheet 2025"),
    ChoiceOption(id="opt4", text="saving tips for students"),
)

CAMPAIGN_DATA = {"traffic": "High", "conversion": "Low", "email_click_rate": "Medium", "churn": "High"}

CUSTOMER_QUOTE = (
    "I waste time entering receipts manually - if your app auto-categorized "
    "spending I'd use it daily."
)

ARGO = SimulationConfig(
    slug="argo-marketing-foundations",
    title="Marketing Foundations - Argo",
    description=(
        "Practice entry-level marketing skills across creative writing, data "
        "analysis, customer insight, SEO and reflection."
    ),
    category="Marketing",
    company_name="Argo Financial",
    tasks=(
        _intro("Five hands-on tasks showing what entry-level marketing roles feel like."),
        TaskDefinition(
            id="task1", type="mcq", name="Creative Strategist",
            skills_tested=("Creative Writing", "Brand Tone"),
            config=TaskConfig(
                instruction=(
                    "You're a junior creative at an agency. The client: a new savings app "
                    "targeting Gen Z. Tone: friendly, modern, reassuring."
                ),
                prompt="Based on the brief, which headline fits best?",
                options=CREATIVE_HEADLINES,
                correct_answer="opt4",
            ),
        ),
        TaskDefinition(
            id="task2", type="short-text", name="Marketing Analyst",
            skills_tested=("Analytics", "Data Insight"),
            config=TaskConfig(
                instruction=(
                    "Campaign results for a student-discount subscription: "
                    + ", ".join(f"{k.replace('_', ' ')} {v}" for k, v in CAMPAIGN_DATA.items())
                ),
                prompt="In 1-2 sentences, what is the most important problem the team should investigate?",
                min_words=8,
                max_words=50,
                keywords=("conversion", "churn", "retention", "onboarding", "funnel", "landing", "pricing"),
            ),
        ),
        TaskDefinition(
            id="task3", type="short-text", name="Customer & Product Marketer",
            skills_tested=("Customer Insight", "Product Recommendation"),
            config=TaskConfig(
                instruction=f'Customer quote: "{CUSTOMER_QUOTE}"',
                prompt="What does this customer value most?",
                min_words=5,
                max_words=30,
                keywords=("time", "automat", "categor", "receipt", "manual", "convenien", "daily"),
            ),
        ),
        TaskDefinition(
            id="task4", type="mcq", name="Digital Marketer (SEO)",
            skills_tested=("SEO", "Keyword Selection"),
            config=TaskConfig(
                instruction="Goal: attract parents who want to teach teens money skills.",
                prompt="Which keyword would be most effective for this goal?",
                options=SEO_KEYWORDS,
                correct_answer="opt1",
            ),
        ),
        TaskDefinition(
            id="task5", type="reflection", name="Reflection",
            skills_tested=("Reflection",),
            config=TaskConfig(
                prompt="In 3-4 sentences, which marketing role did you like most and why?",
                min_words=20,
            ),
        ),
    ),
    skills_tested=tuple(ARGO_SKILL_TASKS),
    task_weights={"task1": 15, "task2": 25, "task3": 20, "task4": 15, "task5": 25},
    skill_tasks=ARGO_SKILL_TASKS,
    validation_rules={
        "task1": _rule(ValidatorKind.MULTIPLE_CHOICE),
        "task2": _rule(ValidatorKind.SHORT_TEXT),
        "task3": _rule(ValidatorKind.SHORT_TEXT),
        "task4": _rule(ValidatorKind.MULTIPLE_CHOICE),
        "task5": _rule(ValidatorKind.REFLECTION),
    },
)


# ---------------------------------------------------------------------------
# GlowUp Skincare: persona finding (decision loops)
# ---------------------------------------------------------------------------

PERSONA_TOTAL_BUDGET = 15000  # INR

PERSONA_SKILL_TASKS = {
    "Market Research": ("task1", "task2"),
    "Data Analysis": ("task1", "task2", "task4"),
    "Strategic Thinking": ("task2", "task3"),
    "Decision Making": ("task3",),
    "Validation": ("task4",),
}


def _opt(option_id: str, title: str, cost: int = 0, **kw) -> DecisionOption:
    return DecisionOption(id=option_id, title=title, cost=cost, **kw)


def _fb(title: str, data: str, insight: str, signals=(), outcome: str = "") -> DecisionFeedback:
    return DecisionFeedback(
        title=title, data=data, insight=insight, signals=tuple(signals), outcome=outcome
    )


LOOP_1 = DecisionLoopConfig(
    loop_number=1,
    context=(
        "Day 1 at the startup. The CEO gives a vague brief. You have 15,000 for "
        "the entire mission. You need your first signal now."
    ),
    options=(
        _opt("A", "Build a Quick Survey", 2000,
             description="Write 5-7 survey questions on habits, fears and willingness to pay."),
        _opt("B", "Build an Interview Script & Conduct 5 Interviews",
             description="Write 6-8 probing questions on routine, emotions and sunscreen behaviour."),
        _opt("C", "Run Broad Meta Ad-Test", 5000,
             description="Two creatives (time-saving vs skincare protection); track CTR or CPC."),
        _opt("D", "Conduct Competitor Review Mining",
             description="Review 4 competitors: 5 pain points, 5 feature gaps, who complains and why."),
    ),
    feedback={
        "A": _fb("Survey Results",
                 "62 responses. Only 14% mention 'time-saving'. 38% mention 'greasiness'. "
                 "24% mention 'white cast'. Respondents: 50% women 18-28, 30% men 25-35.",
                 "Helpful, but confusing. No clear persona emerges.",
                 ["50% women 18-28", "38% greasiness concern", "24% white cast concern"]),
        "B": _fb("Interview Insights",
                 "You spoke to 5 people. 2 say 'SPF is essential'. 3 say 'I forget to apply "
                 "anything'. One says, 'I buy whatever is on discount.'",
                 "Deep but inconsistent data. You now know human motivations but no "
                 "segmentation clarity.",
                 ["SPF importance varies", "Forgetfulness is common", "Price sensitivity exists"]),
        "C": _fb("Ad-Test Results",
                 "Creative A (time-saving): CTR 1.4%. Creative B (lightweight feel): CTR 2.1%. "
                 "Traffic mostly women 18-24.",
                 "Behavior data, but may be creative bias. Strong early signal but incomplete.",
                 ["Lightweight benefit wins (2.1% CTR)", "Women 18-24 respond best"]),
        "D": _fb("Competitor Review Analysis",
                 "Common complaints: greasy feel, white cast, skin irritation. No clear "
                 "persona. Lots of emotion in reviews.",
                 "Useful for pain points, not target group.",
                 ["Greasiness is top pain point", "White cast is concern",
                  "Skin irritation mentioned"]),
    },
    scoring=DecisionScoring(option_scores={"A": 70, "B": 75, "C": 80, "D": 65}),
)

LOOP_2 = DecisionLoopConfig(
    loop_number=2,
    context=(
        "You present your initial findings. Leadership reactions vary. You must "
        "choose the second signal."
    ),
    options=(
        _opt("A", "Targeted Survey for Women 20-30", 2000, recommended_after=("B", "D"),
             description="Useful if Loop 1 was interviews or competitor analysis"),
        _opt("B", "3-Creative Ad-Test", 6000, recommended_after=("A", "D"),
             description="Useful if Loop 1 was survey or competitor analysis"),
        _opt("C", "Landing Page Test", 1000, recommended_after=("B",),
             description="Useful if Loop 1 was interviews"),
        _opt("D", "Niche Interviews (Sensitive Skin)", recommended_after=("C",),
             description="Useful if Loop 1 was ad-test"),
    ),
    feedback={
        "A": _fb("Targeted Survey Results",
                 "65% say 'I already use sunscreen daily'. 35% say 'Too lazy in morning routine'.",
                 "Good signals, still not a full persona.",
                 ["65% already use sunscreen", "35% struggle with routine"]),
        "B": _fb("3-Creative Ad-Test Results",
                 "CTR results: Time-saving: 2.3%. Lightweight feel: 3.0%. Non-greasy: 2.5%.",
                 "Lightweight benefit wins. Women 22-28 strongest responders.",
                 ["Lightweight feel wins (3.0% CTR)", "Women 22-28 respond best"]),
        "C": _fb("Landing Page Test Results",
                 "78 visitors. 14 signups. 18% conversion.",
                 "Very strong early signal. Messaging seems to resonate.",
                 ["18% conversion rate", "Strong messaging resonance"]),
        "D": _fb("Sensitive Skin Interviews",
                 "3/5 say 2-in-1 irritates them.",
                 "Eliminates this as ideal persona.",
                 ["Sensitive skin segment not viable"]),
    },
    scoring=DecisionScoring(option_scores={"A": 75, "B": 80, "C": 85, "D": 70}),
)

LOOP_3 = DecisionLoopConfig(
    loop_number=3,
    context=(
        "CEO on Slack: 'Investors meeting tomorrow. Give me ONE persona - don't "
        "say we need more data.'"
    ),
    options=(
        _opt("A", "Young Working Women (22-30)", is_best=True,
             description="Evidence: strong ad-signals + survey"),
        _opt("B", "College Women (18-22)", description="Evidence: early ad-test traffic"),
        _opt("C", "Parents / Homemakers (28-40)",
             description="Evidence: interviews mention time pressure"),
        _opt("D", "Sensitive Skin Users",
             description="Evidence: PM suggestion, competitor reviews"),
    ),
    feedback={
        "A": _fb("CEO Response",
                 "CEO: 'Good. Put this in the deck.' Growth Lead: 'We can validate this "
                 "easily.' Brand Lead: 'This aligns with market reality.'",
                 "Internal alignment created. You gain credibility.", outcome="positive"),
        "B": _fb("CEO Response", "CEO: 'Low purchasing power. Not viable.'",
                 "You get pushback + asked to revise.", outcome="negative"),
        "C": _fb("CEO Response", "Growth Lead: 'Zero evidence for this.'",
                 "Feels like guessing. Slight credibility drop.", outcome="negative"),
        "D": _fb("CEO Response", "PM happy. Everyone else: 'This is too niche.'",
                 "You're asked to create alternate slides.", outcome="negative"),
    },
    scoring=DecisionScoring(option_scores={"A": 100, "B": 40, "C": 30, "D": 45}),
)

LOOP_4 = DecisionLoopConfig(
    loop_number=4,
    context=(
        "You have remaining budget. CEO says: 'Test the chosen persona quickly. "
        "One experiment. I want results tonight.'"
    ),
    options=(
        _opt("A", "Instagram Ad-Test", 5000, description="Behavioral signal."),
        _opt("B", "Persona-Specific Survey", 2000, description="Self-reported signal."),
        _opt("C", "Persona-targeted Landing Page", 1000, description="Conversion signal."),
        _opt("D", "5 Quick Interviews", description="Qualitative signal."),
    ),
    feedback={
        "A": _fb("Ad-Test Results", "CTR 3.2%. CPC acceptable.",
                 "Strong validation.", outcome="strong"),
        "B": _fb("Survey Results", "72% say product is useful.",
                 "But self-reported, not behavior.", outcome="moderate"),
        "C": _fb("Landing Page Results", "21% conversion.",
                 "Strongest proof for early adopters.", outcome="strong"),
        "D": _fb("Interview Insights", "Strong qualitative signals on routine.",
                 "Good for messaging, not numbers.", outcome="moderate"),
    },
    scoring=DecisionScoring(option_scores={"A": 85, "B": 65, "C": 90, "D": 70}),
)

PERSONA_ENDINGS = {
    "high": Ending(
        title="High Ending",
        ceo_message=(
            "Good work today. Your persona hypothesis is clear and your validation was "
            "strong. Investors liked the direction. Let's start building messaging "
            "experiments next week."
        ),
        growth_lead_message="Nice job. You're learning fast. Keep this pace.",
        outcome="You passed. You gain trust.",
    ),
    "low": Ending(
        title="Low Ending",
        ceo_message=(
            "Thanks for your effort, but this was not strong enough. We needed clearer "
            "direction. Please tighten your approach next week."
        ),
        growth_lead_message="We'll go over decision-making frameworks tomorrow.",
        outcome="Not fired. Not humiliated. Just realistic startup disappointment.",
    ),
}

_LOOPS = (
    ("task1", "Loop 1 - Divergence", LOOP_1, ("Market Research", "Data Analysis")),
    ("task2", "Loop 2 - Convergence", LOOP_2,
     ("Market Research", "Data Analysis", "Strategic Thinking")),
    ("task3", "Loop 3 - Persona Decision", LOOP_3, ("Strategic Thinking", "Decision Making")),
    ("task4", "Loop 4 - Final Validation", LOOP_4, ("Data Analysis", "Validation")),
)

PERSONA = SimulationConfig(
    slug="persona-finding",
    title="Finding the Ideal Persona for a Day-1 Product",
    description=(
        "Play a Marketing Associate finding the ideal customer persona for a new "
        "2-in-1 skincare product, with a limited budget and 4 decision loops."
    ),
    category="Marketing",
    company_name="GlowUp Skincare",
    tasks=(
        _intro(
            "The CEO's brief: people are busy and don't want separate sunscreen and "
            "moisturizer. Find initial persona signals by Friday with 15,000."
        ),
        *(
            TaskDefinition(
                id=task_id, type="decision-loop", name=name,
                skills_tested=skills, decision=loop,
                validation=_rule(ValidatorKind.DECISION_LOOP),
            )
            for task_id, name, loop, skills in _LOOPS
        ),
    ),
    skills_tested=tuple(PERSONA_SKILL_TASKS),
    task_weights={"task1": 20, "task2": 25, "task3": 30, "task4": 25},
    skill_tasks=PERSONA_SKILL_TASKS,
    total_budget=PERSONA_TOTAL_BUDGET,
    endings=PERSONA_ENDINGS,
)


_SIMULATIONS: dict[str, SimulationConfig] = {s.slug: s for s in (NOAH, ARGO, PERSONA)}


def get_simulation(slug: str) -> SimulationConfig | None:
    return _SIMULATIONS.get(slug)


def list_simulations() -> list[SimulationConfig]:
    return list(_SIMULATIONS.values())
