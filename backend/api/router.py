from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_session_store, get_simulation_or_404, get_user_id
from config import settings
from models.requests import DecisionRequest, TaskSubmissionRequest
from models.responses import (
    DecisionResponse,
    FinalReport,
    SessionResponse,
    SimulationDetail,
    SimulationSummary,
    SubmissionResponse,
    TaskSummary,
    ValidationResult,
)
from models.schemas.progress import ProgressRecord
from models.schemas.session import SessionRecord
from models.schemas.simulation import SimulationConfig, TaskDefinition
from services import catalog, task_validation
from services.scoring import aggregator, decision_loop, progress as progress_service
from services.session_store import SessionStore

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def _summary(simulation: SimulationConfig) -> SimulationSummary:
    return SimulationSummary(
        slug=simulation.slug,
        title=simulation.title,
        description=simulation.description,
        category=simulation.category,
        task_ids=[t.id for t in simulation.tasks],
        skills_tested=list(simulation.skills_tested),
    )


def _task_summary(task: TaskDefinition) -> TaskSummary:
    if task.decision is not None:
        options = [
            {"id": o.id, "title": o.title, "description": o.description, "cost": o.cost}
            for o in task.decision.options
        ]
        context = task.decision.context
    else:
        options = [{"id": o.id, "text": o.text} for o in task.config.options]
        context = ""
    return TaskSummary(
        id=task.id,
        type=task.type,
        name=task.name,
        scored=task.scored,
        skills_tested=list(task.skills_tested),
        instruction=task.config.instruction,
        prompt=task.config.prompt,
        options=options,
        min_words=task.config.min_words,
        max_words=task.config.max_words,
        context=context,
    )


def _session_or_404(store: SessionStore, session_id: str, user_id: str) -> SessionRecord:
    session = store.get_session(session_id, user_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _scored_task_or_404(simulation: SimulationConfig, task_id: str) -> TaskDefinition:
    task = simulation.task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Unknown task: {task_id}")
    if not task.scored:
        raise HTTPException(status_code=400, detail=f"Task {task_id} is not scored")
    return task


def _record_completion(
    store: SessionStore,
    session: SessionRecord,
    simulation: SimulationConfig,
    task_id: str,
) -> tuple[ProgressRecord, FinalReport | None]:
    """Update progress after a submission and finalise once every task is done."""
    required = simulation.required_task_ids
    progress = progress_service.mark_task_complete(session.progress, task_id, required)

    report = session.report
    if report is None and progress_service.is_complete(progress, required):
        report = aggregator.build_final_report(store.results(session.id), simulation)
        progress = progress_service.finalize(progress, report)
        store.complete(session.id, report)

    store.update_progress(session.id, progress)
    return progress, report


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
        "llm_scoring_enabled": settings.llm_scoring_enabled,
    }


@router.get("/simulations", response_model=list[SimulationSummary])
async def list_simulations():
    return [_summary(s) for s in catalog.list_simulations()]


@router.get("/simulations/{slug}", response_model=SimulationDetail)
async def get_simulation(slug: str):
    simulation = get_simulation_or_404(slug)
    return SimulationDetail(
        **_summary(simulation).model_dump(),
        company_name=simulation.company_name,
        total_budget=simulation.total_budget,
        tasks=[_task_summary(t) for t in simulation.tasks],
    )


@router.post("/simulations/{slug}/tasks/{task_id}/validate", response_model=ValidationResult)
@limiter.limit(settings.rate_limit)
async def validate_task(request: Request, slug: str, task_id: str, body: TaskSubmissionRequest):
    """Score a submission without recording it."""
    simulation = get_simulation_or_404(slug)
    task = _scored_task_or_404(simulation, task_id)
    return await task_validation.validate_task(task, body.task_data, simulation)


@router.post("/simulations/{slug}/sessions", response_model=SessionResponse)
async def start_session(
    slug: str,
    user_id: str = Depends(get_user_id),
    store: SessionStore = Depends(get_session_store),
):
    simulation = get_simulation_or_404(slug)
    session = store.start_session(user_id, simulation.slug)
    return SessionResponse(
        session_id=session.id,
        simulation_slug=session.simulation_slug,
        user_id=session.user_id,
        status=session.status,
        started_at=session.started_at,
        progress=session.progress,
    )


@router.post("/sessions/{session_id}/tasks/{task_id}", response_model=SubmissionResponse)
@limiter.limit(settings.rate_limit)
async def submit_task(
    request: Request,
    session_id: str,
    task_id: str,
    body: TaskSubmissionRequest,
    user_id: str = Depends(get_user_id),
    store: SessionStore = Depends(get_session_store),
):
    session = _session_or_404(store, session_id, user_id)
    simulation = get_simulation_or_404(session.simulation_slug)
    task = _scored_task_or_404(simulation, task_id)
    if task.decision is not None:
        raise HTTPException(
            status_code=400,
            detail=f"Task {task_id} is a decision loop; submit it to the decision endpoint",
        )

    result = await task_validation.validate_task(task, body.task_data, simulation)
    store.save_submission(session.id, task_id, body.task_data, result)
    progress, report = _record_completion(store, session, simulation, task_id)

    return SubmissionResponse(task_id=task_id, result=result, progress=progress, report=report)


@router.post("/sessions/{session_id}/tasks/{task_id}/decision", response_model=DecisionResponse)
@limiter.limit(settings.rate_limit)
async def submit_decision(
    request: Request,
    session_id: str,
    task_id: str,
    body: DecisionRequest,
    user_id: str = Depends(get_user_id),
    store: SessionStore = Depends(get_session_store),
):
    session = _session_or_404(store, session_id, user_id)
    simulation = get_simulation_or_404(session.simulation_slug)
    task = _scored_task_or_404(simulation, task_id)
    if task.decision is None:
        raise HTTPException(status_code=400, detail=f"Task {task_id} is not a decision loop")

    prior_states = store.decision_states(session.id)
    stored = prior_states.get(task_id)
    if stored is not None and stored.submitted:
        raise HTTPException(status_code=409, detail=f"Decision for {task_id} was already submitted")

    required = simulation.required_task_ids
    earlier = [
        t for t in required[: required.index(task_id)]
        if simulation.task(t).decision is not None
    ]
    pending = decision_loop.first_open_loop(prior_states, earlier)
    if pending is not None:
        raise HTTPException(status_code=409, detail=f"Submit {pending} before {task_id}")

    budget, history = decision_loop.carry_forward(
        prior_states, earlier, simulation.total_budget or 0
    )
    state = decision_loop.apply_decision(task.decision, task_id, body.option_id, budget, history)
    result = decision_loop.score_decision(task.decision, state)

    # Rejected options are reported back but leave the session untouched
    if not state.submitted:
        return DecisionResponse(
            task_id=task_id, state=state, result=result,
            progress=session.progress, report=session.report,
        )

    store.save_submission(
        session.id, task_id, {"selectedOption": state.selected_option}, result, state
    )
    progress, report = _record_completion(store, session, simulation, task_id)

    return DecisionResponse(
        task_id=task_id, state=state, result=result, progress=progress, report=report
    )


@router.get("/sessions/{session_id}/progress", response_model=ProgressRecord)
async def get_progress(
    session_id: str,
    user_id: str = Depends(get_user_id),
    store: SessionStore = Depends(get_session_store),
):
    return _session_or_404(store, session_id, user_id).progress


@router.get("/sessions/{session_id}/report", response_model=FinalReport)
async def get_report(
    session_id: str,
    user_id: str = Depends(get_user_id),
    store: SessionStore = Depends(get_session_store),
):
    session = _session_or_404(store, session_id, user_id)
    if session.report is None:
        raise HTTPException(status_code=404, detail="Report is available once all tasks are complete")
    return session.report
