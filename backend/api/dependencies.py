"""Shared dependencies for API routes."""

from fastapi import Header, HTTPException

from models.schemas.simulation import SimulationConfig
from services import catalog
from services.session_store import SessionStore, get_store

ANONYMOUS_USER = "anonymous"


def get_session_store() -> SessionStore:
    return get_store()


def get_user_id(x_user_id: str | None = Header(None)) -> str:
    return (x_user_id or "").strip() or ANONYMOUS_USER


def get_simulation_or_404(slug: str) -> SimulationConfig:
    simulation = catalog.get_simulation(slug)
    if simulation is None:
        raise HTTPException(status_code=404, detail=f"Unknown simulation: {slug}")
    return simulation
