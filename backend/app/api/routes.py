from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from datetime import datetime, timezone
from pydantic import BaseModel

from app.core.config import settings
from app.services.orchestrator import QueryOrchestrator


router = APIRouter(prefix="/api")

YEAR_PATTERN = r"^\d{4}-\d{4}$"


def get_orchestrator(request: Request) -> QueryOrchestrator:
    return request.app.state.orchestrator


class Coordinates(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


# ---------- HEALTH ----------
@router.get("/health")
def health():
    return {"status": "ok", "time": datetime.now(timezone.utc).isoformat()}


# ---------- STATES ----------
@router.get("/states")
def list_states(orchestrator: QueryOrchestrator = Depends(get_orchestrator)):
    return orchestrator.list_states()


@router.get("/states/{state_name}/overview")
def state_overview(
    state_name: str,
    year: Optional[str] = Query(None, pattern=YEAR_PATTERN),
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.state_overview(state_name, year)


# ---------- DISTRICTS ----------
@router.get("/districts")
def list_districts(
    state: str = Query(settings.default_state, min_length=2),
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.list_districts(state)


@router.get("/districts/{district_name}")
def district_detail(
    district_name: str,
    state: str = Query(settings.default_state, min_length=2),
    year: Optional[str] = Query(None, pattern=YEAR_PATTERN),
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.district_detail(state, district_name, year)


@router.get("/districts/{district_name}/summary")
def district_summary(
    district_name: str,
    state: str = Query(settings.default_state, min_length=2),
    year: Optional[str] = Query(None, pattern=YEAR_PATTERN),
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.district_summary(state, district_name, year)


# ---------- LOCATION ----------
@router.post("/location/detect-district")
def detect_district(
    coords: Coordinates,
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
):
    return orchestrator.nearest_district(coords.latitude, coords.longitude)


@router.get("/location/districts-map")
def districts_map(orchestrator: QueryOrchestrator = Depends(get_orchestrator)):
    return orchestrator.districts_map()
