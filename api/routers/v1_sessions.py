from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

import config
from api.routers.v1_compass import evaluation_out
from api.schemas.compass_schemas import (
    BearingRequest,
    EvaluationOut,
    HeadingBatchRequest,
    HeadingRequest,
    SessionCreateRequest,
    SessionOut,
    TargetRequest,
)
from services.compass_sessions import (
    CompassSession,
    CompassSessionRegistry,
    SessionLimitReached,
    SessionNotFound,
)
from services.heading_engine import GeoCoordinate


router = APIRouter(prefix="/v1/sessions", tags=["sessions"])

_registry = CompassSessionRegistry(max_sessions=config.MAX_SESSIONS, boundary_policy=config.SECTOR_BOUNDARIES)


def get_registry() -> CompassSessionRegistry:
    return _registry


def _session_out(session: CompassSession) -> SessionOut:
    return SessionOut(
        session_id=session.session_id,
        target=session.engine.target_heading,
        evaluations=session.evaluations,
        created_at=session.created_at,
        updated_at=session.updated_at,
        last_heading=session.last_heading,
        last_alignment=asdict(session.last_result) if session.last_result else None,
    )


@router.post("", response_model=SessionOut, status_code=201)
async def create_session(req: SessionCreateRequest, registry: CompassSessionRegistry = Depends(get_registry)):
    try:
        session = registry.create(target=req.target)
    except SessionLimitReached as e:
        raise HTTPException(status_code=429, detail=str(e))
    return _session_out(session)


@router.get("/{session_id}", response_model=SessionOut)
async def get_session(session_id: str, registry: CompassSessionRegistry = Depends(get_registry)):
    try:
        return _session_out(registry.get(session_id))
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, registry: CompassSessionRegistry = Depends(get_registry)):
    try:
        registry.delete(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.put("/{session_id}/target", response_model=SessionOut)
async def set_target(session_id: str, req: TargetRequest, registry: CompassSessionRegistry = Depends(get_registry)):
    try:
        return _session_out(registry.set_target(session_id, req.target))
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{session_id}/aim", response_model=SessionOut)
async def aim(session_id: str, req: BearingRequest, registry: CompassSessionRegistry = Depends(get_registry)):
    """Point the session target from ``origin`` toward ``destination``."""
    origin = GeoCoordinate(req.origin.latitude, req.origin.longitude)
    destination = GeoCoordinate(req.destination.latitude, req.destination.longitude)
    try:
        return _session_out(registry.aim_at(session_id, origin, destination))
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{session_id}/headings", response_model=EvaluationOut)
async def push_heading(session_id: str, req: HeadingRequest, registry: CompassSessionRegistry = Depends(get_registry)):
    try:
        session = registry.get(session_id)
        result, cue = registry.evaluate(session_id, req.heading)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return evaluation_out(session.engine.target_heading, result, cue)


@router.post("/{session_id}/headings/batch")
async def push_headings(session_id: str, req: HeadingBatchRequest, registry: CompassSessionRegistry = Depends(get_registry)):
    try:
        session = registry.get(session_id)
        outputs = registry.evaluate_stream(session_id, req.headings)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    target = session.engine.target_heading
    results: List[EvaluationOut] = [evaluation_out(target, result, cue) for result, cue in outputs]
    return {
        "success": True,
        "session_id": session_id,
        "target": target,
        "total": len(results),
        "aligned": sum(1 for r in results if r.alignment.is_aligned),
        "results": results,
    }
