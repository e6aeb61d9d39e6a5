from dataclasses import asdict

from fastapi import APIRouter

import config
from api.schemas.compass_schemas import BearingRequest, EvaluateRequest, EvaluationOut
from services.feedback import FeedbackCue, feedback_for
from services.heading_engine import AlignmentResult, GeoCoordinate, HeadingAlignmentEngine
from utils.geo_math import compass_label, haversine_distance_km


router = APIRouter(prefix="/v1/compass", tags=["compass"])


def evaluation_out(target: float, result: AlignmentResult, cue: FeedbackCue) -> EvaluationOut:
    return EvaluationOut(
        heading=cue.dial_rotation,
        target=target,
        alignment=asdict(result),
        feedback=asdict(cue),
    )


@router.post("/bearing")
async def bearing(req: BearingRequest):
    origin = GeoCoordinate(req.origin.latitude, req.origin.longitude)
    destination = GeoCoordinate(req.destination.latitude, req.destination.longitude)
    value = HeadingAlignmentEngine.bearing(origin, destination)
    distance_km = haversine_distance_km(origin.latitude, origin.longitude, destination.latitude, destination.longitude)
    return {
        "success": True,
        "bearing": round(value, 6),
        "compass_label": compass_label(value, config.SECTOR_BOUNDARIES),
        "distance_km": round(distance_km, 3),
    }


@router.post("/evaluate", response_model=EvaluationOut)
async def evaluate(req: EvaluateRequest):
    """Evaluate a single heading against a target without creating a session."""
    engine = HeadingAlignmentEngine(target=req.target, boundary_policy=config.SECTOR_BOUNDARIES)
    result = engine.evaluate(req.heading)
    cue = feedback_for(result, req.heading, engine.target_heading)
    return evaluation_out(engine.target_heading, result, cue)
