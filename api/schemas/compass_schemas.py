from pydantic import BaseModel, Field
from typing import Annotated, Optional, List
from datetime import datetime


class Coordinate(BaseModel):
	latitude: float = Field(..., ge=-90, le=90)
	longitude: float = Field(..., ge=-180, le=180)


class BearingRequest(BaseModel):
	origin: Coordinate
	destination: Coordinate


class EvaluateRequest(BaseModel):
	target: float = Field(default=0.0, allow_inf_nan=False, description="Target heading in degrees; any value, normalized to [0, 360)")
	heading: float = Field(..., allow_inf_nan=False, description="Current fused heading in degrees")


class SessionCreateRequest(BaseModel):
	target: float = Field(default=0.0, allow_inf_nan=False)


class TargetRequest(BaseModel):
	target: float = Field(..., allow_inf_nan=False)


class HeadingRequest(BaseModel):
	heading: float = Field(..., allow_inf_nan=False)


class HeadingBatchRequest(BaseModel):
	headings: List[Annotated[float, Field(allow_inf_nan=False)]] = Field(..., min_length=1, max_length=1000)


class AlignmentOut(BaseModel):
	is_aligned: bool
	proximity_ratio: float
	compass_label: str


class FeedbackOut(BaseModel):
	intensity: str
	pulse: bool
	dial_rotation: float
	marker_rotation: float


class EvaluationOut(BaseModel):
	heading: float
	target: float
	alignment: AlignmentOut
	feedback: FeedbackOut


class SessionOut(BaseModel):
	session_id: str
	target: float
	evaluations: int
	created_at: datetime
	updated_at: datetime
	last_heading: Optional[float] = None
	last_alignment: Optional[AlignmentOut] = None
