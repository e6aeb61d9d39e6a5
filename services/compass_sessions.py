import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from services.feedback import FeedbackCue, feedback_for
from services.heading_engine import AlignmentResult, GeoCoordinate, HeadingAlignmentEngine
from utils.geo_math import SECTOR_BOUNDARY_POLICY, BoundaryPolicy

logger = logging.getLogger(__name__)

Evaluation = Tuple[AlignmentResult, FeedbackCue]


class CompassSessionError(Exception):
    pass


class SessionNotFound(CompassSessionError, KeyError):
    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Compass session not found: {self.session_id}"


class SessionLimitReached(CompassSessionError):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CompassSession:
    session_id: str
    engine: HeadingAlignmentEngine
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    evaluations: int = 0
    last_heading: Optional[float] = None
    last_result: Optional[AlignmentResult] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def _evaluate_locked(self, heading: float) -> Evaluation:
        result = self.engine.evaluate(heading)
        cue = feedback_for(result, heading, self.engine.target_heading)
        self.evaluations += 1
        self.last_heading = cue.dial_rotation
        self.last_result = result
        self.updated_at = _utcnow()
        return result, cue


class CompassSessionRegistry:
    """In-memory compass sessions, one engine each.

    Calls on a single session are serialized by that session's lock, so a
    target change never interleaves with an evaluation of the same session.
    """

    def __init__(self, max_sessions: int = 1000, boundary_policy: BoundaryPolicy = SECTOR_BOUNDARY_POLICY):
        self.max_sessions = max_sessions
        self.boundary_policy = boundary_policy
        self._sessions: Dict[str, CompassSession] = {}
        self._lock = threading.Lock()

    def create(self, target: float = 0.0) -> CompassSession:
        engine = HeadingAlignmentEngine(target=target, boundary_policy=self.boundary_policy)
        session = CompassSession(session_id=uuid.uuid4().hex, engine=engine)
        with self._lock:
            if len(self._sessions) >= self.max_sessions:
                raise SessionLimitReached(f"Session limit of {self.max_sessions} reached")
            self._sessions[session.session_id] = session
        logger.info("Created compass session %s (target=%.2f)", session.session_id, engine.target_heading)
        return session

    def get(self, session_id: str) -> CompassSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFound(session_id)
        logger.info("Deleted compass session %s", session_id)

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def set_target(self, session_id: str, degrees: float) -> CompassSession:
        session = self.get(session_id)
        with session.lock:
            target = session.engine.set_target(degrees)
            session.updated_at = _utcnow()
        logger.info("Session %s target set to %.2f", session_id, target)
        return session

    def aim_at(self, session_id: str, origin: GeoCoordinate, destination: GeoCoordinate) -> CompassSession:
        session = self.get(session_id)
        with session.lock:
            target = session.engine.aim_at(origin, destination)
            session.updated_at = _utcnow()
        logger.info("Session %s aimed at (%.5f, %.5f), target=%.2f",
                    session_id, destination.latitude, destination.longitude, target)
        return session

    def evaluate(self, session_id: str, heading: float) -> Evaluation:
        session = self.get(session_id)
        with session.lock:
            result, cue = session._evaluate_locked(heading)
        logger.debug("Session %s heading=%.2f aligned=%s ratio=%.3f",
                     session_id, cue.dial_rotation, result.is_aligned, result.proximity_ratio)
        return result, cue

    def evaluate_stream(self, session_id: str, headings: Iterable[float]) -> List[Evaluation]:
        session = self.get(session_id)
        with session.lock:
            outputs = [session._evaluate_locked(h) for h in headings]
        logger.debug("Session %s evaluated %d headings", session_id, len(outputs))
        return outputs
