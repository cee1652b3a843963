"""Daily workout generation from the exercise catalog."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from fitness_coach.catalog.search import normalize, search
from fitness_coach.engine.assessment import Findings, correctives_for
from fitness_coach.engine.selection import WorkoutPolicy
from fitness_coach.exceptions import InvalidStateError
from fitness_coach.models.coaching import AthleteProfile
from fitness_coach.models.exercise import ExerciseRecord
from fitness_coach.models.session import (
    CurrentPointer,
    ExerciseSlot,
    SessionBlocks,
    SessionStatus,
    WarmupItem,
    WorkoutSession,
)

logger = logging.getLogger(__name__)

STRENGTH_SETS = 3
STRENGTH_REPS = "10–12"
STRENGTH_REST_SEC = 60
FINISHER_REPS = "60–90 sec"
COACHING_FOCUS = "brace first; slow reps; knees track; control lowering"


@dataclass(frozen=True)
class SlotSpec:
    """How one strength slot is filled."""

    slot: str
    pool: str
    targets: tuple[str, ...]  # primary-muscle substrings; empty means no muscle filter
    fallback: ExerciseRecord
    cue: str


STRENGTH_SLOTS: tuple[SlotSpec, ...] = (
    SlotSpec(
        slot="A1",
        pool="push",
        targets=("chest", "shoulders", "triceps"),
        fallback=ExerciseRecord(id="push-up", name="Push-Up", equipment="body only"),
        cue="Brace first. Smooth reps.",
    ),
    SlotSpec(
        slot="A2",
        pool="pull",
        targets=("back", "lats", "biceps"),
        fallback=ExerciseRecord(id="row", name="Row (band/backpack)", equipment="bands"),
        cue="Pull elbows back, no shrug.",
    ),
    SlotSpec(
        slot="A3",
        pool="accessory",
        targets=(),
        fallback=ExerciseRecord(id="dumbbell-curl", name="Dumbbell Curl", equipment="dumbbell"),
        cue="Control the lowering.",
    ),
    SlotSpec(
        slot="A4",
        pool="lower",
        targets=("quadriceps", "glutes", "hamstrings"),
        fallback=ExerciseRecord(id="bodyweight-squat", name="Bodyweight Squat", equipment="body only"),
        cue="Knees over toes, chest tall.",
    ),
)

FINISHER_FALLBACK = ExerciseRecord(id="child-pose", name="Child's Pose", equipment="body only")

WARMUP: tuple[WarmupItem, ...] = (
    WarmupItem(name="Cat-cow", sets=1, reps="x10", rest_sec=0),
    WarmupItem(name="Hip circles", sets=1, reps="x10/side", rest_sec=0),
    WarmupItem(name="Ankle rocks", sets=1, reps="x10/side", rest_sec=0),
    WarmupItem(name="Arm swings", sets=1, reps="x20", rest_sec=0),
)


def build_pools(
    catalog: Iterable[ExerciseRecord], equipment_allowed: Iterable[str]
) -> dict[str, list[ExerciseRecord]]:
    """
    Build the strength pools for each slot.

    Args:
        catalog: Exercise catalog (any iterable of records)
        equipment_allowed: Equipment tags a pool may draw from (exact match)

    Returns:
        Mapping of pool name to candidate exercises in catalog order
    """
    allowed = {normalize(tag) for tag in equipment_allowed}
    strength = [
        ex for ex in search(catalog, "", {"category": "strength"}) if normalize(ex.equipment) in allowed
    ]

    pools: dict[str, list[ExerciseRecord]] = {}
    for spec in STRENGTH_SLOTS:
        if not spec.targets:
            pools[spec.pool] = list(strength)
            continue
        pools[spec.pool] = [
            ex
            for ex in strength
            if any(target in normalize(muscle) for muscle in ex.primary_muscles for target in spec.targets)
        ]
    return pools


def build_finisher_pool(catalog: Iterable[ExerciseRecord]) -> list[ExerciseRecord]:
    """Bodyweight stretches for the finisher slot."""
    return search(catalog, "", {"category": "stretching", "equipment": "body only"})


def _coerce_profile(profile: Union[AthleteProfile, Mapping[str, Any], None]) -> AthleteProfile:
    if isinstance(profile, AthleteProfile):
        return profile
    if not isinstance(profile, Mapping):
        return AthleteProfile()
    try:
        return AthleteProfile.model_validate(dict(profile))
    except ValidationError as e:
        logger.warning("Ignoring malformed profile: %s", e.error_count())
        return AthleteProfile()


def new_session_id(day: date, now: datetime) -> str:
    """Unique id prefixed with the session date."""
    return f"workout_{day.isoformat()}_{int(now.timestamp() * 1000)}_{uuid.uuid4().hex[:12]}"


def generate(
    catalog: Optional[Iterable[ExerciseRecord]],
    profile: Union[AthleteProfile, Mapping[str, Any], None] = None,
    findings: Findings = None,
    policy: Optional[WorkoutPolicy] = None,
    status: Union[SessionStatus, str] = SessionStatus.PLANNED,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> WorkoutSession:
    """
    Generate today's workout session.

    Every slot has a literal fallback, so an empty or malformed catalog still
    produces a complete session. Neither the catalog nor any existing session
    is modified.

    Args:
        catalog: Exercise catalog to draw from
        profile: Athlete profile; only name, goal and injuries are captured
        findings: Movement-assessment findings driving the corrective block
        policy: Equipment constraints and selection strategy
        status: Initial status, planned or in_progress
        today: Session date (defaults to today)
        now: Creation time (defaults to now)

    Returns:
        The new WorkoutSession
    """
    status = SessionStatus(status)
    if status == SessionStatus.COMPLETED:
        raise InvalidStateError("A new session cannot start out completed")

    policy = policy or WorkoutPolicy()
    now = now or datetime.now()
    today = today or now.date()
    records = [record for record in (catalog or ()) if isinstance(record, ExerciseRecord)]

    pools = build_pools(records, policy.equipment_allowed)
    strength: list[ExerciseSlot] = []
    for spec in STRENGTH_SLOTS:
        exercise = policy.selector.pick(pools[spec.pool]) or spec.fallback
        logger.debug("Slot %s (%s pool of %d): %s", spec.slot, spec.pool, len(pools[spec.pool]), exercise.name)
        strength.append(
            ExerciseSlot(
                slot=spec.slot,
                id=exercise.id,
                name=exercise.name,
                equipment=exercise.equipment,
                sets=STRENGTH_SETS,
                reps=STRENGTH_REPS,
                rest_sec=STRENGTH_REST_SEC,
                cue=spec.cue,
            )
        )

    stretch = policy.selector.pick(build_finisher_pool(records)) or FINISHER_FALLBACK
    finisher = ExerciseSlot(
        slot="F1",
        id=stretch.id,
        name=stretch.name,
        equipment=stretch.equipment,
        sets=1,
        reps=FINISHER_REPS,
        rest_sec=0,
    )

    return WorkoutSession(
        id=new_session_id(today, now),
        date=today,
        status=status,
        profile_snapshot=_coerce_profile(profile).snapshot(),
        blocks=SessionBlocks(
            warmup=[item.model_copy() for item in WARMUP],
            corrective=correctives_for(findings),
            strength=strength,
            finisher=[finisher],
        ),
        current=CurrentPointer(block="strength", slot="A1", set_index=1),
        coaching_focus=COACHING_FOCUS,
        created_at=now,
    )
