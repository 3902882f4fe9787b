"""
Structural and semantic validation for workout session documents.

Schema Hierarchy:
----------------
WorkoutSession
├── sessionId, startTime, endTime?
├── metadata?: {notes?, mood? (1-10), energy? (1-10), tags?}
├── goals?: WorkoutGoal[]
└── workoutBlocks: WorkoutBlock[]           (at least one)
    ├── blockId, blockType, restBetweenSets, restBetweenBlocks, notes?
    └── exercises: Exercise[]               (at least one)
        ├── exerciseId, exerciseName, exerciseType, muscleGroups, equipment
        ├── supersetWith?: UUID[]           (siblings in the same block)
        ├── linkedToWorkout?: UUID          (another session)
        └── sets: ExerciseSet[]             (at least one)
            ├── setNumber, restAfterSet (0-3600), notes?
            ├── target: {type, value, unit, percentageOf1RM? (0-100)}
            └── actual?: {weight?, reps?, time?, distance?, RPE? (1-10)}

Result Format:
-------------
Valid:
{
    "isValid": true,
    "validatedData": {...}          # Only from validate_workout_schema
}

Invalid:
{
    "isValid": false,
    "errors": ["workoutBlocks.0.exercises.0.sets.0.restAfterSet: must be <= 3600", ...]
}

Validators never raise. The two semantic checks only run on structurally
valid input, otherwise they report "Invalid workout data structure".
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

logger = logging.getLogger(__name__)

UUID_PATTERN = r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$'
UUID_RE = re.compile(UUID_PATTERN)

MAX_REST_SECONDS = 3600
MIN_WORK_REST_RATIO = 0.1
MAX_WORK_REST_RATIO = 10

UNKNOWN_ERROR = 'Unknown validation error'
INVALID_STRUCTURE_ERROR = 'Invalid workout data structure'

Uuid = Annotated[str, Field(strict=True, pattern=UUID_PATTERN)]
NonEmptyStr = Annotated[str, Field(strict=True, min_length=1)]
PositiveNumber = Annotated[float, Field(strict=True, gt=0, allow_inf_nan=False)]
NonNegativeNumber = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]
RestSeconds = Annotated[float, Field(strict=True, ge=0, le=MAX_REST_SECONDS, allow_inf_nan=False)]
Rating = Annotated[int, Field(strict=True, ge=1, le=10)]


class BlockType(str, Enum):
    """How the exercises of a block are performed."""
    STRENGTH = 'strength'
    CARDIO = 'cardio'
    HIIT = 'hiit'
    SUPERSET = 'superset'
    CIRCUIT = 'circuit'


class ExerciseType(str, Enum):
    COMPOUND = 'compound'
    ISOLATION = 'isolation'
    CARDIO = 'cardio'
    BODYWEIGHT = 'bodyweight'


class TargetType(str, Enum):
    """Quantity a set target or a goal is measured in."""
    WEIGHT = 'weight'
    TIME = 'time'
    REPS = 'reps'
    DISTANCE = 'distance'
    PERCENTAGE = 'percentage'


class _Schema(BaseModel):
    # Optional fields default to None but reject an explicit null
    model_config = ConfigDict(extra='ignore', frozen=True)


class ExerciseTarget(_Schema):
    type: TargetType
    value: PositiveNumber
    unit: NonEmptyStr
    percentageOf1RM: Annotated[float, Field(strict=True, ge=0, le=100, allow_inf_nan=False)] = None


class ExerciseActual(_Schema):
    weight: NonNegativeNumber = None
    reps: NonNegativeNumber = None
    time: NonNegativeNumber = None  # seconds
    distance: NonNegativeNumber = None
    RPE: Annotated[float, Field(strict=True, ge=1, le=10, allow_inf_nan=False)] = None


class ExerciseSet(_Schema):
    setNumber: Annotated[int, Field(strict=True, gt=0)]
    target: ExerciseTarget
    actual: ExerciseActual = None
    restAfterSet: RestSeconds
    notes: StrictStr = None


class Exercise(_Schema):
    exerciseId: Uuid
    exerciseName: NonEmptyStr
    exerciseType: ExerciseType
    muscleGroups: Annotated[List[StrictStr], Field(min_length=1)]
    equipment: List[StrictStr]
    sets: Annotated[List[ExerciseSet], Field(min_length=1)]
    supersetWith: List[Uuid] = None
    linkedToWorkout: Uuid = None
    notes: StrictStr = None


class WorkoutBlock(_Schema):
    blockId: Uuid
    blockType: BlockType
    exercises: Annotated[List[Exercise], Field(min_length=1)]
    restBetweenSets: RestSeconds
    restBetweenBlocks: RestSeconds
    notes: StrictStr = None


class WorkoutGoal(_Schema):
    goalId: Uuid
    exerciseId: Uuid
    goalType: TargetType
    targetValue: PositiveNumber
    targetUnit: NonEmptyStr
    targetDate: StrictStr
    currentProgress: NonNegativeNumber
    notes: StrictStr = None


class WorkoutMetadata(_Schema):
    notes: StrictStr = None
    mood: Rating = None
    energy: Rating = None
    tags: List[StrictStr] = None


class WorkoutSession(_Schema):
    """A complete workout session as submitted by a client."""
    sessionId: Uuid
    startTime: StrictStr
    endTime: StrictStr = None
    workoutBlocks: Annotated[List[WorkoutBlock], Field(min_length=1)]
    metadata: WorkoutMetadata = None
    goals: List[WorkoutGoal] = None

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready dict with enum values as strings and absent optionals omitted."""
        return self.model_dump(mode='json', exclude_unset=True)


@dataclass(frozen=True)
class ValidationSuccess:
    validated_data: Optional[WorkoutSession] = None
    is_valid: bool = field(default=True, init=False)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'isValid': True}
        if self.validated_data is not None:
            result['validatedData'] = self.validated_data.to_document()
        return result


@dataclass(frozen=True)
class ValidationFailure:
    errors: Tuple[str, ...]
    is_valid: bool = field(default=False, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'isValid': False, 'errors': list(self.errors)}


ValidationResult = Union[ValidationSuccess, ValidationFailure]

# pydantic error type -> reason template, filled from the error's ctx
ERROR_MESSAGES = {
    'missing': 'Required',
    'string_type': 'must be a string',
    'float_type': 'must be a number',
    'int_type': 'must be an integer',
    'finite_number': 'must be a finite number',
    'greater_than': 'must be > {gt}',
    'greater_than_equal': 'must be >= {ge}',
    'less_than_equal': 'must be <= {le}',
    'string_too_short': 'must not be empty',
    'too_short': 'must contain at least {min_length} item(s)',
    'string_pattern_mismatch': 'must be a valid UUID',
    'enum': 'must be one of: {expected}',
    'list_type': 'must be an array',
    'model_type': 'must be an object',
    'model_attributes_type': 'must be an object',
}


def _ctx_value(value: Any) -> Any:
    # Float bounds come back as 3600.0, render them as 3600
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_error(error: Dict[str, Any]) -> str:
    """Render one pydantic error as "<dotted.path>: <reason>"."""
    path = '.'.join(str(part) for part in error['loc'])
    template = ERROR_MESSAGES.get(error['type'])
    if template is None:
        return f"{path}: {error['msg']}"

    ctx = {key: _ctx_value(value) for key, value in error.get('ctx', {}).items()}
    try:
        reason = template.format(**ctx)
    except KeyError:
        reason = error['msg']
    return f"{path}: {reason}"


def _parse_session(data: Any) -> Optional[WorkoutSession]:
    """Structurally validate data, returning None on any failure."""
    try:
        return WorkoutSession.model_validate(data)
    except Exception:  # pylint: disable=broad-exception-caught
        return None


def validate_workout_schema(data: Any) -> ValidationResult:
    """
    Validate an untyped value against the WorkoutSession schema.

    Returns:
        ValidationSuccess carrying the parsed session, or ValidationFailure
        with one path-qualified message per violated field
    """
    try:
        session = WorkoutSession.model_validate(data)
    except ValidationError as e:
        errors = tuple(format_error(error) for error in e.errors(include_url=False))
        logger.debug("Workout schema validation failed with %s errors", len(errors))
        return ValidationFailure(errors=errors)
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Unexpected error validating workout: %s", str(e), exc_info=True)
        return ValidationFailure(errors=(UNKNOWN_ERROR,))

    return ValidationSuccess(validated_data=session)


def validate_exercise_linking(data: Any) -> ValidationResult:
    """
    Check that superset references resolve to another exercise in the same
    block and that linked workout IDs are well-formed UUIDs.
    """
    session = _parse_session(data)
    if session is None:
        return ValidationFailure(errors=(INVALID_STRUCTURE_ERROR,))

    errors = []
    for block in session.workoutBlocks:
        for exercise in block.exercises:
            sibling_ids = {
                other.exerciseId for other in block.exercises if other is not exercise
            }
            for superset_id in exercise.supersetWith or []:
                if superset_id not in sibling_ids:
                    errors.append(
                        f"Superset reference {superset_id} not found in block {block.blockId}"
                    )

            # Referenced session existence is checked by the caller, not here
            if exercise.linkedToWorkout is not None and not UUID_RE.match(exercise.linkedToWorkout):
                errors.append(f"Invalid linked workout UUID: {exercise.linkedToWorkout}")

    if errors:
        return ValidationFailure(errors=tuple(errors))
    return ValidationSuccess()


def _block_work_time(block: WorkoutBlock) -> float:
    """Total seconds of time-denominated set targets in a block."""
    return sum(
        exercise_set.target.value
        for exercise in block.exercises
        for exercise_set in exercise.sets
        if exercise_set.target.type is TargetType.TIME
    )


def validate_hiit_intervals(data: Any) -> ValidationResult:
    """
    Flag HIIT blocks whose work/rest ratio falls outside [0.1, 10].

    Work is the sum of time-type set targets; rest is the block's
    restBetweenSets + restBetweenBlocks. Blocks where either total is zero
    are not checked.
    """
    session = _parse_session(data)
    if session is None:
        return ValidationFailure(errors=(INVALID_STRUCTURE_ERROR,))

    errors = []
    for block in session.workoutBlocks:
        if block.blockType is not BlockType.HIIT:
            continue

        total_work_time = _block_work_time(block)
        total_rest_time = block.restBetweenSets + block.restBetweenBlocks
        if total_work_time > 0 and total_rest_time > 0:
            ratio = total_work_time / total_rest_time
            if ratio < MIN_WORK_REST_RATIO or ratio > MAX_WORK_REST_RATIO:
                errors.append(
                    f"HIIT block {block.blockId} has extreme work/rest ratio: {ratio:.2f}"
                )

    if errors:
        return ValidationFailure(errors=tuple(errors))
    return ValidationSuccess()
