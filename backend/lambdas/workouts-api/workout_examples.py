"""
Example workout sessions covering every block style the API accepts.
Used as fixtures in tests and as a quick manual check of the validators:

    python workout_examples.py
"""

import logging

from workout_validation import (
    validate_exercise_linking,
    validate_hiit_intervals,
    validate_workout_schema,
)

logger = logging.getLogger(__name__)

# Strength, superset and HIIT blocks plus a bench press goal
EXAMPLE_WORKOUT = {
    "sessionId": "550e8400-e29b-41d4-a716-446655440000",
    "startTime": "2024-01-15T10:00:00Z",
    "workoutBlocks": [
        {
            "blockId": "550e8400-e29b-41d4-a716-446655440001",
            "blockType": "strength",
            "exercises": [
                {
                    "exerciseId": "550e8400-e29b-41d4-a716-446655440002",
                    "exerciseName": "Bench Press",
                    "exerciseType": "compound",
                    "muscleGroups": ["chest", "triceps", "shoulders"],
                    "equipment": ["barbell", "bench"],
                    "sets": [
                        {
                            "setNumber": 1,
                            "target": {"type": "weight", "value": 135, "unit": "lbs"},
                            "restAfterSet": 180
                        },
                        {
                            "setNumber": 2,
                            "target": {"type": "weight", "value": 155, "unit": "lbs"},
                            "restAfterSet": 180
                        }
                    ]
                }
            ],
            "restBetweenSets": 180,
            "restBetweenBlocks": 300
        },
        {
            "blockId": "550e8400-e29b-41d4-a716-446655440004",
            "blockType": "superset",
            "exercises": [
                {
                    "exerciseId": "550e8400-e29b-41d4-a716-446655440005",
                    "exerciseName": "Push-ups",
                    "exerciseType": "bodyweight",
                    "muscleGroups": ["chest", "triceps"],
                    "equipment": [],
                    "sets": [
                        {
                            "setNumber": 1,
                            "target": {"type": "reps", "value": 15, "unit": "reps"},
                            "restAfterSet": 0
                        }
                    ],
                    "supersetWith": ["550e8400-e29b-41d4-a716-446655440003"]
                },
                {
                    "exerciseId": "550e8400-e29b-41d4-a716-446655440003",
                    "exerciseName": "Dips",
                    "exerciseType": "bodyweight",
                    "muscleGroups": ["triceps", "chest"],
                    "equipment": ["dip bars"],
                    "sets": [
                        {
                            "setNumber": 1,
                            "target": {"type": "reps", "value": 12, "unit": "reps"},
                            "restAfterSet": 120
                        }
                    ],
                    "supersetWith": ["550e8400-e29b-41d4-a716-446655440005"]
                }
            ],
            "restBetweenSets": 0,
            "restBetweenBlocks": 300
        },
        {
            "blockId": "550e8400-e29b-41d4-a716-446655440006",
            "blockType": "hiit",
            "exercises": [
                {
                    "exerciseId": "550e8400-e29b-41d4-a716-446655440007",
                    "exerciseName": "Burpees",
                    "exerciseType": "cardio",
                    "muscleGroups": ["full body"],
                    "equipment": [],
                    "sets": [
                        {
                            "setNumber": 1,
                            "target": {"type": "time", "value": 20, "unit": "seconds"},
                            "restAfterSet": 20
                        },
                        {
                            "setNumber": 2,
                            "target": {"type": "time", "value": 20, "unit": "seconds"},
                            "restAfterSet": 20
                        }
                    ]
                }
            ],
            "restBetweenSets": 20,
            "restBetweenBlocks": 300
        }
    ],
    "goals": [
        {
            "goalId": "550e8400-e29b-41d4-a716-446655440008",
            "exerciseId": "550e8400-e29b-41d4-a716-446655440002",
            "goalType": "weight",
            "targetValue": 225,
            "targetUnit": "lbs",
            "targetDate": "2024-06-15T10:00:00Z",
            "currentProgress": 155
        }
    ]
}

# Follow-up session tracking progression against EXAMPLE_WORKOUT
EXAMPLE_LINKED_WORKOUT = {
    "sessionId": "550e8400-e29b-41d4-a716-446655440009",
    "startTime": "2024-01-20T10:00:00Z",
    "workoutBlocks": [
        {
            "blockId": "550e8400-e29b-41d4-a716-44665544000a",
            "blockType": "strength",
            "exercises": [
                {
                    "exerciseId": "550e8400-e29b-41d4-a716-44665544000b",
                    "exerciseName": "Bench Press",
                    "exerciseType": "compound",
                    "muscleGroups": ["chest", "triceps", "shoulders"],
                    "equipment": ["barbell", "bench"],
                    "sets": [
                        {
                            "setNumber": 1,
                            "target": {"type": "weight", "value": 160, "unit": "lbs"},
                            "restAfterSet": 180
                        }
                    ],
                    "linkedToWorkout": "550e8400-e29b-41d4-a716-446655440000"
                }
            ],
            "restBetweenSets": 180,
            "restBetweenBlocks": 300
        }
    ]
}


def demonstrate_validation():
    """Run every validator over the examples and log the outcome."""
    checks = [
        ("Main validation", validate_workout_schema, EXAMPLE_WORKOUT),
        ("Linking validation", validate_exercise_linking, EXAMPLE_WORKOUT),
        ("HIIT validation", validate_hiit_intervals, EXAMPLE_WORKOUT),
        ("Linked workout validation", validate_workout_schema, EXAMPLE_LINKED_WORKOUT),
    ]

    results = {}
    for label, validator, workout in checks:
        result = validator(workout)
        results[label] = result.is_valid
        if result.is_valid:
            logger.info("%s: valid", label)
        else:
            logger.info("%s: invalid, errors: %s", label, list(result.errors))
    return results


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    demonstrate_validation()
