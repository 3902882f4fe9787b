"""
Shared fixtures and configurations for Lambda function tests.
"""

import copy
import os
import sys
import importlib.util
import pytest
import boto3
from moto import mock_aws

LAMBDA_DIR = "workouts-api"


# Helper to import modules from specific Lambda directories
def import_lambda_module(lambda_dir, module_name="lambda_function"):
    """Import a module from a specific Lambda directory."""
    lambda_path = os.path.join(os.path.dirname(__file__), f"../{lambda_dir}")
    module_path = os.path.join(lambda_path, f"{module_name}.py")

    if not os.path.exists(module_path):
        return None

    spec = importlib.util.spec_from_file_location(f"{lambda_dir}.{module_name}", module_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _load(module_name):
    # Sibling imports (from workout_validation import ...) resolve against the Lambda directory
    lambda_path = os.path.join(os.path.dirname(__file__), f"../{LAMBDA_DIR}")
    sys.path.insert(0, lambda_path)

    try:
        return import_lambda_module(LAMBDA_DIR, module_name)
    finally:
        if lambda_path in sys.path:
            sys.path.remove(lambda_path)


@pytest.fixture
def workout_validation_module():
    """Import the workout_validation module."""
    return _load("workout_validation")


@pytest.fixture
def workout_examples_module():
    """Import the workout_examples module."""
    return _load("workout_examples")


@pytest.fixture
def workouts_api_module(aws_credentials):
    """Import the workouts-api Lambda module."""
    return _load("lambda_function")


# AWS fixtures
@pytest.fixture
def aws_credentials():
    """Mocked AWS Credentials for boto3."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def mocked_aws(aws_credentials):
    """Mock all AWS services without creating any resources."""
    with mock_aws():
        yield


@pytest.fixture
def dynamodb_tables(mocked_aws):
    """Create mock workouts and templates tables."""
    dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

    workouts = dynamodb.create_table(
        TableName="Workouts",
        KeySchema=[{"AttributeName": "sessionId", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "sessionId", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST"
    )
    templates = dynamodb.create_table(
        TableName="WorkoutTemplates",
        KeySchema=[{"AttributeName": "templateId", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "templateId", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST"
    )

    yield {"workouts": workouts, "templates": templates}


@pytest.fixture
def populate_templates(dynamodb_tables):
    """Populate the templates table with a few templates."""
    table = dynamodb_tables["templates"]
    for i, name in enumerate(["Push Day", "Pull Day", "Leg Day"]):
        table.put_item(Item={"templateId": f"template-{i}", "name": name})
    return table


# Workout document fixtures
@pytest.fixture
def example_workout(workout_examples_module):
    """A deep copy of the full example session, safe to mutate."""
    return copy.deepcopy(workout_examples_module.EXAMPLE_WORKOUT)


@pytest.fixture
def linked_workout(workout_examples_module):
    """A deep copy of the linked example session, safe to mutate."""
    return copy.deepcopy(workout_examples_module.EXAMPLE_LINKED_WORKOUT)


@pytest.fixture
def strength_workout():
    """One strength block, one exercise, one weighted set."""
    return {
        "sessionId": "0b7f2c3e-6a1d-4e8f-9c2b-1a2b3c4d5e6f",
        "startTime": "2024-03-01T08:30:00Z",
        "workoutBlocks": [
            {
                "blockId": "1c8e3d4f-7b2e-4f9a-8d3c-2b3c4d5e6f70",
                "blockType": "strength",
                "exercises": [
                    {
                        "exerciseId": "2d9f4e5a-8c3f-4a0b-9e4d-3c4d5e6f7081",
                        "exerciseName": "Back Squat",
                        "exerciseType": "compound",
                        "muscleGroups": ["quads", "glutes"],
                        "equipment": ["barbell", "rack"],
                        "sets": [
                            {
                                "setNumber": 1,
                                "target": {"type": "weight", "value": 135, "unit": "lbs"},
                                "restAfterSet": 180
                            }
                        ]
                    }
                ],
                "restBetweenSets": 180,
                "restBetweenBlocks": 300
            }
        ]
    }


@pytest.fixture
def hiit_workout():
    """One HIIT block with two 20 second sets; work 40s against 320s of rest."""
    return {
        "sessionId": "3e0a5f6b-9d4a-4b1c-8f5e-4d5e6f708192",
        "startTime": "2024-03-02T18:00:00Z",
        "workoutBlocks": [
            {
                "blockId": "4f1b6a7c-0e5b-4c2d-9a6f-5e6f708192a3",
                "blockType": "hiit",
                "exercises": [
                    {
                        "exerciseId": "5a2c7b8d-1f6c-4d3e-8b7a-6f708192a3b4",
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
        ]
    }
