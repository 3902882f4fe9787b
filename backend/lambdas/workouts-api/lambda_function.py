"""
AWS Lambda function serving the workouts REST API behind API Gateway.
Routes requests to DynamoDB tables and validates submitted workout sessions.

Routes:
------
GET  /templates   List workout templates
GET  /workouts    List stored workout sessions
POST /workouts    Validate and store a workout session

Input Format (POST /workouts):
-----------------------------
{
    "path": "/workouts",
    "httpMethod": "POST",
    "body": "{...}"                   # WorkoutSession JSON, see workout_validation
}

Output Format:
-------------
List (200):
{
    "statusCode": 200,
    "headers": {...CORS headers...},
    "body": {
        "success": true,
        "data": [...],
        "count": integer,
        "message": "string"
    }
}

Created (201):
{
    "statusCode": 201,
    "body": {
        "success": true,
        "data": {...stored session with createdAt/updatedAt...},
        "warnings": ["string", ...],  # HIIT ratio anomalies, may be empty
        "message": "Workout created successfully"
    }
}

Invalid workout (400):
{
    "statusCode": 400,
    "body": {
        "success": false,
        "error": "Invalid workout data" | "Invalid exercise linking",
        "details": ["workoutBlocks.0.blockType: must be one of: ...", ...]
    }
}

Error (404, 500):
{
    "statusCode": 404/500,
    "body": {
        "message": "Route not found" | "Internal server error",
        ...
    }
}

Environment:
-----------
WORKOUTS_TABLE    DynamoDB table for sessions, partition key sessionId (default "Workouts")
TEMPLATES_TABLE   DynamoDB table for templates, partition key templateId (default "WorkoutTemplates")
QUERY_LIMIT       Maximum items returned by list routes (default 10)
LOG_LEVEL         Logging level (default INFO)

Future Improvements:
------------------
- Paginate list routes with LastEvaluatedKey instead of a fixed limit
- Check that linkedToWorkout references an existing session before saving
"""

import json
import logging
import os
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Any, Optional

import boto3

from workout_validation import (
    validate_exercise_linking,
    validate_hiit_intervals,
    validate_workout_schema,
)

WORKOUTS_TABLE = os.environ.get('WORKOUTS_TABLE', 'Workouts')
TEMPLATES_TABLE = os.environ.get('TEMPLATES_TABLE', 'WorkoutTemplates')
QUERY_LIMIT = int(os.environ.get('QUERY_LIMIT', '10'))

# Set up logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))

CORS_HEADERS = {
    'Content-Type': 'application/json',
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'GET,POST,PUT,DELETE,OPTIONS',
}

# Reused across warm invocations of the same execution environment
_dynamodb = None


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder for the Decimal values DynamoDB returns for numbers."""

    def default(self, o):
        if isinstance(o, Decimal):
            return float(o)
        return super().default(o)


def get_dynamodb():
    """Return the cached DynamoDB resource, creating it on first use."""
    global _dynamodb  # pylint: disable=global-statement
    if _dynamodb is None:
        _dynamodb = boto3.resource('dynamodb')
    return _dynamodb


def build_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a body dict into an API Gateway proxy response."""
    return {
        'statusCode': status_code,
        'headers': dict(CORS_HEADERS),
        'body': json.dumps(body, cls=DecimalEncoder)
    }


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def to_dynamodb_item(document: Dict[str, Any]) -> Dict[str, Any]:
    """Convert floats to Decimal, which is the only number type boto3 accepts."""
    return json.loads(json.dumps(document), parse_float=Decimal)


def parse_body(event: Dict[str, Any]) -> Any:
    """Return the decoded request body; raises json.JSONDecodeError on bad JSON."""
    body = event.get('body')
    if body is None:
        return {}
    if isinstance(body, str):
        return json.loads(body) if body.strip() else {}
    return body


def list_items(table_name: str, label: str) -> Dict[str, Any]:
    """
    Scan up to QUERY_LIMIT items from a table.

    Args:
        table_name: DynamoDB table to read
        label: Plural noun used in messages ("workouts", "workout templates")

    Returns:
        API Gateway response with the items
    """
    try:
        table = get_dynamodb().Table(table_name)
        response = table.scan(Limit=QUERY_LIMIT)
        items = response.get('Items', [])

        logger.info("Found %s %s", len(items), label)
        return build_response(200, {
            'success': True,
            'data': items,
            'count': len(items),
            'message': f'{label.capitalize()} retrieved successfully'
        })
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Error fetching %s: %s", label, str(e), exc_info=True)
        return build_response(500, {
            'success': False,
            'error': f'Failed to fetch {label}',
            'details': str(e)
        })


def get_workout_templates() -> Dict[str, Any]:
    """Handle GET /templates."""
    return list_items(TEMPLATES_TABLE, 'workout templates')


def get_workouts() -> Dict[str, Any]:
    """Handle GET /workouts."""
    return list_items(WORKOUTS_TABLE, 'workouts')


def create_workout(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Handle POST /workouts.

    The session must pass schema and exercise linking validation to be
    stored. HIIT ratio anomalies are returned as warnings only.
    """
    try:
        body = parse_body(event)
    except json.JSONDecodeError:
        logger.error("Invalid JSON format in request body")
        return build_response(400, {'error': 'Invalid JSON format in request body'})

    schema_result = validate_workout_schema(body)
    if not schema_result.is_valid:
        logger.warning("Rejected workout with %s schema errors", len(schema_result.errors))
        return build_response(400, {
            'success': False,
            'error': 'Invalid workout data',
            'details': list(schema_result.errors)
        })

    linking_result = validate_exercise_linking(body)
    if not linking_result.is_valid:
        logger.warning("Rejected workout with invalid exercise links: %s", linking_result.errors)
        return build_response(400, {
            'success': False,
            'error': 'Invalid exercise linking',
            'details': list(linking_result.errors)
        })

    hiit_result = validate_hiit_intervals(body)
    warnings = [] if hiit_result.is_valid else list(hiit_result.errors)
    for warning in warnings:
        logger.warning("%s", warning)

    now = utc_timestamp()
    workout = {
        **schema_result.validated_data.to_document(),
        'createdAt': now,
        'updatedAt': now,
    }

    try:
        table = get_dynamodb().Table(WORKOUTS_TABLE)
        table.put_item(Item=to_dynamodb_item(workout))
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Error creating workout: %s", str(e), exc_info=True)
        return build_response(500, {
            'success': False,
            'error': 'Failed to create workout',
            'details': str(e)
        })

    logger.info("Saved workout session %s", workout['sessionId'])
    return build_response(201, {
        'success': True,
        'data': workout,
        'warnings': warnings,
        'message': 'Workout created successfully'
    })


def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    """
    Route an API Gateway proxy event to its handler.

    Args:
        event: Lambda event object
        _: Lambda context object (unused)

    Returns:
        Response with status code, CORS headers and JSON body
    """
    path: Optional[str] = None
    method: Optional[str] = None
    try:
        path = event.get('path')
        method = event.get('httpMethod')
        logger.info("Received request: %s %s", method, path)

        match (path, method):
            case ('/templates', 'GET'):
                return get_workout_templates()
            case ('/workouts', 'GET'):
                return get_workouts()
            case ('/workouts', 'POST'):
                return create_workout(event)
            case _:
                return build_response(404, {
                    'message': 'Route not found',
                    'path': path,
                    'method': method
                })

    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Error in lambda_handler for %s %s: %s", method, path, str(e), exc_info=True)
        return build_response(500, {
            'message': 'Internal server error',
            'error': str(e)
        })
