"""
Multipart request extraction for GraphQL file uploads
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from asgiref.sync import sync_to_async
from django.core.files.uploadedfile import UploadedFile
from django.http import HttpRequest

from .exceptions import MalformedEnvelope


logger = logging.getLogger(__name__)

MULTIPART_CONTENT_TYPE = 'multipart/form-data'


@dataclass
class MultipartEnvelope:
    """
    The three parts of a GraphQL multipart request

    operations: {'query': str, 'variables': dict, 'operationName': str?}
    path_map: form field name -> list of dotted variable paths
    files: form field name -> uploaded file
    """
    operations: Dict[str, Any]
    path_map: Dict[str, List[str]]
    files: Dict[str, UploadedFile]


def is_multipart_request(request: HttpRequest) -> bool:
    content_type = request.META.get('CONTENT_TYPE') or ''
    return MULTIPART_CONTENT_TYPE in content_type


def parse_json_object(raw: Any, field_name: str) -> Dict[str, Any]:
    """
    Parse a form field that must hold a JSON object

    Raises:
        MalformedEnvelope: if the field is missing, not valid JSON, or not an object
    """
    if raw is None:
        raise MalformedEnvelope(f"Missing '{field_name}' field in multipart request")

    try:
        result = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning("Invalid JSON in '%s' field: %s", field_name, e)
        raise MalformedEnvelope(f"Invalid JSON input in '{field_name}' field") from e

    if not isinstance(result, dict):
        logger.warning("Field '%s' is not a JSON object", field_name)
        raise MalformedEnvelope(f"Invalid JSON structure in '{field_name}' field")

    return result


def _validate_operations(operations: Dict[str, Any]) -> None:
    if not isinstance(operations.get('query'), str):
        raise MalformedEnvelope("Field 'operations' must contain a 'query' string")

    variables = operations.get('variables')
    if variables is None:
        operations['variables'] = {}
    elif not isinstance(variables, dict):
        raise MalformedEnvelope("Field 'operations' has non-object 'variables'")


def _validate_path_map(path_map: Dict[str, Any]) -> None:
    for file_key, paths in path_map.items():
        if not isinstance(paths, list) or not paths:
            raise MalformedEnvelope(f"Map entry '{file_key}' must be a non-empty array of paths")
        if not all(isinstance(path, str) and path for path in paths):
            raise MalformedEnvelope(f"Map entry '{file_key}' contains an invalid path")


def _read_form(request: HttpRequest):
    # Accessing POST parses the whole body, FILES included
    return request.POST, request.FILES


async def extract_envelope(request: HttpRequest) -> MultipartEnvelope:
    """
    Parse a GraphQL multipart request as described at:
    https://github.com/jaydenseric/graphql-multipart-request-spec

    Expected format:
    - operations: JSON string with query and variables
    - map: JSON string mapping file keys to variable paths
    - files: uploaded files with keys matching the map

    The JSON fields are validated before any file content is read.
    """
    if not is_multipart_request(request):
        raise MalformedEnvelope("Request is not multipart/form-data")

    post, uploaded = await sync_to_async(_read_form)(request)

    path_map = parse_json_object(post.get('map'), 'map')
    operations = parse_json_object(post.get('operations'), 'operations')
    _validate_path_map(path_map)
    _validate_operations(operations)

    # Text fields live in POST; only real file blobs are kept here
    files = {
        key: value
        for key, value in uploaded.items()
        if isinstance(value, UploadedFile)
    }

    return MultipartEnvelope(operations=operations, path_map=path_map, files=files)
