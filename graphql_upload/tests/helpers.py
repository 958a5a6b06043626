"""
Shared helpers for upload tests
"""
import json

from django.test import RequestFactory


PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00\x00\x00\rIHDR' + b'\x00' * 32
JPEG_BYTES = b'\xff\xd8\xff\xe0\x00\x10JFIF\x00' + b'\x00' * 32

UPLOAD_MUTATION = 'mutation ($file: Upload!) { uploadFile(file: $file) { fileName } }'


def multipart_request(operations, path_map, files=None, extra=None):
    """Build a multipart/form-data POST request for the GraphQL endpoint"""
    data = {
        'operations': operations if isinstance(operations, str) else json.dumps(operations),
        'map': path_map if isinstance(path_map, str) else json.dumps(path_map),
    }
    data.update(files or {})
    data.update(extra or {})
    return RequestFactory().post('/graphql/', data=data)


class StubEngine:
    """Execution engine that records calls and returns a canned result"""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def execute(self, query, variables, context, operation_name=None):
        self.calls.append({
            'query': query,
            'variables': dict(variables),
            'context': context,
            'operation_name': operation_name,
        })
        if self.error is not None:
            raise self.error
        return self.result
