"""
Tests for the GraphQL endpoint with file uploads
"""
import json

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, override_settings

from graphql_upload.tests.helpers import PNG_BYTES


UPLOAD_MUTATION = """
    mutation ($file: Upload!) {
        uploadFile(file: $file) {
            encoding
            fileName
            fileSize
            mimeType
            uri
        }
    }
"""

IN_MEMORY_STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.InMemoryStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}


@override_settings(
    STORAGES=IN_MEMORY_STORAGES,
    GRAPHQL_UPLOAD={'ALLOWED_TYPES': ['image/png', 'text/plain'], 'MAX_FILE_SIZE': 1024},
)
class UploadEndpointTest(SimpleTestCase):
    """Test multipart requests through the GraphQL view"""

    def post_upload(self, file, variables=None):
        return self.async_client.post('/graphql/', {
            'operations': json.dumps({'query': UPLOAD_MUTATION, 'variables': variables or {'file': None}}),
            'map': json.dumps({'0': ['variables.file']}),
            '0': file,
        })

    async def test_upload_text_file(self):
        file = SimpleUploadedFile('a.txt', b'x' * 50, content_type='application/octet-stream')

        response = await self.post_upload(file)

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIsNone(body['errors'])

        uploaded = body['data']['uploadFile']
        self.assertEqual(uploaded['encoding'], 'binary')
        self.assertEqual(uploaded['fileName'], 'a.txt')
        self.assertEqual(uploaded['fileSize'], 50)
        self.assertEqual(uploaded['mimeType'], 'text/plain')
        self.assertTrue(uploaded['uri'].startswith('/media/'))

    async def test_upload_png_declared_as_octet_stream(self):
        file = SimpleUploadedFile('b.png', PNG_BYTES, content_type='application/octet-stream')

        response = await self.post_upload(file)

        self.assertEqual(response.json()['data']['uploadFile']['mimeType'], 'image/png')

    async def test_oversized_upload(self):
        file = SimpleUploadedFile('big.txt', b'x' * 2048, content_type='text/plain')

        response = await self.post_upload(file)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {'error': 'File size is too large. Maximum allowed size is 0.0009765625MB.'},
        )

    async def test_disallowed_upload(self):
        file = SimpleUploadedFile('blob.bin', b'\x13\x37\x00\x00blob', content_type='application/zip')

        response = await self.post_upload(file)

        self.assertEqual(
            response.json(),
            {'error': 'Error processing upload: File type application/zip is not allowed. '
                      'Allowed types: image/png, text/plain'},
        )

    async def test_malformed_operations(self):
        response = await self.async_client.post('/graphql/', {
            'operations': '{not json',
            'map': json.dumps({'0': ['variables.file']}),
            '0': SimpleUploadedFile('a.txt', b'hello', content_type='text/plain'),
        })

        self.assertEqual(
            response.json(),
            {'error': "Error processing upload: Invalid JSON input in 'operations' field"},
        )

    async def test_regular_query_bypasses_upload_handling(self):
        response = await self.async_client.post(
            '/graphql/',
            json.dumps({'query': '{ default }'}),
            content_type='application/json',
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data'], {'default': True})
