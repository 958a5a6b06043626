"""
Tests for upload policy configuration
"""
from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings

from graphql_upload.conf import DEFAULT_ALLOWED_TYPES, DEFAULT_MAX_FILE_SIZE, UploadPolicy


class UploadPolicyTest(SimpleTestCase):

    @override_settings(GRAPHQL_UPLOAD={'ALLOWED_TYPES': ['text/plain'], 'MAX_FILE_SIZE': 2048})
    def test_from_settings(self):
        policy = UploadPolicy.from_settings()

        self.assertEqual(policy.allowed_types, frozenset({'text/plain'}))
        self.assertEqual(policy.max_file_size, 2048)

    @override_settings(GRAPHQL_UPLOAD={})
    def test_defaults(self):
        policy = UploadPolicy.from_settings()

        self.assertEqual(policy.allowed_types, frozenset(DEFAULT_ALLOWED_TYPES))
        self.assertEqual(policy.max_file_size, DEFAULT_MAX_FILE_SIZE)
        self.assertEqual(policy.max_file_size_mb, '10')

    def test_invalid_values(self):
        with self.assertRaises(ImproperlyConfigured):
            UploadPolicy(allowed_types=[], max_file_size=1024)
        with self.assertRaises(ImproperlyConfigured):
            UploadPolicy(allowed_types=['text/plain'], max_file_size=0)
        with self.assertRaises(ImproperlyConfigured):
            UploadPolicy(allowed_types=['text/plain'], max_file_size='10MB')

    def test_megabytes_are_plain_decimals(self):
        self.assertEqual(UploadPolicy(['text/plain'], 10).max_file_size_mb, '0.0000095367431640625')
        self.assertEqual(UploadPolicy(['text/plain'], 1).max_file_size_mb, '0.00000095367431640625')
