"""
Tests for project settings
"""
import importlib
import os
from unittest import mock

from django.test import SimpleTestCase

from uploadserver import settings as project_settings


class DebugSettingTest(SimpleTestCase):
    """Test that DEBUG is opt-in through the environment"""

    def tearDown(self):
        importlib.reload(project_settings)

    def load_settings(self, **environ):
        env = {key: value for key, value in os.environ.items() if key != 'DJANGO_DEBUG'}
        env.update(environ)
        with mock.patch.dict(os.environ, env, clear=True):
            return importlib.reload(project_settings)

    def test_debug_off_without_environment(self):
        self.assertFalse(self.load_settings().DEBUG)

    def test_debug_enabled_from_environment(self):
        self.assertTrue(self.load_settings(DJANGO_DEBUG='true').DEBUG)

    def test_debug_disabled_from_environment(self):
        self.assertFalse(self.load_settings(DJANGO_DEBUG='0').DEBUG)
