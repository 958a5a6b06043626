"""
Tests for binding files to operation variables
"""
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase

from graphql_upload.binder import (
    bind_file,
    bind_uploads,
    plan_bindings,
    remove_unset_variables,
    variable_name_for,
)
from graphql_upload.conf import UploadPolicy
from graphql_upload.exceptions import (
    ConflictingVariable,
    DisallowedType,
    InvalidFile,
    MissingFile,
    PayloadTooLarge,
)
from graphql_upload.tests.helpers import PNG_BYTES
from graphql_upload.upload import Upload


def text_file(name='a.txt', size=50, content_type='application/octet-stream'):
    return SimpleUploadedFile(name, b'x' * size, content_type=content_type)


class VariableNameTest(SimpleTestCase):

    def test_last_segment_is_used(self):
        self.assertEqual(variable_name_for('variables.file'), 'file')
        self.assertEqual(variable_name_for('variables.input.files.1'), '1')
        self.assertEqual(variable_name_for('file'), 'file')


class PlanBindingsTest(SimpleTestCase):
    """Test matching map entries to files"""

    def setUp(self):
        self.policy = UploadPolicy(allowed_types=['text/plain'], max_file_size=1024)

    def test_each_entry_gets_its_file(self):
        files = {'0': text_file('a.txt'), '1': text_file('b.txt')}
        path_map = {'0': ['variables.first'], '1': ['variables.second', 'variables.copy']}

        bindings = plan_bindings(path_map, files, self.policy)

        self.assertEqual([binding.file_key for binding in bindings], ['0', '1'])
        self.assertEqual(bindings[0].variable_names, ['first'])
        self.assertEqual(bindings[1].variable_names, ['second', 'copy'])

    def test_missing_file(self):
        with self.assertRaisesMessage(MissingFile, "map entry '0'"):
            plan_bindings({'0': ['variables.file']}, {}, self.policy)

    def test_oversized_file_stops_planning(self):
        files = {'0': text_file(size=2048), '1': text_file()}

        with self.assertRaisesMessage(PayloadTooLarge, 'Maximum allowed size is 0.0009765625MB.'):
            plan_bindings({'0': ['variables.a'], '1': ['variables.b']}, files, self.policy)

    def test_file_at_size_limit_is_accepted(self):
        bindings = plan_bindings({'0': ['variables.file']}, {'0': text_file(size=1024)}, self.policy)

        self.assertEqual(len(bindings), 1)

    def test_two_entries_targeting_same_variable(self):
        files = {'0': text_file('a.txt'), '1': text_file('b.txt')}
        path_map = {'0': ['variables.file'], '1': ['variables.other.file']}

        with self.assertRaises(ConflictingVariable):
            plan_bindings(path_map, files, self.policy)


class BindFileTest(SimpleTestCase):
    """Test buffering, sniffing and binding"""

    def setUp(self):
        self.policy = UploadPolicy(allowed_types=['text/plain', 'image/png'], max_file_size=1024)

    async def test_binds_all_files(self):
        files = {
            '0': text_file('a.txt'),
            '1': SimpleUploadedFile('b.png', PNG_BYTES, content_type='application/octet-stream'),
        }
        variables = {'first': None, 'second': None}
        bindings = plan_bindings({'0': ['variables.first'], '1': ['variables.second']}, files, self.policy)

        uploads = await bind_uploads(bindings, variables, self.policy)

        self.assertEqual(len(uploads), 2)
        self.assertIsInstance(variables['first'], Upload)
        self.assertIsInstance(variables['second'], Upload)

        first = await variables['first']
        second = await variables['second']
        self.assertEqual(first.file_name, 'a.txt')
        self.assertEqual(first.mime_type, 'text/plain')
        self.assertEqual(first.encoding, 'binary')
        self.assertEqual(first.file_size, 50)
        self.assertEqual(second.mime_type, 'image/png')
        self.assertEqual(second.create_read_stream().read(), PNG_BYTES)

    async def test_one_file_bound_to_several_variables(self):
        variables = {}
        bindings = plan_bindings(
            {'0': ['variables.file', 'variables.backup']},
            {'0': text_file()},
            self.policy,
        )

        await bind_uploads(bindings, variables, self.policy)

        self.assertIs(variables['file'], variables['backup'])

    async def test_disallowed_type_names_allowed_set(self):
        policy = UploadPolicy(allowed_types=['image/png', 'image/jpeg'], max_file_size=1024)
        bindings = plan_bindings({'0': ['variables.file']}, {'0': text_file()}, policy)
        variables = {'file': None}

        with self.assertRaisesMessage(
            DisallowedType,
            'File type text/plain is not allowed. Allowed types: image/jpeg, image/png',
        ):
            await bind_file(bindings[0], variables, policy)
        self.assertIsNone(variables['file'])

    async def test_empty_file_is_invalid(self):
        bindings = plan_bindings({'0': ['variables.file']}, {'0': text_file(size=0)}, self.policy)

        with self.assertRaises(InvalidFile):
            await bind_file(bindings[0], {}, self.policy)

    async def test_first_failure_is_raised(self):
        files = {
            '0': text_file('a.txt'),
            '1': SimpleUploadedFile('b.bin', b'\x13\x37\x00\x00blob', content_type='application/x-custom'),
        }
        bindings = plan_bindings({'0': ['variables.a'], '1': ['variables.b']}, files, self.policy)

        with self.assertRaisesMessage(DisallowedType, 'application/x-custom'):
            await bind_uploads(bindings, {}, self.policy)


class RemoveUnsetVariablesTest(SimpleTestCase):

    def test_falsy_values_are_deleted(self):
        variables = {'file': None, 'other': '', 'note': 'kept', 'count': 3}

        remove_unset_variables(variables)

        self.assertEqual(variables, {'note': 'kept', 'count': 3})
