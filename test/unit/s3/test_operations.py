# Copyright (c) 2026 OpenStack Foundation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import unittest

from stowage.s3 import operations
from stowage.s3.canonical import SIGNED_SUB_RESOURCES


class TestOperationTable(unittest.TestCase):

    def _all_operations(self):
        for table in (operations.SERVICE_OPERATIONS,
                      operations.BUCKET_OPERATIONS,
                      operations.OBJECT_OPERATIONS):
            for name, op in table.items():
                yield name, op

    def test_entries_well_formed(self):
        for name, op in self._all_operations():
            self.assertIn(op.verb, ('GET', 'HEAD', 'PUT', 'POST', 'DELETE'),
                          name)
            self.assertTrue(op.path.startswith('/'), name)
            self.assertIsInstance(op.query, frozenset, name)
            self.assertIsInstance(op.headers, tuple, name)
            for header in op.headers:
                self.assertTrue(header.startswith('x-amz-'),
                                '%s: %s' % (name, header))

    def test_sub_resources_are_signed(self):
        for name, op in self._all_operations():
            path, sub_resource = operations.split_template(op.path, 'k')
            if sub_resource:
                self.assertIn(sub_resource, SIGNED_SUB_RESOURCES, name)

    def test_bucket_paths_have_no_key(self):
        for name, op in operations.BUCKET_OPERATIONS.items():
            self.assertNotIn('{key}', op.path, name)
        for name, op in operations.OBJECT_OPERATIONS.items():
            self.assertTrue(op.path.startswith('/{key}'), name)

    def test_logging_sub_resource(self):
        self.assertEqual(operations.BUCKET_OPERATIONS['get_logging'],
                         ('GET', '/?logging', frozenset(), ()))
        self.assertEqual(operations.BUCKET_OPERATIONS['put_logging'].path,
                         '/?logging')

    def test_selected_entries(self):
        ops = operations.BUCKET_OPERATIONS
        self.assertEqual(ops['delete_multiple'].verb, 'POST')
        self.assertEqual(ops['delete_multiple'].path, '/?delete')
        self.assertIn('max-keys', ops['get'].query)
        self.assertIn('max-uploads', ops['get_uploads'].query)
        self.assertEqual(operations.SERVICE_OPERATIONS['list_buckets'],
                         ('GET', '/', frozenset(), ()))
        ops = operations.OBJECT_OPERATIONS
        self.assertEqual(ops['initiate_upload'].path, '/{key}?uploads')
        self.assertEqual(ops['upload_part'].query,
                         frozenset(['partNumber', 'uploadId']))
        self.assertIn('response-content-type', ops['get'].query)
        self.assertIn('x-amz-copy-source', ops['copy'].headers)

    def test_aliases_resolve(self):
        for alias, name in operations.BUCKET_ALIASES.items():
            self.assertIn(name, operations.BUCKET_OPERATIONS, alias)
        for alias, name in operations.OBJECT_ALIASES.items():
            self.assertIn(name, operations.OBJECT_OPERATIONS, alias)


class TestSplitTemplate(unittest.TestCase):

    def test_bucket_root(self):
        self.assertEqual(operations.split_template('/'), ('/', None))
        self.assertEqual(operations.split_template('/?acl'), ('/', 'acl'))

    def test_object(self):
        self.assertEqual(operations.split_template('/{key}', 'a/b.txt'),
                         ('/a/b.txt', None))
        self.assertEqual(
            operations.split_template('/{key}?tagging', 'a/b.txt'),
            ('/a/b.txt', 'tagging'))


class TestHeaderAllowed(unittest.TestCase):

    def setUp(self):
        self.put = operations.OBJECT_OPERATIONS['put']
        self.get = operations.OBJECT_OPERATIONS['get']

    def test_plain_http_headers_always_allowed(self):
        for header in ('Content-Type', 'Content-MD5', 'Range', 'If-Match',
                       'Cache-Control', 'x-object-meta-foo'):
            self.assertTrue(operations.header_allowed(self.get, header),
                            header)

    def test_amz_headers_restricted(self):
        self.assertFalse(operations.header_allowed(self.get, 'x-amz-acl'))
        self.assertTrue(operations.header_allowed(self.put, 'x-amz-acl'))
        self.assertTrue(operations.header_allowed(self.put, 'X-Amz-Acl'))
        self.assertFalse(operations.header_allowed(self.put, 'x-amz-date'))
        self.assertFalse(operations.header_allowed(
            self.put, 'x-amz-copy-source'))

    def test_prefix_wildcard(self):
        self.assertTrue(operations.header_allowed(
            self.put, 'X-Amz-Meta-Author'))
        self.assertFalse(operations.header_allowed(self.put, 'x-amz-met'))
        copy = operations.OBJECT_OPERATIONS['copy']
        self.assertTrue(operations.header_allowed(
            copy, 'x-amz-copy-source-if-match'))
        self.assertTrue(operations.header_allowed(copy, 'x-amz-copy-source'))


if __name__ == '__main__':
    unittest.main()
