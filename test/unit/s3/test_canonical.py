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

from stowage.common.header_key_dict import HeaderKeyDict
from stowage.s3 import canonical


class TestPathHelpers(unittest.TestCase):

    def test_ensure_leading_slash(self):
        self.assertEqual(canonical.ensure_leading_slash('a/b'), '/a/b')
        self.assertEqual(canonical.ensure_leading_slash('/a/b'), '/a/b')
        self.assertEqual(canonical.ensure_leading_slash(''), '/')

    def test_remove_leading_slash(self):
        self.assertEqual(canonical.remove_leading_slash('/a/b'), 'a/b')
        self.assertEqual(canonical.remove_leading_slash('a/b'), 'a/b')
        self.assertEqual(canonical.remove_leading_slash('//a'), '/a')
        self.assertEqual(canonical.remove_leading_slash(''), '')

    def test_encode_special_characters(self):
        self.assertEqual(
            canonical.encode_special_characters("/it's (a) test!*"),
            '/it%27s %28a%29 test%21%2a')
        self.assertEqual(
            canonical.encode_special_characters('/plain/%20path~'),
            '/plain/%20path~')


class TestCanonicalizeResource(unittest.TestCase):

    def test_object(self):
        self.assertEqual(
            canonical.canonicalize_resource('my-bucket', 'file.txt'),
            '/my-bucket/file.txt')
        self.assertEqual(
            canonical.canonicalize_resource('my-bucket', '/file.txt'),
            '/my-bucket/file.txt')

    def test_bucket_sub_resource(self):
        self.assertEqual(
            canonical.canonicalize_resource('my-bucket', '', 'acl'),
            '/my-bucket?acl')
        self.assertEqual(
            canonical.canonicalize_resource('my-bucket', '/', 'acl'),
            '/my-bucket/?acl')

    def test_bucket_root(self):
        self.assertEqual(
            canonical.canonicalize_resource('my-bucket', ''), '/my-bucket')
        self.assertEqual(
            canonical.canonicalize_resource('my-bucket', None), '/my-bucket')

    def test_account_root(self):
        self.assertEqual(canonical.canonicalize_resource('', '/'), '/')
        self.assertEqual(canonical.canonicalize_resource('', ''), '/')

    def test_object_sub_resource(self):
        self.assertEqual(
            canonical.canonicalize_resource('b', 'dir/o.txt', 'tagging'),
            '/b/dir/o.txt?tagging')

    def test_special_characters_in_path_only(self):
        self.assertEqual(
            canonical.canonicalize_resource('b', "o(1)!.txt"),
            '/b/o%281%29%21.txt')

    def test_query_filtered_and_sorted(self):
        resource = canonical.canonicalize_resource(
            'b', 'o', 'acl', {'versionId': '3', 'prefix': 'x',
                              'response-content-type': 'text/plain',
                              'max-keys': '10'})
        self.assertEqual(
            resource,
            '/b/o?acl&response-content-type=text/plain&versionId=3')

    def test_query_pairs_and_empty_values(self):
        resource = canonical.canonicalize_resource(
            'b', 'o', None, [('uploads', ''), ('foo', 'bar')])
        self.assertEqual(resource, '/b/o?uploads')
        resource = canonical.canonicalize_resource(
            'b', 'o', None, {'partNumber': 2, 'uploadId': 'abc'})
        self.assertEqual(resource, '/b/o?partNumber=2&uploadId=abc')

    def test_unsigned_query_ignored(self):
        self.assertEqual(
            canonical.canonicalize_resource(
                'b', '', None, {'prefix': 'a', 'marker': 'b'}),
            '/b')

    def test_idempotent(self):
        args = ('my-bucket', 'a/b.txt', 'acl', {'versionId': '1'})
        self.assertEqual(canonical.canonicalize_resource(*args),
                         canonical.canonicalize_resource(*args))


class TestCanonicalizeHeaders(unittest.TestCase):

    def test_sorted_and_lowered(self):
        self.assertEqual(
            canonical.canonicalize_headers(
                {'X-Amz-Meta-Foo': 'b', 'x-amz-meta-bar': 'a'}),
            'x-amz-meta-bar:a\nx-amz-meta-foo:b\n')

    def test_only_amz_headers(self):
        headers = HeaderKeyDict({
            'Content-Type': 'text/plain',
            'Date': 'Thu, 01 Jan 1970 00:00:00 GMT',
            'X-Amz-Acl': 'public-read',
            'X-Object-Meta-Foo': 'bar',
        })
        self.assertEqual(canonical.canonicalize_headers(headers),
                         'x-amz-acl:public-read\n')

    def test_empty(self):
        self.assertEqual(canonical.canonicalize_headers({}), '')
        self.assertEqual(
            canonical.canonicalize_headers({'Content-Length': '0'}), '')

    def test_values_stripped_and_unfolded(self):
        self.assertEqual(
            canonical.canonicalize_headers(
                {'x-amz-meta-a': '  spaced  ',
                 'x-amz-meta-b': 'folded\n   value'}),
            'x-amz-meta-a:spaced\nx-amz-meta-b:folded value\n')

    def test_duplicates_joined(self):
        self.assertEqual(
            canonical.canonicalize_headers([
                ('X-Amz-Meta-Name', 'one'),
                ('x-amz-date', 'today'),
                ('x-amz-meta-name', ' two ')]),
            'x-amz-date:today\nx-amz-meta-name:one,two\n')

    def test_sorted_bytewise(self):
        self.assertEqual(
            canonical.canonicalize_headers(
                {'x-amz-meta-b': '1', 'x-amz-meta-B2': '2',
                 'x-amz-meta-a-b': '3', 'x-amz-meta-a': '4'}),
            'x-amz-meta-a:4\nx-amz-meta-a-b:3\nx-amz-meta-b:1\n'
            'x-amz-meta-b2:2\n')
