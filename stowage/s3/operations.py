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

"""
The operation table.

Each operation is a ``(verb, path, query, headers)`` tuple: the HTTP verb,
a path template (``{key}`` stands for the object key, anything after ``?``
is the sub-resource), the query parameters the caller may pass, and the
``x-amz-*`` headers the caller may pass. A header entry ending in ``*``
allows every header with that prefix. The request assembler is generic
over these tuples; a new sub-resource operation only needs a new entry.
"""

from collections import namedtuple

# The max for multi-object delete, bucket listings, etc.
BUCKET_OPS_MAX = 1000

Operation = namedtuple('Operation', ['verb', 'path', 'query', 'headers'])

ACL_HEADERS = (
    'x-amz-acl', 'x-amz-grant-read', 'x-amz-grant-write',
    'x-amz-grant-read-acp', 'x-amz-grant-write-acp',
    'x-amz-grant-full-control',
)

OBJECT_WRITE_HEADERS = ACL_HEADERS + (
    'x-amz-meta-*', 'x-amz-storage-class', 'x-amz-server-side-encryption',
    'x-amz-website-redirect-location',
)

COPY_HEADERS = OBJECT_WRITE_HEADERS + (
    'x-amz-copy-source', 'x-amz-copy-source-if-*',
    'x-amz-metadata-directive',
)

RESPONSE_OVERRIDES = (
    'response-cache-control', 'response-content-disposition',
    'response-content-encoding', 'response-content-language',
    'response-content-type', 'response-expires',
)

LISTING_QUERY = ('delimiter', 'encoding-type', 'marker', 'max-keys',
                 'prefix')


def _op(verb, path, query=(), headers=()):
    return Operation(verb, path, frozenset(query), tuple(headers))


SERVICE_OPERATIONS = {
    'list_buckets': _op('GET', '/'),
}

BUCKET_OPERATIONS = {
    'head': _op('HEAD', '/'),
    'get': _op('GET', '/', LISTING_QUERY),
    'get_acl': _op('GET', '/?acl'),
    'get_cors': _op('GET', '/?cors'),
    'get_lifecycle': _op('GET', '/?lifecycle'),
    'get_location': _op('GET', '/?location'),
    'get_logging': _op('GET', '/?logging'),
    'get_notification': _op('GET', '/?notification'),
    'get_policy': _op('GET', '/?policy'),
    'get_tagging': _op('GET', '/?tagging'),
    'get_versions': _op('GET', '/?versions', (
        'delimiter', 'encoding-type', 'key-marker', 'max-keys', 'prefix',
        'version-id-marker')),
    'get_request_payment': _op('GET', '/?requestPayment'),
    'get_versioning': _op('GET', '/?versioning'),
    'get_website': _op('GET', '/?website'),
    'get_uploads': _op('GET', '/?uploads', (
        'delimiter', 'encoding-type', 'key-marker', 'max-uploads', 'prefix',
        'upload-id-marker')),
    'put': _op('PUT', '/', headers=ACL_HEADERS),
    'put_acl': _op('PUT', '/?acl', headers=ACL_HEADERS),
    'put_cors': _op('PUT', '/?cors'),
    'put_lifecycle': _op('PUT', '/?lifecycle'),
    'put_policy': _op('PUT', '/?policy'),
    'put_logging': _op('PUT', '/?logging'),
    'put_notification': _op('PUT', '/?notification'),
    'put_tagging': _op('PUT', '/?tagging'),
    'put_request_payment': _op('PUT', '/?requestPayment'),
    'put_versioning': _op('PUT', '/?versioning', headers=('x-amz-mfa',)),
    'put_website': _op('PUT', '/?website'),
    'delete': _op('DELETE', '/'),
    'delete_cors': _op('DELETE', '/?cors'),
    'delete_lifecycle': _op('DELETE', '/?lifecycle'),
    'delete_policy': _op('DELETE', '/?policy'),
    'delete_tagging': _op('DELETE', '/?tagging'),
    'delete_website': _op('DELETE', '/?website'),
    'delete_multiple': _op('POST', '/?delete', headers=('x-amz-mfa',)),
}

BUCKET_ALIASES = {
    'exists': 'head',
    'list': 'get',
    'create': 'put',
    'list_uploads': 'get_uploads',
}

OBJECT_OPERATIONS = {
    'head': _op('HEAD', '/{key}', ('versionId', 'partNumber')),
    'get': _op('GET', '/{key}', ('versionId', 'partNumber') +
               RESPONSE_OVERRIDES),
    'put': _op('PUT', '/{key}', headers=OBJECT_WRITE_HEADERS),
    'copy': _op('PUT', '/{key}', headers=COPY_HEADERS),
    'delete': _op('DELETE', '/{key}', ('versionId',), ('x-amz-mfa',)),
    'get_acl': _op('GET', '/{key}?acl', ('versionId',)),
    'put_acl': _op('PUT', '/{key}?acl', ('versionId',), ACL_HEADERS),
    'get_tagging': _op('GET', '/{key}?tagging', ('versionId',)),
    'put_tagging': _op('PUT', '/{key}?tagging', ('versionId',)),
    'delete_tagging': _op('DELETE', '/{key}?tagging', ('versionId',)),
    'initiate_upload': _op('POST', '/{key}?uploads',
                           headers=OBJECT_WRITE_HEADERS),
    'upload_part': _op('PUT', '/{key}', ('partNumber', 'uploadId')),
    'list_parts': _op('GET', '/{key}', (
        'uploadId', 'max-parts', 'part-number-marker', 'encoding-type')),
    'complete_upload': _op('POST', '/{key}', ('uploadId',)),
    'abort_upload': _op('DELETE', '/{key}', ('uploadId',)),
}

OBJECT_ALIASES = {
    'exists': 'head',
}


def split_template(path, key=None):
    """
    Split an operation's path template into the request path and its
    sub-resource.

    :returns: a tuple of (path, sub_resource); sub_resource may be None
    """
    path, _sep, sub_resource = path.partition('?')
    if '{key}' in path:
        path = path.replace('{key}', key or '')
    return path, sub_resource or None


def header_allowed(operation, name):
    """
    Whether a caller may pass ``name`` to ``operation``. Only ``x-amz-*``
    headers are restricted; ordinary HTTP headers are always allowed.
    """
    name = name.lower()
    if not name.startswith('x-amz-'):
        return True
    for allowed in operation.headers:
        if allowed.endswith('*'):
            if name.startswith(allowed[:-1]):
                return True
        elif name == allowed:
            return True
    return False
