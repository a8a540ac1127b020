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
Canonical strings for S3 signature version 2.

Everything here is a pure function of its arguments: the remote service
recomputes the same strings from the request it receives, so the output
must be byte-for-byte reproducible.
"""

from collections import defaultdict
import re

AMZ_HEADER_PREFIX = 'x-amz-'

# Query parameters that are part of the signed resource. Any other query
# parameter is left out of the string to sign.
SIGNED_SUB_RESOURCES = frozenset([
    'acl', 'cors', 'delete', 'lifecycle', 'location', 'logging',
    'notification', 'partNumber', 'policy', 'requestPayment', 'restore',
    'tagging', 'torrent', 'uploadId', 'uploads', 'versionId', 'versioning',
    'versions', 'website',
    'response-cache-control', 'response-content-disposition',
    'response-content-encoding', 'response-content-language',
    'response-content-type', 'response-expires',
])

# Legal in a URI, but the service rejects them unescaped in a key.
_SPECIAL_CHARACTERS_RE = re.compile(r"[!'()*]")
_FOLDED_LINE_RE = re.compile(r'\s*\n\s*')


def ensure_leading_slash(path):
    return path if path.startswith('/') else '/' + path


def remove_leading_slash(path):
    return path[1:] if path.startswith('/') else path


def encode_special_characters(name):
    """
    Percent-encode the characters ``!'()*`` in an object path. All other
    characters are returned unchanged.
    """
    return _SPECIAL_CHARACTERS_RE.sub(
        lambda m: '%%%x' % ord(m.group(0)), name)


def _sub_resource_string(sub_resource, query):
    params = {}
    if sub_resource:
        params[sub_resource] = ''
    if query:
        items = query.items() if hasattr(query, 'items') else query
        for key, value in items:
            if key in SIGNED_SUB_RESOURCES:
                params[key] = '' if value is None else str(value)
    return '&'.join('%s=%s' % (key, value) if value else key
                    for key, value in sorted(params.items()))


def canonicalize_resource(bucket, object_path, sub_resource=None,
                          query=None):
    """
    Build the CanonicalizedResource element of the string to sign.

    :param bucket: bucket name, or '' for account-level requests
    :param object_path: object path within the bucket; '' addresses the
                        bucket itself
    :param sub_resource: a sub-resource such as ``acl`` or ``location``
    :param query: optional mapping (or pairs) of query parameters; only
                  those in :data:`SIGNED_SUB_RESOURCES` are included
    :returns: the canonical resource string, always starting with ``/``
    """
    path = encode_special_characters(object_path or '')
    if path:
        path = ensure_leading_slash(path)
    if bucket:
        resource = '/' + bucket + path
    else:
        resource = path or '/'
    params = _sub_resource_string(sub_resource, query)
    if params:
        resource += '?' + params
    return resource


def canonicalize_headers(headers):
    """
    Build the CanonicalizedAmzHeaders element of the string to sign.

    Only headers starting with ``x-amz-`` take part. Names are lower-cased,
    values stripped, repeated names joined with a comma and the result
    sorted by name, one ``name:value\\n`` line per header.

    :param headers: a mapping or an iterable of (name, value) pairs
    :returns: the canonical header string, '' if no header qualifies
    """
    items = headers.items() if hasattr(headers, 'items') else headers
    amz_headers = defaultdict(list)
    for name, value in items:
        name = name.strip().lower()
        if not name.startswith(AMZ_HEADER_PREFIX):
            continue
        # folded header values are unfolded to a single space
        value = _FOLDED_LINE_RE.sub(' ', str(value)).strip()
        amz_headers[name].append(value)
    return ''.join('%s:%s\n' % (name, ','.join(values))
                   for name, values in sorted(amz_headers.items()))
