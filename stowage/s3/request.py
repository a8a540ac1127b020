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
Request assembly: turns an operation from the table plus the caller's
arguments into a signed :class:`RequestDescriptor`. Nothing here performs
I/O; sending the descriptor is the transport's job.
"""

import base64
from collections import namedtuple
import datetime
from email.utils import formatdate
import hashlib
import time
from urllib.parse import quote

from stowage.common.exceptions import ValidationError
from stowage.common.header_key_dict import HeaderKeyDict, merge_headers
from stowage.s3.address import PLAIN_PORT, TLS_PORT, host_header, \
    resolve_address
from stowage.s3.canonical import canonicalize_resource, \
    encode_special_characters, remove_leading_slash
from stowage.s3.operations import BUCKET_OPS_MAX, header_allowed, \
    split_template
from stowage.s3.signer import build_authorization_header, \
    query_string_signature, sign, string_to_sign

# headers whose values are computed here and never taken from the caller
COMPUTED_HEADERS = ('Date', 'Host', 'Authorization')

# query parameters that set a page size for listings
PAGE_SIZE_PARAMS = ('max-keys', 'max-uploads', 'max-parts')

SECURITY_TOKEN_HEADER = 'x-amz-security-token'

# characters left alone when quoting an object path; the special
# characters are escaped separately by encode_special_characters
_PATH_SAFE = "/!'()*"


class RequestDescriptor(namedtuple('RequestDescriptor', [
        'method', 'host', 'server', 'port', 'secure', 'path', 'headers',
        'body'])):
    """
    Everything the transport needs to send one request.

    ``host`` is the virtual host the request was signed for; ``server`` is
    the address to connect to (usually the same). ``port`` is None when
    the scheme default applies. ``headers`` is a HeaderKeyDict owned by
    this descriptor.
    """
    __slots__ = ()

    @property
    def url(self):
        scheme = 'https' if self.secure else 'http'
        default_port = TLS_PORT if self.secure else PLAIN_PORT
        netloc = self.server
        if self.port is not None and self.port != default_port:
            netloc = '%s:%d' % (netloc, self.port)
        return '%s://%s%s' % (scheme, netloc, self.path)


def http_date(when=None):
    """
    Format a time as an RFC 1123 date for the ``Date`` header.

    :param when: epoch seconds or an aware datetime; defaults to now
    """
    if when is None:
        when = time.time()
    elif isinstance(when, datetime.datetime):
        when = when.timestamp()
    return formatdate(when, usegmt=True)


def content_md5(body):
    """Base64 encoded MD5 digest of a request body, for ``Content-MD5``."""
    if isinstance(body, str):
        body = body.encode('utf8')
    digest = hashlib.md5(body, usedforsecurity=False).digest()
    return base64.b64encode(digest).decode('ascii')


def get_copy_headers(source_bucket, source_key, headers=None):
    """
    Headers for a server-side copy.

    ``x-amz-copy-source`` and ``Content-Length`` always take the values
    computed here; ``Expect: 100-continue`` is only a default the caller
    may override.

    :param source_bucket: bucket holding the source object
    :param source_key: key of the source object
    :param headers: the caller's headers; not modified
    :returns: a new HeaderKeyDict
    """
    return merge_headers(
        {'Expect': '100-continue'},
        headers,
        {'x-amz-copy-source': '/%s/%s' % (
            source_bucket, quote(remove_leading_slash(source_key),
                                 safe=_PATH_SAFE)),
         # copies carry no body
         'Content-Length': '0'})


def _validate(operation, name, query, headers):
    for param in query:
        if param not in operation.query:
            raise ValidationError(
                'Operation %s does not support the query parameter %r'
                % (name, param), name)
    for param in PAGE_SIZE_PARAMS:
        if query.get(param) is None:
            continue
        try:
            page_size = int(query[param])
        except (TypeError, ValueError):
            raise ValidationError('%s must be an integer, not %r'
                                  % (param, query[param]), name)
        if not 0 <= page_size <= BUCKET_OPS_MAX:
            raise ValidationError('%s must be between 0 and %d, got %d'
                                  % (param, BUCKET_OPS_MAX, page_size), name)
    for header in headers:
        if not header_allowed(operation, header):
            raise ValidationError(
                'Operation %s does not support the header %r'
                % (name, header), name)


def _query_string(sub_resource, query):
    params = [sub_resource] if sub_resource else []
    for key, value in query.items():
        if value is None or value == '':
            params.append(key)
        else:
            params.append('%s=%s' % (key, quote(str(value), safe='')))
    return '&'.join(params)


def build_request(config, operation, bucket=None, key=None, query=None,
                  headers=None, body=None, copy_source=None, date=None,
                  name=None, logger=None):
    """
    Assemble and sign a request.

    :param config: the client's ClientConfig
    :param operation: an Operation tuple from the operation table
    :param bucket: bucket name, or None for account-level requests
    :param key: object key for object-level operations
    :param query: dict of query parameters; checked against the operation
    :param headers: the caller's headers; not modified
    :param body: request body (bytes, str or a file-like object)
    :param copy_source: (bucket, key) of the source of a server-side copy
    :param date: time to sign with (epoch or datetime); defaults to now.
                 It is read once and used for both the Date header and
                 the signature.
    :param name: operation name, used in error messages
    :param logger: optional logger for debug output
    :returns: a RequestDescriptor
    :raises ValidationError: if the caller passed a query parameter or
                             header the operation does not support
    """
    name = name or operation.verb
    query = dict(query or {})
    if copy_source is not None:
        headers = get_copy_headers(copy_source[0], copy_source[1], headers)
    else:
        headers = HeaderKeyDict(headers)
    _validate(operation, name, query, headers)
    for header in COMPUTED_HEADERS:
        headers.pop(header, None)

    date = http_date(date)
    address = resolve_address(config, bucket)

    path, sub_resource = split_template(
        operation.path, remove_leading_slash(key or ''))
    path = quote(path, safe=_PATH_SAFE)
    resource = canonicalize_resource(bucket or '', path, sub_resource, query)
    request_path = encode_special_characters(path)
    query_string = _query_string(sub_resource, query)
    if query_string:
        request_path += '?' + query_string

    if isinstance(body, str):
        body = body.encode('utf8')
    if isinstance(body, bytes) and 'Content-Length' not in headers:
        headers['Content-Length'] = len(body)

    headers['Date'] = date
    headers['Host'] = host_header(config, bucket)
    if config.credentials.session_token:
        headers[SECURITY_TOKEN_HEADER] = config.credentials.session_token

    to_sign = string_to_sign(
        operation.verb, headers.get('Content-MD5'),
        headers.get('Content-Type'), date, headers.items(), resource)
    headers['Authorization'] = build_authorization_header(
        config.credentials.access_key,
        sign(config.credentials.secret_key, to_sign))
    if logger:
        logger.debug('%s %s%s (resource %s)', operation.verb, address.host,
                     request_path, resource)

    return RequestDescriptor(
        method=operation.verb, host=address.host, server=address.server,
        port=address.port, secure=address.secure, path=request_path,
        headers=headers, body=body)


def chunk_keys(keys, size=BUCKET_OPS_MAX):
    """
    Split keys into lists of at most ``size`` entries, for callers that
    have more keys than one multi-object delete accepts.
    """
    if not 0 < size <= BUCKET_OPS_MAX:
        raise ValidationError('Batch size must be between 1 and %d'
                              % BUCKET_OPS_MAX)
    keys = list(keys)
    return [keys[i:i + size] for i in range(0, len(keys), size)]


def build_signed_url(config, operation, bucket, key, expires, query=None,
                     name=None):
    """
    Build a pre-signed URL (query string authentication).

    :param config: the client's ClientConfig
    :param operation: an Operation tuple from the operation table
    :param bucket: bucket name
    :param key: object key
    :param expires: when the URL stops working, as epoch seconds or an
                    aware datetime
    :param query: extra query parameters; checked against the operation
    :returns: the URL as a string
    :raises ValidationError: if a query parameter is not supported
    """
    name = name or operation.verb
    query = dict(query or {})
    _validate(operation, name, query, ())
    if isinstance(expires, datetime.datetime):
        expires = expires.timestamp()
    expires = int(expires)

    path, sub_resource = split_template(
        operation.path, remove_leading_slash(key or ''))
    path = quote(path, safe=_PATH_SAFE)
    resource = canonicalize_resource(bucket or '', path, sub_resource, query)

    amz_headers = {}
    token = config.credentials.session_token
    if token:
        amz_headers[SECURITY_TOKEN_HEADER] = token
    signature = query_string_signature(
        config.credentials.secret_key, operation.verb, expires, amz_headers,
        resource)

    auth_query = dict(query)
    auth_query['AWSAccessKeyId'] = config.credentials.access_key
    auth_query['Expires'] = expires
    auth_query['Signature'] = signature
    if token:
        auth_query[SECURITY_TOKEN_HEADER] = token
    address = resolve_address(config, bucket)
    descriptor = RequestDescriptor(
        method=operation.verb, host=address.host, server=address.server,
        port=address.port, secure=address.secure,
        path='%s?%s' % (encode_special_characters(path),
                        _query_string(sub_resource, auth_query)),
        headers=HeaderKeyDict(), body=None)
    return descriptor.url
