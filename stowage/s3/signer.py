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
HMAC-SHA1 request signing (S3 signature version 2).
"""

import base64
from hashlib import sha1
import hmac

from stowage.common.exceptions import SigningError
from stowage.s3.canonical import canonicalize_headers

AUTH_SCHEME = 'AWS'


def _to_bytes(value, what):
    if isinstance(value, bytes):
        return value
    try:
        return value.encode('utf8')
    except UnicodeEncodeError as err:
        raise SigningError('Unable to encode %s for signing: %s'
                           % (what, err))


def string_to_sign(verb, content_md5, content_type, date, amz_headers,
                   resource):
    """
    Create 'StringToSign' value in Amazon terminology for v2.

    The field order is fixed; absent optional values are left empty.

    :param verb: HTTP method
    :param content_md5: Content-MD5 header value or None
    :param content_type: Content-Type header value or None
    :param date: Date header value, or the Expires epoch for a pre-signed
                 URL
    :param amz_headers: the headers to canonicalize (see
                        :func:`canonicalize_headers`)
    :param resource: the canonical resource string
    """
    return '%s\n%s\n%s\n%s\n%s%s' % (
        verb, (content_md5 or '').strip(), (content_type or '').strip(),
        date, canonicalize_headers(amz_headers), resource)


def sign(secret_key, to_sign):
    """
    Sign a canonical string.

    :param secret_key: the secret access key
    :param to_sign: the string to sign
    :returns: base64 encoded HMAC-SHA1 digest, as a native string
    :raises SigningError: if either argument cannot be UTF-8 encoded
    """
    digest = hmac.new(_to_bytes(secret_key, 'secret key'),
                      _to_bytes(to_sign, 'string to sign'), sha1).digest()
    return base64.b64encode(digest).decode('ascii')


def build_authorization_header(access_key, signature):
    return '%s %s:%s' % (AUTH_SCHEME, access_key, signature)


def query_string_signature(secret_key, verb, expires, amz_headers, resource,
                           content_md5=None, content_type=None):
    """
    Signature for query-string authentication; the ``Expires`` epoch
    stands in for the date.
    """
    return sign(secret_key, string_to_sign(
        verb, content_md5, content_type, str(int(expires)), amz_headers,
        resource))
