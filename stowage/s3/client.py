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
The scope model.

A :class:`RootClient` holds the configuration and offers the
account-level operations. ``RootClient.bucket()`` derives a
:class:`BucketHandle` that can only issue bucket-level operations, and
``BucketHandle.object()`` an :class:`ObjectHandle` for object-level ones.
Each handle class gets one method per entry of its operation table when
the class is defined; every method returns a signed RequestDescriptor.

Example::

    client = RootClient(ClientConfig(access_key='AKIA...', secret_key='...'))
    photos = client.bucket('photos')
    req = photos.get(query={'prefix': '2012/', 'max-keys': 100})
    req = photos.object('2012/puppy.jpg').put(
        headers={'Content-Type': 'image/jpeg'}, body=data)
"""

from collections import namedtuple
import logging
import re

from stowage.common.exceptions import ConfigurationError
from stowage.common.utils import StowageLogAdapter, config_port_value, \
    config_true_value, get_prefixed_logger, readconf
from stowage.s3.address import DEFAULT_REGIONS, resolve_host
from stowage.s3.etree import build_create_bucket_body, build_delete_body
from stowage.s3.operations import BUCKET_ALIASES, BUCKET_OPERATIONS, \
    OBJECT_ALIASES, OBJECT_OPERATIONS, SERVICE_OPERATIONS
from stowage.s3.request import build_request, build_signed_url, \
    content_md5

MAX_KEY_LENGTH = 1024
CONF_SECTION = 'stowage'


class Credentials(namedtuple('Credentials', [
        'access_key', 'secret_key', 'session_token'])):
    __slots__ = ()

    def __new__(cls, access_key, secret_key, session_token=None):
        return super(Credentials, cls).__new__(
            cls, access_key, secret_key, session_token)

    def __repr__(self):
        return 'Credentials(access_key=%r, secret_key=<redacted>, ' \
            'session_token=%s)' % (
                self.access_key,
                '<redacted>' if self.session_token else None)


class ClientConfig(dict):
    """
    Read-only client configuration.

    Accepts the options as keyword arguments or as a dict, such as a
    section returned by :func:`readconf`; string values are coerced.
    Options not listed in DEFAULTS (for example the ``log_*`` options) are
    kept so the same dict can configure logging.

    :raises ConfigurationError: if the access key or secret key is missing,
                                or an option has an invalid value
    """
    DEFAULTS = {
        'region': None,
        'domain': None,
        'port': None,
        'secure': None,
        'server': None,
    }

    def __init__(self, base=None, **kwargs):
        options = dict(self.DEFAULTS)
        if base is not None:
            options.update(base)
        options.update(kwargs)

        credentials = options.pop('credentials', None)
        access_key = options.pop('access_key', None)
        secret_key = options.pop('secret_key', None)
        session_token = options.pop('session_token', None) or None
        if credentials is None:
            if not access_key:
                raise ConfigurationError('"access_key" required')
            if not secret_key:
                raise ConfigurationError('"secret_key" required')
            credentials = Credentials(access_key, secret_key, session_token)
        elif not credentials.access_key or not credentials.secret_key:
            raise ConfigurationError(
                'credentials need both an access key and a secret key')
        options['credentials'] = credentials

        try:
            options['port'] = config_port_value(options['port'])
        except ValueError as err:
            raise ConfigurationError('Invalid port: %s' % err)
        if options['secure'] is not None and options['secure'] != '':
            options['secure'] = config_true_value(options['secure'])
        else:
            options['secure'] = None
        for name in ('region', 'domain', 'server'):
            options[name] = options[name] or None
        dict.__init__(self, options)

    @classmethod
    def from_conf(cls, conf_path, section_name=CONF_SECTION):
        """
        Build a config from a section of an ini-style config file.

        :raises ConfigurationError: if the file or section can't be read
        """
        try:
            conf = readconf(conf_path, section_name)
        except (IOError, ValueError) as err:
            raise ConfigurationError(str(err))
        return cls(conf)

    def __getattr__(self, name):
        if name not in self:
            raise AttributeError("No attribute '%s'" % name)
        return self[name]

    def _read_only(self, *args, **kwargs):
        raise TypeError('%s is read-only' % self.__class__.__name__)

    __setattr__ = __delattr__ = _read_only
    __setitem__ = __delitem__ = _read_only
    clear = pop = popitem = setdefault = update = _read_only

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, ', '.join(
            '%s=%r' % item for item in sorted(self.items())))


def validate_bucket_name(name):
    """
    Validates the name of the bucket against the DNS-compliant S3 naming
    rules. True is valid, False is invalid.
    """
    if len(name) < 3 or len(name) > 63 or not name[0].isalnum():
        # Bucket names should be between 3 and 63 characters long
        # Bucket names must start with a letter or a number
        return False
    elif '.-' in name or '-.' in name or '..' in name or \
            not name[-1].isalnum():
        # Bucket names cannot contain dashes next to periods
        # Bucket names cannot contain two adjacent periods
        # Bucket names must end with a letter or a number
        return False
    elif re.match(r"^(([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])\.)"
                  r"{3}([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])$",
                  name):
        # Bucket names cannot be formatted as an IP Address
        return False
    elif not re.match("^[-.a-z0-9]*$", name):
        # Bucket names can contain lowercase letters, numbers, and hyphens.
        return False
    return True


def _scoped_operation(name, operation, scope):
    def method(self, query=None, headers=None, body=None, date=None):
        return self._request(operation, name, query=query, headers=headers,
                             body=body, date=date)
    method.__name__ = name
    method.__doc__ = '%s %s on the %s.' % (operation.verb, operation.path,
                                           scope)
    return method


def _install_operations(cls, operations, aliases, scope):
    for name, operation in operations.items():
        # hand-written methods take precedence
        if name not in cls.__dict__:
            setattr(cls, name, _scoped_operation(name, operation, scope))
    for alias, name in aliases.items():
        setattr(cls, alias, getattr(cls, name))
    return cls


class RootClient(object):
    """
    Account-level client.

    :param config: a ClientConfig, or a dict of options to build one from
    :param logger: optional logger; by default the ``stowage`` logger is
                   used as configured by the application
    """

    def __init__(self, config, logger=None):
        if not isinstance(config, ClientConfig):
            config = ClientConfig(config)
        self.config = config
        self.host = resolve_host(config)
        self.logger = logger or StowageLogAdapter(
            logging.getLogger('stowage'), 'stowage')

    def list_buckets(self, headers=None, date=None):
        return build_request(
            self.config, SERVICE_OPERATIONS['list_buckets'], headers=headers,
            date=date, name='list_buckets', logger=self.logger)

    def create_bucket(self, bucket_id, headers=None, body=None, date=None):
        """
        PUT a new bucket. Outside the default region the location
        constraint body is supplied unless a body is given.
        """
        handle = self.bucket(bucket_id)
        region = self.config.region or ''
        if body is None and region not in DEFAULT_REGIONS:
            body = build_create_bucket_body(region)
        return handle.put(headers=headers, body=body, date=date)

    def bucket(self, bucket_id):
        """
        Derive a handle scoped to one bucket.

        :raises ConfigurationError: if the bucket name is not all lower
                                    case or is otherwise not a valid name
        """
        if bucket_id != bucket_id.lower():
            raise ConfigurationError(
                'Bucket names must be all lower case: %r' % bucket_id)
        if not validate_bucket_name(bucket_id):
            raise ConfigurationError('Invalid bucket name: %r' % bucket_id)
        return BucketHandle(self.config, bucket_id, logger=self.logger)


class BucketHandle(object):
    """
    Operations on one bucket. Holds nothing but the shared configuration,
    the bucket name and its virtual host, so a handle can be kept and
    reused indefinitely. Use :meth:`RootClient.bucket` to create one.
    """

    def __init__(self, config, name, logger=None):
        self.config = config
        self.name = name
        self.host = resolve_host(config, name)
        self.logger = get_prefixed_logger(
            logger or StowageLogAdapter(logging.getLogger('stowage'),
                                        'stowage'), '%s: ' % name)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.name)

    def _request(self, operation, name, **kwargs):
        return build_request(self.config, operation, bucket=self.name,
                             name=name, logger=self.logger, **kwargs)

    def delete_multiple(self, keys, quiet=False, headers=None, date=None):
        """
        Delete up to BUCKET_OPS_MAX objects in one request.

        :param keys: object keys, or (key, version_id) tuples
        :raises ValidationError: if there are more keys than one request
                                 may carry; see ``request.chunk_keys``
        """
        body = build_delete_body(keys, quiet=quiet)
        headers = dict(headers or {})
        headers['Content-MD5'] = content_md5(body)
        headers['Content-Type'] = 'application/xml'
        return self._request(BUCKET_OPERATIONS['delete_multiple'],
                             'delete_multiple', headers=headers, body=body,
                             date=date)

    def object(self, key):
        """
        Derive a handle scoped to one object of this bucket.

        :raises ConfigurationError: if the key is empty or too long
        """
        if not key or not key.lstrip('/'):
            raise ConfigurationError('An object key is required')
        if len(key.encode('utf8')) > MAX_KEY_LENGTH:
            raise ConfigurationError(
                'Object keys are limited to %d bytes' % MAX_KEY_LENGTH)
        return ObjectHandle(self, key)


class ObjectHandle(object):
    """
    Operations on one object. Use :meth:`BucketHandle.object` to create
    one.
    """

    # verbs a pre-signed URL can be made for
    SIGNED_URL_OPERATIONS = {
        'GET': 'get', 'HEAD': 'head', 'PUT': 'put', 'DELETE': 'delete'}

    def __init__(self, bucket, key):
        self.bucket = bucket
        self.key = key
        self.config = bucket.config
        self.logger = bucket.logger

    def __repr__(self):
        return '%s(%r, %r)' % (self.__class__.__name__, self.bucket.name,
                               self.key)

    def _request(self, operation, name, **kwargs):
        return build_request(self.config, operation, bucket=self.bucket.name,
                             key=self.key, name=name, logger=self.logger,
                             **kwargs)

    def copy_from(self, source_bucket, source_key, headers=None, date=None):
        """
        Server-side copy of ``source_bucket``/``source_key`` onto this
        object.
        """
        return self._request(OBJECT_OPERATIONS['copy'], 'copy',
                             headers=headers, date=date,
                             copy_source=(source_bucket, source_key))

    def signed_url(self, expires, verb='GET', query=None):
        """
        A pre-signed URL for this object.

        :param expires: epoch seconds or aware datetime after which the URL
                        is refused
        :param verb: one of GET, HEAD, PUT or DELETE
        :raises ValidationError: for a query parameter the operation does
                                 not support
        """
        name = self.SIGNED_URL_OPERATIONS.get(verb.upper())
        if name is None:
            raise ValueError('Cannot sign a URL for %s' % verb)
        return build_signed_url(
            self.config, OBJECT_OPERATIONS[name], self.bucket.name, self.key,
            expires, query=query, name=name)


# the copy operation needs a source; it is only reachable via copy_from
_install_operations(BucketHandle, BUCKET_OPERATIONS, BUCKET_ALIASES,
                    'bucket')
_install_operations(ObjectHandle, dict(
    (name, op) for name, op in OBJECT_OPERATIONS.items() if name != 'copy'),
    OBJECT_ALIASES, 'object')
