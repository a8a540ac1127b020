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

from collections import namedtuple

DEFAULT_DOMAIN = 's3.amazonaws.com'
DEFAULT_REGIONS = ('', 'us-standard')
REGION_DOMAIN_FORMAT = 's3-%s.amazonaws.com'
TLS_PORT = 443
PLAIN_PORT = 80

Address = namedtuple('Address', ['host', 'server', 'port', 'secure'])


def resolve_domain(config):
    """
    The storage domain: the configured custom domain, else the endpoint
    for the configured region.
    """
    if config.domain:
        return config.domain
    if (config.region or '') in DEFAULT_REGIONS:
        return DEFAULT_DOMAIN
    return REGION_DOMAIN_FORMAT % config.region


def resolve_host(config, bucket=None):
    """
    Virtual-hosted bucket host, or the bare domain for account-level
    requests.
    """
    domain = resolve_domain(config)
    if bucket:
        return '%s.%s' % (bucket, domain)
    return domain


def is_secure(config):
    if config.secure is not None:
        return config.secure
    return config.port is None or config.port == TLS_PORT


def resolve_port(config):
    """
    The configured port, or None to let the transport use the scheme
    default.
    """
    return config.port


def host_header(config, bucket=None):
    """
    Value for the ``Host`` header. Includes the port only when it is not
    the default for the scheme in use.
    """
    host = resolve_host(config, bucket)
    port = resolve_port(config)
    default_port = TLS_PORT if is_secure(config) else PLAIN_PORT
    if port is not None and port != default_port:
        host = '%s:%d' % (host, port)
    return host


def resolve_address(config, bucket=None):
    host = resolve_host(config, bucket)
    return Address(host=host, server=config.server or host,
                   port=resolve_port(config), secure=is_secure(config))
