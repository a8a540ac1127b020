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
Print a signed S3 request, or a pre-signed URL, without sending it.

Credentials come from the [stowage] section of a config file, or from
--access-key and --secret-key.
"""

import argparse
import sys
import time

from stowage.common.exceptions import ConfigurationError, ValidationError
from stowage.common.utils import get_logger, readconf
from stowage.s3.client import ClientConfig, RootClient
from stowage.s3.operations import BUCKET_ALIASES, BUCKET_OPERATIONS, \
    OBJECT_ALIASES, OBJECT_OPERATIONS, SERVICE_OPERATIONS

EXIT_ERROR = 1

# hand-written methods whose arguments the command line cannot express
UNSUPPORTED_OPERATIONS = frozenset(['copy', 'delete_multiple'])


def _parse_pairs(values, what):
    pairs = {}
    for value in values or ():
        name, sep, val = value.partition(':' if what == 'header' else '=')
        if not sep or not name.strip():
            raise ValueError('Invalid %s %r' % (what, value))
        pairs[name.strip()] = val.strip()
    return pairs


def build_parser():
    parser = argparse.ArgumentParser(
        prog='stowage-sign-request', description=__doc__)
    parser.add_argument('operation',
                        help="operation name, e.g. 'get', 'put_acl' or "
                             "'list_buckets'; with --expires, the verb "
                             "to sign the URL for")
    parser.add_argument('bucket', nargs='?',
                        help='bucket name (omit for list_buckets)')
    parser.add_argument('key', nargs='?', help='object key')
    parser.add_argument('-c', '--config', help='path to a config file')
    parser.add_argument('--section', default='stowage',
                        help='config file section (default: %(default)s)')
    parser.add_argument('--access-key')
    parser.add_argument('--secret-key')
    parser.add_argument('--region')
    parser.add_argument('--domain')
    parser.add_argument('-H', '--header', action='append', default=[],
                        help="request header as 'Name: value'")
    parser.add_argument('-q', '--query', action='append', default=[],
                        help="query parameter as 'name=value'")
    parser.add_argument('--expires', type=int, metavar='SECONDS',
                        help='print a pre-signed URL valid for SECONDS')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log request assembly to stderr')
    return parser


def _load_config(args):
    options = {}
    if args.config:
        try:
            options.update(readconf(args.config, args.section))
        except (IOError, ValueError) as err:
            raise ConfigurationError(str(err))
    for name in ('access_key', 'secret_key', 'region', 'domain'):
        value = getattr(args, name)
        if value:
            options[name] = value
    if args.verbose:
        options['log_level'] = 'DEBUG'
    return ClientConfig(options)


def _select(client, args):
    if args.operation in UNSUPPORTED_OPERATIONS:
        raise ValidationError('%s is not supported from the command line'
                              % args.operation)
    if args.bucket is None:
        if args.operation not in SERVICE_OPERATIONS:
            raise ValidationError('%s needs a bucket' % args.operation)
        return getattr(client, args.operation)
    bucket = client.bucket(args.bucket)
    if args.key is None:
        if args.operation not in BUCKET_OPERATIONS and \
                args.operation not in BUCKET_ALIASES:
            raise ValidationError('Unknown bucket operation %s'
                                  % args.operation)
        return getattr(bucket, args.operation)
    if args.operation not in OBJECT_OPERATIONS and \
            args.operation not in OBJECT_ALIASES:
        raise ValidationError('Unknown object operation %s'
                              % args.operation)
    return getattr(bucket.object(args.key), args.operation)


def main(args=None):
    parser = build_parser()
    args = parser.parse_args(args)
    try:
        headers = _parse_pairs(args.header, 'header')
        query = _parse_pairs(args.query, 'query')
    except ValueError as err:
        parser.error(str(err))

    try:
        config = _load_config(args)
        logger = get_logger(config, log_route='stowage',
                            log_to_console=args.verbose)
        client = RootClient(config, logger=logger)
        if args.expires is not None:
            if not (args.bucket and args.key):
                raise ValidationError('--expires needs a bucket and a key')
            print(client.bucket(args.bucket).object(args.key).signed_url(
                int(time.time()) + args.expires,
                verb=args.operation, query=query))
            return 0
        operation = _select(client, args)
        if args.bucket is None:
            req = operation(headers=headers)
        else:
            req = operation(query=query, headers=headers)
    except (ConfigurationError, ValidationError, ValueError) as err:
        print('Error: %s' % err, file=sys.stderr)
        return EXIT_ERROR

    print('%s %s' % (req.method, req.url))
    for name, value in req.headers.items():
        print('%s: %s' % (name, value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
