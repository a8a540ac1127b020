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
The transport: helpers to open HTTP(S) connections with eventlet's green
``http.client`` and send a signed RequestDescriptor over them.

Nothing here retries. Transport errors are logged, when a logger is given,
and raised to the caller unchanged.
"""

import logging
import socket
import time

from eventlet import Timeout
from eventlet.green.http.client import HTTPConnection, HTTPSConnection

CHUNK_SIZE = 65536


class BufferedHTTPConnection(HTTPConnection):
    """HTTPConnection class that logs how long each request took"""

    def connect(self):
        self._connected_time = time.time()
        ret = HTTPConnection.connect(self)
        self.sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        return ret

    def putrequest(self, method, url, skip_host=0, skip_accept_encoding=0):
        '''Send a request to the server.

        :param method: specifies an HTTP request method, e.g. 'GET'.
        :param url: specifies the object being requested, e.g. '/index.html'.
        :param skip_host: if True does not add automatically a 'Host:' header
        :param skip_accept_encoding: if True does not add automatically an
           'Accept-Encoding:' header
        '''
        self._method = method
        self._path = url
        return HTTPConnection.putrequest(self, method, url, skip_host,
                                         skip_accept_encoding)

    def getresponse(self):
        response = HTTPConnection.getresponse(self)
        logging.debug("HTTP PERF: %(time).5f seconds to %(method)s "
                      "%(host)s:%(port)s %(path)s)",
                      {'time': time.time() - self._connected_time,
                       'method': self._method, 'host': self.host,
                       'port': self.port, 'path': self._path})
        return response


class BufferedHTTPSConnection(HTTPSConnection, BufferedHTTPConnection):
    """HTTPSConnection class that logs how long each request took"""


def http_connect_raw(ipaddr, port, method, path, headers=None, ssl=False,
                     timeout=None):
    """
    Helper function to create an HTTPConnection object and send the
    request line and headers. If ssl is set True, an HTTPS connection is
    used.

    :param ipaddr: address to connect to
    :param port: port to connect to; None for the scheme default
    :param method: HTTP method to request ('GET', 'PUT', 'POST', etc.)
    :param path: request path, already quoted, including any query string
    :param headers: dictionary of headers
    :param ssl: set True if SSL should be used (default: False)
    :param timeout: socket timeout in seconds
    :returns: HTTPConnection object
    """
    if not port:
        port = 443 if ssl else 80
    if ssl:
        conn = BufferedHTTPSConnection(ipaddr, port, timeout=timeout)
    else:
        conn = BufferedHTTPConnection(ipaddr, port, timeout=timeout)
    conn.path = path
    conn.putrequest(method, path, skip_host=(headers and 'Host' in headers),
                    skip_accept_encoding=True)
    if headers:
        for header, value in headers.items():
            conn.putheader(header, str(value))
    conn.endheaders()
    return conn


def send_request(descriptor, timeout=None, logger=None):
    """
    Send a RequestDescriptor and return the response.

    The body, if any, is sent as is: bytes in one piece, a file-like object
    in CHUNK_SIZE reads. The descriptor's headers must already declare the
    length. On failure the connection is closed and the error re-raised.

    :param descriptor: a stowage.s3.request.RequestDescriptor
    :param timeout: socket timeout in seconds
    :param logger: optional StowageLogAdapter to report a failed send to
    :returns: an http.client.HTTPResponse
    """
    conn = None
    try:
        conn = http_connect_raw(
            descriptor.server, descriptor.port, descriptor.method,
            descriptor.path, descriptor.headers, ssl=descriptor.secure,
            timeout=timeout)
        body = descriptor.body
        if body is not None:
            if hasattr(body, 'read'):
                chunk = body.read(CHUNK_SIZE)
                while chunk:
                    conn.send(chunk)
                    chunk = body.read(CHUNK_SIZE)
            elif body:
                conn.send(body)
        return conn.getresponse()
    except (Exception, Timeout):
        if conn is not None:
            conn.close()
        if logger:
            # no query string, it may hold a signature
            logger.exception('ERROR sending %s to %s:%s %s',
                             descriptor.method, descriptor.server,
                             descriptor.port or '-',
                             descriptor.path.partition('?')[0])
        raise
