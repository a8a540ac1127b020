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

import errno
import http.client
import logging
from logging.handlers import SysLogHandler
import os
import socket
import stat
import sys

import eventlet
from eventlet.green.http import client as green_http_client


class StowageLogAdapter(logging.LoggerAdapter):
    """
    A LogAdapter that modifies the adapted ``Logger`` instance
    in the following ways:

    * Adds the server attribute to the ``extras`` dict of every record.
    * Adds the given prefix to the start of each log message.
    * Logs network errors raised by the transport without a traceback.
    """

    def __init__(self, logger, server, prefix=''):
        logging.LoggerAdapter.__init__(self, logger, {})
        self.prefix = prefix
        self.server = server

    def process(self, msg, kwargs):
        kwargs['extra'] = {'server': self.server}
        msg = '%s%s' % (self.prefix, msg)
        return msg, kwargs

    def _exception(self, msg, *args, **kwargs):
        logging.LoggerAdapter.exception(self, msg, *args, **kwargs)

    def exception(self, msg, *args, **kwargs):
        exc = sys.exc_info()[1]
        call = self.error
        emsg = ''
        if isinstance(exc, (http.client.BadStatusLine,
                            green_http_client.BadStatusLine)):
            emsg = repr(exc)
        elif isinstance(exc, OSError):
            if exc.errno == errno.ECONNREFUSED:
                emsg = 'Connection refused'
            elif exc.errno == errno.ECONNRESET:
                emsg = 'Connection reset'
            elif exc.errno == errno.EHOSTUNREACH:
                emsg = 'Host unreachable'
            elif exc.errno == errno.ENETUNREACH:
                emsg = 'Network unreachable'
            elif exc.errno == errno.ETIMEDOUT:
                emsg = 'Connection timeout'
            elif exc.errno == errno.EPIPE:
                emsg = 'Broken pipe'
            else:
                call = self._exception
        elif isinstance(exc, eventlet.Timeout):
            emsg = '%s (%ss)' % (exc.__class__.__name__, exc.seconds)
        else:
            call = self._exception
        call('%s: %s' % (msg, emsg), *args, **kwargs)


class StowageLogFormatter(logging.Formatter):
    """
    Keeps each record on one line (newlines become ``#012``, as syslog
    expects) and optionally shortens overly long lines.
    """

    def __init__(self, fmt=None, datefmt=None, max_line_length=0):
        logging.Formatter.__init__(self, fmt=fmt, datefmt=datefmt)
        self.max_line_length = max_line_length

    def format(self, record):
        if not hasattr(record, 'server'):
            # records from loggers we did not set up
            record.server = record.name

        record.message = record.getMessage()
        if self._fmt.find('%(asctime)') >= 0:
            record.asctime = self.formatTime(record, self.datefmt)
        msg = (self._fmt % record.__dict__).replace('\n', '#012')
        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self.formatException(
                    record.exc_info).replace('\n', '#012')
        if record.exc_text:
            if not msg.endswith('#012'):
                msg = msg + '#012'
            msg = msg + record.exc_text

        if self.max_line_length > 0 and len(msg) > self.max_line_length:
            if self.max_line_length < 7:
                msg = msg[:self.max_line_length]
            else:
                approxhalf = (self.max_line_length - 5) // 2
                msg = msg[:approxhalf] + " ... " + msg[-approxhalf:]
        return msg


def _syslog_handler(conf):
    facility = getattr(SysLogHandler, conf.get('log_facility', 'LOG_LOCAL0'),
                       SysLogHandler.LOG_LOCAL0)
    udp_host = conf.get('log_udp_host')
    if udp_host:
        udp_port = int(conf.get('log_udp_port',
                                logging.handlers.SYSLOG_UDP_PORT))
        return SysLogHandler(address=(udp_host, udp_port), facility=facility)
    log_address = conf.get('log_address')
    if not log_address:
        return None
    try:
        mode = os.stat(log_address).st_mode
    except OSError as e:
        if e.errno not in (errno.ENOTSOCK, errno.ENOENT):
            raise
        return None
    if not stat.S_ISSOCK(mode):
        return None
    return SysLogHandler(address=log_address, facility=facility)


def get_logger(conf, name=None, log_to_console=False, log_route=None,
               fmt="%(server)s: %(message)s"):
    """
    Get a logger configured from a conf dict.

    **Log config and defaults**::

        log_name = stowage
        log_level = INFO
        log_facility = LOG_LOCAL0
        log_max_line_length = 0
        log_udp_host = (disabled)
        log_udp_port = logging.handlers.SYSLOG_UDP_PORT
        log_address = (disabled)

    A library client must not write anywhere unless asked to, so unlike a
    daemon no syslog handler is installed unless ``log_udp_host`` or
    ``log_address`` is configured.

    :param conf: Configuration dict to read settings from
    :param name: This value is used to populate the ``server`` field in
                 the log format, as the default value for ``log_route``;
                 defaults to the ``log_name`` value in ``conf``, if it exists,
                 or to 'stowage'.
    :param log_to_console: Add handler which writes to console on stderr
    :param log_route: Route for the logging, not emitted to the log, just used
                      to separate logging configurations
    :param fmt: Override log format
    :return: an instance of ``StowageLogAdapter``
    """
    if not conf:
        conf = {}
    if name is None:
        name = conf.get('log_name', 'stowage')
    if not log_route:
        log_route = name
    logger = logging.getLogger(log_route)
    formatter = StowageLogFormatter(
        fmt=fmt, max_line_length=int(conf.get('log_max_line_length', 0)))

    # only ever one handler of each kind per logger; last call wins
    if not hasattr(get_logger, 'handler4logger'):
        get_logger.handler4logger = {}
    if logger in get_logger.handler4logger:
        logger.removeHandler(get_logger.handler4logger.pop(logger))
    handler = _syslog_handler(conf)
    if handler is not None:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        get_logger.handler4logger[logger] = handler

    if not hasattr(get_logger, 'console_handler4logger'):
        get_logger.console_handler4logger = {}
    if logger in get_logger.console_handler4logger:
        logger.removeHandler(get_logger.console_handler4logger.pop(logger))
    if log_to_console:
        console_handler = logging.StreamHandler(sys.__stderr__)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)
        get_logger.console_handler4logger[logger] = console_handler

    if handler is not None or log_to_console:
        logger.propagate = False

    logger.setLevel(
        getattr(logging, conf.get('log_level', 'INFO').upper(), logging.INFO))

    return StowageLogAdapter(logger, name)


def get_prefixed_logger(stowage_logger, prefix):
    """
    Return a clone of the given ``stowage_logger`` with a new prefix string
    that replaces the prefix string of the given ``stowage_logger``.
    """
    return StowageLogAdapter(
        stowage_logger.logger, stowage_logger.server, prefix=prefix)
