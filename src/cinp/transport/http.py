"""HTTP request engine for the CInP protocol.

A :class:`Session` owns the connection parameters for one server and turns
a verb, an address, and optional request data into an :class:`Outcome`, or
into one of the errors in :mod:`cinp.errors`.
"""

from __future__ import annotations

import concurrent.futures
import logging
import threading
import time
from typing import Any, Dict, Optional

import requests
from requests.structures import CaseInsensitiveDict

from .. import config
from .. import json
from ..cancel import Token
from ..errors import (
    Cancelled,
    ConnectionFailure,
    InvalidRequest,
    InvalidSession,
    NotAuthorized,
    NotFound,
    SerializationError,
    ServerError,
    TransportFailure,
    TransportTimeout,
    UnhandledStatus,
)
from ..protocol import fields
from ..protocol.response import LogBuffer, Outcome, truncate


logger = logging.getLogger(__name__)

read_size = 8192
log_size = 500


class Session:
    """ Issue CInP requests against a single *host*, which must include the
        scheme and must not end with a forward slash. Connections are pooled
        by the underlying :class:`requests.Session`.

        The :attr:`headers` dictionary holds default headers applied to every
        request, typically the session/authentication headers. It is not
        protected by a lock: do not modify it while a request is in flight.
    """

    def __init__(self, host: str, proxy: Optional[str] = None, timeout: Optional[float] = None, log: Optional[logging.Logger] = None):

        if not (host.startswith('http://') or host.startswith('https://')):
            raise ValueError('host does not start with http(s)://')

        if host.endswith('/'):
            raise ValueError("host name must not end with '/'")

        if timeout is None:
            timeout = config.timeout()

        self.host = host
        self.proxy = proxy
        self.timeout = float(timeout)
        self.headers: Dict[str, str] = dict()
        self.log = log or logger

        self.http = requests.Session()
        self.workers = concurrent.futures.ThreadPoolExecutor(max_workers=8)

        if proxy:
            self.http.proxies = {'http': proxy, 'https': proxy}


    def close(self) -> None:
        self.workers.shutdown(wait=False)
        self.http.close()


    def set_header(self, name: str, value: str) -> None:
        self.log.debug('Set Header %s', name)
        self.headers[name] = value


    def clear_header(self, name: str) -> None:
        self.log.debug('Clearing Header %s', name)
        self.headers.pop(name, None)


    def _headers(self, extra: Optional[Dict[str, str]]) -> CaseInsensitiveDict:

        # The default headers go first, then the per-call headers, so that
        # neither can replace the headers that describe the wire format.

        headers = CaseInsensitiveDict()
        headers.update(self.headers)

        if extra:
            headers.update(extra)

        headers[fields.USER_AGENT] = config.user_agent()
        headers[fields.ACCEPTS] = fields.MIME_TYPE
        headers[fields.ACCEPT_CHARSET] = fields.CHARSET
        headers[fields.CINP_VERSION] = fields.VERSION
        headers[fields.CONTENT_TYPE] = fields.MIME_TYPE + ';charset=' + fields.CHARSET

        return headers


    def request(self, verb: str, uri: str, data: Any = None, decode: bool = False,
                headers: Optional[Dict[str, str]] = None, cancel: Optional[Token] = None) -> Outcome:
        """ Send *verb* to the address *uri*. If *data* is not None it is
            encoded and sent as the request body. If *decode* is True the
            response body, if any, is decoded into :attr:`Outcome.value`.
            The *headers* are added to this request only.

            If a *cancel* token is provided, cancelling it aborts the request
            with :class:`cinp.errors.Cancelled`.
        """

        if cancel is None:
            cancel = Token()

        self.log.debug('request %s %s extra headers: %r', verb, uri, headers)

        body = None
        if data is not None:
            try:
                body = json.dumps(data)
            except json.encode_errors as e:
                raise SerializationError('unable to encode request data: %s' % (e)) from e

        self.log.debug('request data: %r', truncate(body, log_size))

        cancel.check()

        pending = dict()

        def abort():
            response = pending.get('response')
            if response is not None:
                response.close()

        cancel.on_cancel(abort)

        try:
            response = self._wait(verb, uri, body, self._headers(headers), cancel)
            pending['response'] = response

            try:
                cancel.check()
                return self._handle(verb, response, decode, cancel)
            finally:
                response.close()

        finally:
            cancel.remove(abort)


    def _wait(self, verb, uri, body, headers, cancel):
        """ Run :func:`_send` on a worker thread, returning the response as
            soon as the headers arrive, or raising
            :class:`cinp.errors.Cancelled` as soon as the *cancel* token
            fires; the underlying connection cannot be interrupted while it
            is waiting for the server, so a response arriving after that
            point is closed and discarded.
        """

        finished = threading.Event()

        try:
            future = self.workers.submit(self._send, verb, uri, body, headers, cancel)
        except RuntimeError as e:
            raise ConnectionFailure('session is closed') from e

        future.add_done_callback(lambda future: finished.set())
        cancel.on_cancel(finished.set)

        try:
            finished.wait()
        finally:
            cancel.remove(finished.set)

        if cancel.cancelled:
            future.add_done_callback(_discard)
            raise Cancelled('request cancelled')

        return future.result()


    def _send(self, verb, uri, body, headers, cancel):

        try:
            return self.http.request(verb, self.host + uri, data=body, headers=headers, timeout=self.timeout, stream=True)
        except requests.exceptions.Timeout as e:
            raise TransportTimeout('%s %s: no response in %.2f sec' % (verb, uri, self.timeout)) from e
        except requests.exceptions.ConnectionError as e:
            if cancel.cancelled:
                raise Cancelled('request cancelled') from e
            raise ConnectionFailure('%s %s: %s' % (verb, uri, e)) from e
        except requests.exceptions.RequestException as e:
            raise TransportFailure('%s %s: %s' % (verb, uri, e)) from e


    def _handle(self, verb, response, decode, cancel):

        status = response.status_code
        self.log.debug('result code: %d', status)

        # These are classified on the status code alone; the body is not
        # even read.

        if status == 401:
            raise InvalidSession()
        elif status == 403:
            raise NotAuthorized()
        elif status == 404:
            raise NotFound()
        elif status in fields.SUCCESS or status in fields.ERROR_BODY:
            pass
        else:
            raise UnhandledStatus(status)

        retained = LogBuffer(log_size)
        body = self._read(response, retained, cancel)

        if status in fields.ERROR_BODY:
            raise _error(status, body, retained)

        value = None
        if decode and body.strip():
            try:
                value = json.loads(body)
            except json.decode_errors as e:
                raise SerializationError("unable to parse response '%s'" % (e)) from e

        metadata = dict()
        for name in fields.METADATA:
            metadata[name] = response.headers.get(name, '')

        self.log.debug('result headers: %r', metadata)
        self.log.debug('result data: %r', retained.value())

        return Outcome(status, value, metadata)


    def _read(self, response, retained, cancel):
        """ Read the full response body, copying the first few hundred bytes
            to *retained* as they go by. The request timeout applies to the
            body as a whole, not just to each individual read.
        """

        deadline = time.monotonic() + self.timeout
        chunks = list()

        try:
            for chunk in response.iter_content(chunk_size=read_size):
                retained.write(chunk)
                chunks.append(chunk)

                cancel.check()

                if time.monotonic() > deadline:
                    raise TransportTimeout('response not complete in %.2f sec' % (self.timeout))

        except TransportFailure:
            raise
        except requests.exceptions.RequestException as e:
            if cancel.cancelled:
                raise Cancelled('request cancelled') from e
            raise ConnectionFailure('error reading response: %s' % (e)) from e
        except (OSError, ValueError, AttributeError) as e:
            # Closing the response from the cancelling thread surfaces as
            # any of these, depending on where the read was interrupted.
            if cancel.cancelled:
                raise Cancelled('request cancelled') from e
            raise ConnectionFailure('error reading response: %s' % (e)) from e

        return b''.join(chunks)


# end of class Session



def _discard(future):

    if future.cancelled() or future.exception() is not None:
        return

    future.result().close()



def _error(status, body, retained):
    """ Build the exception for a 400 or 500 response. The body is expected
        to be a JSON object with a 'message', and for a 500, possibly a
        'trace'; a body that is not valid JSON is passed through as text.
    """

    if body:
        try:
            data = json.loads(body)
        except json.decode_errors:
            data = retained.text()
    else:
        data = dict()

    if isinstance(data, dict):
        try:
            message = data['message']
        except KeyError:
            message = str(data)
            trace = None
        else:
            trace = data.get('trace')
    else:
        message = str(data)
        trace = None

    if status == 400:
        return InvalidRequest(message)

    if isinstance(trace, (list, tuple)):
        trace = '\n'.join(str(line) for line in trace)
    elif trace is not None:
        trace = str(trace)

    return ServerError(message, trace)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
