""" The closed set of errors raised by the CInP client. Every error raised
    by this package on behalf of the remote side, the transport, or the
    address grammar derives from :class:`CInPError`; argument validation
    failures on the local side are ordinary :class:`ValueError` exceptions.
"""

from __future__ import annotations

from typing import Optional


class CInPError(Exception):
    """Base class for all CInP client errors."""


class MalformedAddress(CInPError, ValueError):
    """ The address does not match the CInP path grammar, or does not begin
        with the root path the parser is bound to.
    """

    def __init__(self, uri, reason=None):

        self.uri = uri
        self.reason = reason

        if reason is None:
            text = "unable to parse URI '%s'" % (uri)
        else:
            text = "unable to parse URI '%s': %s" % (uri, reason)

        CInPError.__init__(self, text)


class InvalidSession(CInPError):
    """ The session headers (AuthId/AuthToken) do not identify a valid
        session. Returned by the server as HTTP 401.
    """

    def __init__(self):
        CInPError.__init__(self, 'Invalid Session')


class NotAuthorized(CInPError):
    """ The session is not authorized to make the request (HTTP 403). """

    def __init__(self):
        CInPError.__init__(self, 'Not Authorized')


class NotFound(CInPError):
    """ The namespace/model/object/action does not exist (HTTP 404). """

    def __init__(self):
        CInPError.__init__(self, 'Not Found')


class InvalidRequest(CInPError):
    """ The server rejected the request as invalid (HTTP 400). The *message*
        is taken from the structured error body when there is one.
    """

    def __init__(self, message):

        self.message = message
        CInPError.__init__(self, "Invalid Request: '%s'" % (message))


class ServerError(CInPError):
    """ The request caused an error on the server (HTTP 500). The *trace*
        is only present when the server chose to include one.
    """

    def __init__(self, message, trace: Optional[str] = None):

        self.message = message
        self.trace = trace

        if trace:
            text = "Server Error: '%s' at '%s'" % (message, trace)
        else:
            text = "Server Error: '%s'" % (message)

        CInPError.__init__(self, text)


class UnhandledStatus(CInPError):
    """ The HTTP status code is not one this client knows how to handle, or
        is a success code other than the one the operation expects.
    """

    def __init__(self, code, verb=None):

        self.code = code
        self.verb = verb

        if verb is None:
            text = "HTTP Code '%d' unhandled" % (code)
        else:
            text = "HTTP Code '%d' unhandled for %s" % (code, verb)

        CInPError.__init__(self, text)


class MultiplicityMismatch(CInPError):
    """ The operation expected a single object and the server answered for
        many, or the operation asked for many and the server did not
        confirm it.
    """


# Transport errors. These wrap the exceptions raised by the HTTP library,
# which are chained as the __cause__ of the raised exception.

class TransportFailure(CInPError):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportFailure):
    """A request did not receive a timely response."""


class ConnectionFailure(TransportFailure):
    """The transport could not establish or maintain a connection."""


class SerializationError(TransportFailure):
    """ The request data could not be encoded, or the response could not be
        decoded, in the wire encoding.
    """


class Cancelled(TransportFailure):
    """The cancellation token fired before or during the request."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
