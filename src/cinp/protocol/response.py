""" The outcome of a single CInP request, and the bounded buffer used to
    retain a prefix of the response body for diagnostics.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..errors import SerializationError
from . import fields


class Outcome:
    """ The result of a successful request: the HTTP *status* code, the
        decoded *value* of the body (None if there was no body, or no
        decoding was requested), and the *headers* dictionary containing
        every metadata header in :data:`fields.METADATA`. Headers absent
        from the response are present here as empty strings.
    """

    def __init__(self, status: int, value: Any = None, headers: Optional[Dict[str, str]] = None):

        self.status = status
        self.value = value

        metadata = dict()
        for name in fields.METADATA:
            metadata[name] = ''

        if headers:
            metadata.update(headers)

        self.headers = metadata


    def __repr__(self):
        return 'Outcome(%d, %r)' % (self.status, self.headers)


    @property
    def multi(self) -> bool:
        """ True if the server flagged the response as covering multiple
            objects.
        """

        return self.headers[fields.MULTI_OBJECT] == fields.TRUE


    def integer(self, name: str) -> int:
        """ Return the named metadata header as an integer. A missing or
            non-integer header raises :class:`cinp.errors.SerializationError`.
        """

        value = self.headers[name]

        try:
            return int(value)
        except ValueError:
            raise SerializationError("header '%s' is not an integer: %r" % (name, value))


# end of class Outcome



class LogBuffer:
    """ Retain at most *cap* bytes of whatever is written to it; anything
        beyond that is counted but discarded. Intended to sit beside the
        real consumer of a response body so that a prefix of it can be
        logged without buffering the whole thing.
    """

    def __init__(self, cap: int = 500):

        self.cap = cap
        self.buffer = bytearray()
        self.seen = 0


    def write(self, data: bytes) -> int:

        self.seen += len(data)
        room = self.cap - len(self.buffer)

        if room > 0:
            self.buffer.extend(data[:room])

        return len(data)


    @property
    def full(self) -> bool:
        return self.seen > len(self.buffer)


    def value(self) -> bytes:
        """ The retained prefix, with a trailing ``...`` if anything was
            discarded.
        """

        if self.full:
            return bytes(self.buffer) + b'...'

        return bytes(self.buffer)


    def text(self) -> str:
        return self.value().decode('utf-8', errors='replace')


# end of class LogBuffer



def truncate(data: Optional[bytes], cap: int = 500) -> bytes:
    """ Return at most *cap* bytes of *data* for logging, with a trailing
        ``...`` if anything was cut.
    """

    if not data:
        return b''

    if len(data) > cap:
        return data[:cap] + b'...'

    return data


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
