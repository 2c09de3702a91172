""" Python client for CInP, the Concise Interaction Protocol. This includes
    parsing and construction of CInP addresses, the HTTP request engine that
    carries the protocol, and the named resource operations built on it.
"""

# Utility components.

from . import json
from . import config
from . import cancel
from . import errors

# Submodules used by multiple other components.

from . import address
from . import protocol
from . import transport
from . import objects
from . import describe
from . import stream

# Primary public-facing interfaces.

from .address import Address, URI
from .cancel import Token
from .client import Client
from .describe import Describe, FieldParameter
from .objects import MappedObject, Object, Registry
from .errors import (
    CInPError,
    Cancelled,
    ConnectionFailure,
    InvalidRequest,
    InvalidSession,
    MalformedAddress,
    MultiplicityMismatch,
    NotAuthorized,
    NotFound,
    SerializationError,
    ServerError,
    TransportFailure,
    TransportTimeout,
    UnhandledStatus,
)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
