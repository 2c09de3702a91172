"""
CInP Protocol Layer
===================

This package defines the transport-agnostic parts of the CInP protocol:
the vocabulary of verbs and headers, and the shape of a request outcome.

The protocol layer MUST NOT depend on the HTTP library.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code
    │
    ▼
Client (cinp.client)
    Named resource operations
    - get() / list() / create() / update() / delete() / call()
    - list_ids() / list_objects() streams
    Enforces the single/multi object rules

    │
    ▼
Session (cinp.transport.http)
    Executes one verb against one address
    - header precedence
    - status classification
    - body encode/decode

    │
    ▼
Outcome (response.py)
    Status, decoded body, metadata headers

    │
    ▼
Field Vocabulary (fields.py)
    Canonical names for verbs and headers

---------------------------------------------------------------------
"""

from . import fields
from . import response

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
