"""Protocol constants.

Keep these in one place to avoid stringly-typed request handling.
"""

# This is the version of the CInP protocol implemented here, sent with
# every request in the CInP-Version header.

VERSION = "1.0"

TRUE = "True"

# Verbs. These occupy the HTTP method slot; only GET and DELETE are
# conventional HTTP methods.

GET = "GET"
LIST = "LIST"
CREATE = "CREATE"
UPDATE = "UPDATE"
DELETE = "DELETE"
CALL = "CALL"
DESCRIBE = "DESCRIBE"

# Request headers set by the protocol layer; these cannot be overridden by
# default or per-call headers.

USER_AGENT = "User-Agent"
ACCEPTS = "Accepts"
ACCEPT_CHARSET = "Accept-Charset"
CINP_VERSION = "CInP-Version"
CONTENT_TYPE = "Content-Type"

MIME_TYPE = "application/json"
CHARSET = "utf-8"

# Request headers set by individual operations.

FILTER = "Filter"

# Headers present in both directions.

POSITION = "Position"
COUNT = "Count"
MULTI_OBJECT = "Multi-Object"

# Response-only headers.

TOTAL = "Total"
TYPE = "Type"
OBJECT_ID = "Object-Id"
VERB = "verb"

# The fixed set of response headers extracted into every Outcome.

METADATA = (POSITION, COUNT, TOTAL, TYPE, MULTI_OBJECT, OBJECT_ID, VERB)

# Status codes.

SUCCESS = (200, 201, 202)
ERROR_BODY = (400, 500)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
