''' The CInP wire encoding. Bodies are JSON in UTF-8; :func:`dumps` always
    returns bytes, ready to be handed to :mod:`requests` as a request body,
    and :func:`loads` accepts the raw bytes of a response body. Whichever
    of msgspec, orjson, or the standard library is available is used, in
    that order of preference.
'''

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


# Servers expect HTML characters and non-ASCII text to go out as-is, not
# escaped; msgspec and orjson already behave that way.

def json_dumps(data):
    return json.dumps(data, ensure_ascii=False, separators=(',', ':')).encode('utf-8')

if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    encode_errors = (TypeError, ValueError, OverflowError)
    decode_errors = (msgspec.DecodeError, ValueError)
elif orjson is not None:
    dumps = orjson.dumps
    loads = orjson.loads
    encode_errors = (TypeError, ValueError, OverflowError)
    decode_errors = (orjson.JSONDecodeError, ValueError)
else:
    dumps = json_dumps
    loads = json.loads
    encode_errors = (TypeError, ValueError, OverflowError)
    decode_errors = (ValueError,)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
