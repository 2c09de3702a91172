import logging
import threading
import time

import cinp
import pytest
import requests

from cinp.transport.http import Session

from conftest import HOST, url


protocol_headers = {
    'CInP-Version': '1.0',
    'Content-Type': 'application/json;charset=utf-8',
    'User-Agent': 'python CInP client',
    'Accepts': 'application/json',
    'Accept-Charset': 'utf-8',
}


def test_host():

    for host in ('http://host', 'https://host', 'http://host:8080'):
        session = Session(host)
        assert session.host == host

    for host in ('htt://host', 'http//host', 'http://host/', 'https://host/'):
        with pytest.raises(ValueError):
            Session(host)


def test_proxy():

    session = Session(HOST, proxy='http://proxy:3128')
    assert session.http.proxies['http'] == 'http://proxy:3128'
    assert session.http.proxies['https'] == 'http://proxy:3128'


def test_request(mock):

    session = Session(HOST)

    mock.register_uri('GET', url('/api/v1/ns/model'), json={'a': 'bob'})
    outcome = session.request('GET', '/api/v1/ns/model', decode=True)

    assert outcome.status == 200
    assert outcome.value == {'a': 'bob'}
    assert mock.last_request.method == 'GET'
    assert mock.last_request.path == '/api/v1/ns/model'
    assert not mock.last_request.body

    for name, value in protocol_headers.items():
        assert mock.last_request.headers[name] == value

    # Verbs are not limited to the usual HTTP methods.

    mock.register_uri('BOB', url('/api/v1/ns/model:123:(23)'), text='')
    outcome = session.request('BOB', '/api/v1/ns/model:123:(23)', decode=True)

    assert outcome.status == 200
    assert outcome.value is None
    assert mock.last_request.method == 'BOB'


def test_request_data(mock):

    session = Session(HOST)

    mock.register_uri('CALL', url('/api/v1/ns/model(act)'), json={'a': 'bob'})
    outcome = session.request('CALL', '/api/v1/ns/model(act)', {'stuff': 'jane'}, decode=True)

    assert mock.last_request.json() == {'stuff': 'jane'}
    assert outcome.value == {'a': 'bob'}

    # Without decode the body is left alone.

    outcome = session.request('CALL', '/api/v1/ns/model(act)', {'stuff': 'jane'})
    assert outcome.value is None


def test_serialization_error(mock):

    session = Session(HOST)
    mock.register_uri('GET', url('/api/v1/ns/model'), json={})

    with pytest.raises(cinp.SerializationError):
        session.request('GET', '/api/v1/ns/model', {'stuff': object()})

    # Nothing was sent.

    assert mock.call_count == 0


def test_undecodable_response(mock):

    session = Session(HOST)
    mock.register_uri('GET', url('/api/v1/ns/model'), text='{not json')

    with pytest.raises(cinp.SerializationError):
        session.request('GET', '/api/v1/ns/model', decode=True)


def test_header_precedence(mock):

    session = Session(HOST)
    mock.register_uri('GET', url('/api/v1/'), text='')

    session.set_header('AuthId', 'root')
    session.set_header('Top', 'default')
    session.set_header('Content-Type', 'text/plain')

    extra = dict()
    extra['hdr'] = 'val'
    extra['Top'] = 'bottom'
    extra['content-type'] = 'text/html'
    extra['CInP-Version'] = '0.1'
    extra['User-Agent'] = 'somebody else'

    session.request('GET', '/api/v1/', headers=extra)
    headers = mock.last_request.headers

    assert headers['AuthId'] == 'root'
    assert headers['Hdr'] == 'val'
    assert headers['Top'] == 'bottom'

    for name, value in protocol_headers.items():
        assert headers[name] == value

    # Default headers persist across requests until cleared.

    session.request('GET', '/api/v1/')
    assert mock.last_request.headers['AuthId'] == 'root'
    assert mock.last_request.headers['Top'] == 'default'
    assert 'Hdr' not in mock.last_request.headers

    session.clear_header('AuthId')
    session.clear_header('NeverSet')
    session.request('GET', '/api/v1/')
    assert 'AuthId' not in mock.last_request.headers


def test_metadata_headers(mock):

    session = Session(HOST)

    headers = dict()
    headers['Position'] = '5'
    headers['Count'] = '10'
    headers['Total'] = '100'
    headers['Type'] = 'model'
    headers['Object-Id'] = '/api/v1/ns/model:1:'
    headers['verb'] = 'GET'
    headers['Unrelated'] = 'ignored'

    mock.register_uri('GET', url('/api/v1/ns/model'), json={}, headers=headers)
    outcome = session.request('GET', '/api/v1/ns/model')

    assert outcome.headers['Position'] == '5'
    assert outcome.headers['Count'] == '10'
    assert outcome.headers['Total'] == '100'
    assert outcome.headers['Type'] == 'model'
    assert outcome.headers['Object-Id'] == '/api/v1/ns/model:1:'
    assert outcome.headers['verb'] == 'GET'

    # Absent headers are present, but empty.

    assert outcome.headers['Multi-Object'] == ''
    assert outcome.multi == False
    assert 'Unrelated' not in outcome.headers

    assert outcome.integer('Total') == 100

    with pytest.raises(cinp.SerializationError):
        outcome.integer('Multi-Object')


def test_success_codes(mock):

    session = Session(HOST)

    for code in (200, 201, 202):
        mock.register_uri('GET', url('/api/v1/'), status_code=code, json={'code': code})
        outcome = session.request('GET', '/api/v1/', decode=True)
        assert outcome.status == code
        assert outcome.value == {'code': code}


def test_error_codes(mock):

    session = Session(HOST)

    # The body is never looked at for these, even when it is garbage.

    for code, error in ((401, cinp.InvalidSession), (403, cinp.NotAuthorized), (404, cinp.NotFound)):
        mock.register_uri('GET', url('/api/v1/'), status_code=code, text='{garbage')

        with pytest.raises(error):
            session.request('GET', '/api/v1/', decode=True)

    for code in (204, 301, 402, 405, 409, 418, 501, 502, 503):
        mock.register_uri('GET', url('/api/v1/'), status_code=code, text='')

        with pytest.raises(cinp.UnhandledStatus) as info:
            session.request('GET', '/api/v1/')

        assert info.value.code == code
        assert str(info.value) == "HTTP Code '%d' unhandled" % (code)


def test_invalid_request(mock):

    session = Session(HOST)

    mock.register_uri('UPDATE', url('/api/v1/ns/model:1:'), status_code=400, json={'message': 'bad field', 'data': {}})

    with pytest.raises(cinp.InvalidRequest) as info:
        session.request('UPDATE', '/api/v1/ns/model:1:', {'a': 1})

    assert info.value.message == 'bad field'
    assert str(info.value) == "Invalid Request: 'bad field'"

    # No message: the whole body is the message.

    mock.register_uri('UPDATE', url('/api/v1/ns/model:1:'), status_code=400, json={'field': 'required'})

    with pytest.raises(cinp.InvalidRequest) as info:
        session.request('UPDATE', '/api/v1/ns/model:1:', {'a': 1})

    assert 'required' in info.value.message

    # Not JSON at all.

    mock.register_uri('UPDATE', url('/api/v1/ns/model:1:'), status_code=400, text='<html>Bad Request</html>')

    with pytest.raises(cinp.InvalidRequest) as info:
        session.request('UPDATE', '/api/v1/ns/model:1:', {'a': 1})

    assert info.value.message == '<html>Bad Request</html>'


def test_server_error(mock):

    session = Session(HOST)

    mock.register_uri('GET', url('/api/v1/'), status_code=500, json={'message': 'boom'})

    with pytest.raises(cinp.ServerError) as info:
        session.request('GET', '/api/v1/')

    assert info.value.message == 'boom'
    assert info.value.trace is None
    assert str(info.value) == "Server Error: 'boom'"

    mock.register_uri('GET', url('/api/v1/'), status_code=500, json={'message': 'boom', 'trace': 'line 5'})

    with pytest.raises(cinp.ServerError) as info:
        session.request('GET', '/api/v1/')

    assert info.value.trace == 'line 5'
    assert str(info.value) == "Server Error: 'boom' at 'line 5'"

    mock.register_uri('GET', url('/api/v1/'), status_code=500, json={'message': 'boom', 'trace': ['a', 'b']})

    with pytest.raises(cinp.ServerError) as info:
        session.request('GET', '/api/v1/')

    assert info.value.trace == 'a\nb'

    mock.register_uri('GET', url('/api/v1/'), status_code=500, text='')

    with pytest.raises(cinp.ServerError):
        session.request('GET', '/api/v1/')


def test_transport_errors(mock):

    session = Session(HOST)

    mock.register_uri('GET', url('/api/v1/'), exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(cinp.TransportTimeout) as info:
        session.request('GET', '/api/v1/')

    assert isinstance(info.value, cinp.TransportFailure)
    assert isinstance(info.value.__cause__, requests.exceptions.ConnectTimeout)

    mock.register_uri('GET', url('/api/v1/'), exc=requests.exceptions.ConnectionError)

    with pytest.raises(cinp.ConnectionFailure):
        session.request('GET', '/api/v1/')


def test_timeout():

    assert Session(HOST).timeout == 30
    assert Session(HOST, timeout=5).timeout == 5


def test_cancelled(mock):

    session = Session(HOST)
    mock.register_uri('GET', url('/api/v1/'), json={})

    token = cinp.Token()
    token.cancel()

    with pytest.raises(cinp.Cancelled):
        session.request('GET', '/api/v1/', cancel=token)

    assert mock.call_count == 0

    # The abort callback is only registered for the duration of a request.

    token = cinp.Token()
    session.request('GET', '/api/v1/', cancel=token)
    assert token.callbacks == []


def test_cancelled_waiting(slow_server):

    # The server has not sent the response headers yet when the token fires.

    session = Session(slow_server)
    session.http.trust_env = False

    token = cinp.Token()
    timer = threading.Timer(0.3, token.cancel)
    timer.start()

    started = time.monotonic()

    with pytest.raises(cinp.Cancelled):
        session.request('GET', '/api/v1/ns/model:1:', decode=True, cancel=token)

    assert time.monotonic() - started < 2
    assert token.callbacks == []

    timer.join()
    session.close()


def test_cancelled_client(slow_server):

    client = cinp.Client(slow_server, '/api/v1/')
    client.session.http.trust_env = False

    token = cinp.Token()
    timer = threading.Timer(0.3, token.cancel)
    timer.start()

    started = time.monotonic()

    with pytest.raises(cinp.Cancelled):
        client.get('/api/v1/ns/model:1:', cancel=token)

    assert time.monotonic() - started < 2

    timer.join()
    client.close()


def test_blank_body(mock):

    # Whitespace alone is the same as no body at all.

    session = Session(HOST)

    for text in ('', '\n', '  \r\n'):
        mock.register_uri('GET', url('/api/v1/'), text=text)
        outcome = session.request('GET', '/api/v1/', decode=True)
        assert outcome.value is None


def test_large_bodies(mock, caplog):

    # Logging only keeps a bounded prefix of large requests and responses.

    session = Session(HOST)

    request = dict()
    response = dict()
    for i in range(1000):
        request['key%d' % (i)] = 'This is a Bunch of filler data'
        response['key%d' % (i)] = 'Even More filler data'

    mock.register_uri('GET', url('/api/v1/'), json=response)

    with caplog.at_level(logging.DEBUG, logger='cinp'):
        outcome = session.request('GET', '/api/v1/', request, decode=True)

    assert outcome.value == response
    assert mock.last_request.json() == request

    for record in caplog.records:
        assert len(record.getMessage()) < 1000


def test_log_buffer():

    retained = cinp.protocol.response.LogBuffer(10)
    retained.write(b'12345')
    assert retained.value() == b'12345'
    assert retained.full == False

    retained.write(b'67890')
    assert retained.value() == b'1234567890'

    retained.write(b'abc')
    assert retained.value() == b'1234567890...'
    assert retained.full == True
    assert retained.seen == 13

    assert cinp.protocol.response.truncate(b'x' * 600) == b'x' * 500 + b'...'
    assert cinp.protocol.response.truncate(None) == b''


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
