import http.server
import threading

import pytest
import requests_mock

import cinp


HOST = 'http://server'
ROOT = '/api/v1/'


@pytest.fixture(autouse=True)
def reset_config():

    # The configuration functions cache what they find; start every test
    # from a clean slate so environment changes in one test do not leak.

    cinp.config.reset()
    yield
    cinp.config.reset()


@pytest.fixture
def mock():

    with requests_mock.Mocker() as mocker:
        yield mocker


@pytest.fixture
def client():

    client = cinp.Client(HOST, ROOT)
    yield client
    client.close()


@pytest.fixture
def slow_server():

    # A real server that does not answer until the test is over, to hold a
    # request open while it waits for the response headers.

    release = threading.Event()

    class Handler(http.server.BaseHTTPRequestHandler):

        def respond(self):
            release.wait(30)

            if self.command == 'LIST':
                body = b'[]'
            else:
                body = b'{}'

            try:
                self.send_response(200)
                self.send_header('Content-Length', str(len(body)))
                self.send_header('Position', '0')
                self.send_header('Count', '0')
                self.send_header('Total', '0')
                self.end_headers()
                self.wfile.write(body)
            except ConnectionError:
                # The client gave up on this one.
                pass

        do_GET = respond
        do_LIST = respond

        def log_message(self, format, *args):
            pass

    server = http.server.ThreadingHTTPServer(('127.0.0.1', 0), Handler)
    server.daemon_threads = True

    thread = threading.Thread(target=server.serve_forever)
    thread.daemon = True
    thread.start()

    yield 'http://127.0.0.1:%d' % (server.server_address[1])

    release.set()
    server.shutdown()
    server.server_close()


def url(uri):
    return HOST + uri

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
