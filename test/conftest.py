import json
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from unittest.mock import patch

import pytest

from couchjson import Client


class FakeResponse:
    def __init__(self, status_code=200, body=None, content=None):
        if content is None:
            content = b"" if body is None else json.dumps(body).encode("utf-8")
        self.status_code = status_code
        self.content = content

    @property
    def text(self):
        return self.content.decode("utf-8")


@pytest.fixture
def http():
    """requests.request replaced by a mock answering {"ok": true}."""
    with patch("couchjson.http.requests.request") as request:
        request.return_value = FakeResponse(200, {"ok": True})
        yield request


@pytest.fixture
def client():
    return Client("http://couch:5984", username="admin", password="secret")


@pytest.fixture
def db(client):
    return client.new_db("db1")


def answer(http, status_code=200, body=None, content=None):
    http.return_value = FakeResponse(status_code, body, content)


def sent(http):
    """(method, url, decoded json body or raw bytes, headers) of the last call."""
    args, kwargs = http.call_args
    data = kwargs.get("data")
    if data and kwargs["headers"].get("Content-Type") == "application/json":
        data = json.loads(data)
    return args[0], args[1], data, kwargs["headers"]


class _RedirectingHandler(BaseHTTPRequestHandler):
    """Answers 301 -> /new everywhere except /new itself."""

    def _answer(self):
        length = int(self.headers.get("Content-Length") or 0)
        if length:
            self.rfile.read(length)
        if self.path == "/new":
            body = json.dumps({"method": self.command, "path": self.path}).encode()
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        else:
            self.send_response(301)
            self.send_header("Location", "/new")
            self.send_header("Content-Length", "0")
            self.end_headers()

    do_GET = do_POST = do_PUT = do_DELETE = _answer

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server(monkeypatch):
    """Base URL of a real HTTP server on localhost."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1")
    monkeypatch.setenv("no_proxy", "127.0.0.1")
    httpd = HTTPServer(("127.0.0.1", 0), _RedirectingHandler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{httpd.server_port}"
    finally:
        httpd.shutdown()
        httpd.server_close()
