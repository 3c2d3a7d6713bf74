"""Shared fixtures: a local HTTP server with a few fixed endpoints."""

import json
import threading
import time
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

PROXY_VARS = ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy")
SLOW_RESPONSE_DELAY = 0.5


class FixtureHandler(BaseHTTPRequestHandler):
    """Serves the fixture endpoints used by the dispatch tests."""

    def log_message(self, format, *args):  # noqa: A002
        pass

    def _reply(self, status: int, body: bytes, content_type: str, extra_headers=()) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        for name, value in extra_headers:
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):  # noqa: N802
        path = self.path.split("?", 1)[0]
        if path == "/hello":
            self._reply(200, b"HELLO WORLD", "text/plain; charset=utf-8")
        elif path == "/json":
            self._reply(200, json.dumps({"message": "hello"}).encode(), "application/json")
        elif path == "/headers":
            received = [[name, value] for name, value in self.headers.items()]
            self._reply(200, json.dumps(received).encode(), "application/json")
        elif path == "/query":
            query = self.path.split("?", 1)[1] if "?" in self.path else ""
            self._reply(200, query.encode(), "text/plain")
        elif path.startswith("/item/"):
            self._reply(200, f"item {path.rsplit('/', 1)[1]}".encode(), "text/plain")
        elif path == "/cookies":
            self._reply(200, b"ok", "text/plain", [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
        elif path == "/slow":
            time.sleep(SLOW_RESPONSE_DELAY)
            try:
                self._reply(200, b"late", "text/plain")
            except (BrokenPipeError, ConnectionResetError):
                pass
        elif path == "/redirect":
            self._reply(302, b"", "text/plain", [("Location", "/hello")])
        else:
            self._reply(404, b"not found", "text/plain")

    def do_POST(self):  # noqa: N802
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length)
        if self.path == "/echo":
            self._reply(200, body, "application/octet-stream", [("X-Received-Length", str(length))])
        else:
            self._reply(404, b"not found", "text/plain")


@pytest.fixture(scope="session")
def http_server() -> Iterator[str]:
    """Run the fixture server on a free port and yield its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), FixtureHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture(autouse=True)
def no_proxy_env(monkeypatch):
    """Keep proxy settings from the environment away from local requests."""
    for var in PROXY_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def unreachable_url() -> str:
    """A URL nothing listens on."""
    return "http://127.0.0.1:1/unreachable"
