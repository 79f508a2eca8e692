import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


class MockServer:
    """
    In-process HTTP server. Routes map (method, path) to either a
    (status, body) tuple or a callable taking the request body and
    returning one.
    """

    def __init__(self):
        self.routes = {}
        self.received = []
        self.httpd = None

    @property
    def base_url(self):
        host, port = self.httpd.server_address[:2]
        return f"http://{host}:{port}"

    def route(self, method, path, status=200, body="", handler=None):
        self.routes[(method, path)] = handler or (status, body)


def _make_handler(server: MockServer):
    class Handler(BaseHTTPRequestHandler):
        def _handle(self):
            length = int(self.headers.get("Content-Length") or 0)
            request_body = self.rfile.read(length).decode("utf-8") if length else ""
            server.received.append(
                {
                    "method": self.command,
                    "path": self.path,
                    "headers": dict(self.headers),
                    "body": request_body,
                }
            )

            route = server.routes.get((self.command, self.path))
            if route is None:
                status, body = 404, json.dumps({"message": "not found"})
            elif callable(route):
                status, body = route(request_body)
            else:
                status, body = route

            payload = body.encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        do_GET = _handle
        do_POST = _handle
        do_PUT = _handle
        do_DELETE = _handle

        def log_message(self, format, *args):
            pass

    return Handler


@pytest.fixture
def mock_server(monkeypatch):
    # Requests honours proxy variables from the environment; keep loopback traffic direct.
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")

    server = MockServer()
    server.httpd = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(server))
    thread = threading.Thread(target=server.httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.httpd.shutdown()
        server.httpd.server_close()
        thread.join(timeout=5)
