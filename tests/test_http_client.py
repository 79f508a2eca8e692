from unittest.mock import MagicMock

from netconex.http.client import RequestsHttpClient


class FakeSession:
    instances = []

    def __init__(self):
        self.calls = []
        self.closed = False
        FakeSession.instances.append(self)

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return "response"

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def test_request_uses_injected_session():
    session = MagicMock()
    client = RequestsHttpClient(session)

    client.request("GET", "https://api.example.com/x", timeout=None)
    client.close()

    session.request.assert_called_once_with(method="GET", url="https://api.example.com/x", timeout=None)
    session.close.assert_called_once()


def test_request_opens_fresh_session_per_call(monkeypatch):
    FakeSession.instances = []
    monkeypatch.setattr("netconex.http.client.requests.Session", FakeSession)
    client = RequestsHttpClient()

    assert client.request("GET", "https://api.example.com/a") == "response"
    assert client.request("PUT", "https://api.example.com/b", data=b"{}") == "response"

    assert len(FakeSession.instances) == 2
    assert all(session.closed for session in FakeSession.instances)
    assert FakeSession.instances[1].calls == [("PUT", "https://api.example.com/b", {"data": b"{}"})]
