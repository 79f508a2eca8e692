from typing import Optional

import requests

from ..interfaces import IHttpClient


class RequestsHttpClient(IHttpClient):
    """
    Thin adapter over requests that satisfies IHttpClient.

    Without an injected session every call opens and tears down its own
    requests.Session, so nothing is reused between requests.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session

    def request(self, method: str, url: str, **kwargs):
        if self.session is not None:
            return self.session.request(method=method, url=url, **kwargs)
        with requests.Session() as session:
            return session.request(method=method, url=url, **kwargs)

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
