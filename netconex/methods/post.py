from concurrent.futures import Future
from typing import Any

from .base import MethodAdapter, _require_body


class Post(MethodAdapter):
    METHOD = "POST"

    def execute(self, path: str, body: Any) -> str:
        _require_body(self.METHOD, body)
        return self.executor.send_sync(path, self.METHOD, body)

    def execute_async(self, path: str, body: Any) -> "Future[str]":
        _require_body(self.METHOD, body)
        return self.executor.send_async(path, self.METHOD, body)
