from concurrent.futures import Future

from .base import MethodAdapter


class Delete(MethodAdapter):
    METHOD = "DELETE"

    def execute(self, path: str) -> str:
        return self.executor.send_sync(path, self.METHOD)

    def execute_async(self, path: str) -> "Future[str]":
        return self.executor.send_async(path, self.METHOD)
