from typing import Any, Type, TypeVar

from ..executor import RequestExecutor

T = TypeVar("T")


class MethodAdapter:
    """
    Verb-specific facade over a private snapshot of a RequestExecutor.
    """

    def __init__(self, requester: RequestExecutor):
        self.executor = requester.snapshot()

    @property
    def headers(self):
        return self.executor.headers

    def pretty_print(self, text: str) -> str:
        return self.executor.pretty_print(text)

    def deserialize(self, text: str, target_type: Type[T]) -> T:
        return self.executor.deserialize(text, target_type)


def _require_body(method: str, body: Any) -> None:
    if body is None:
        raise ValueError(f"{method} requires a request body")
