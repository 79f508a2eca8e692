from concurrent.futures import Future
from typing import Type, TypeVar

from ..common.errors import ApiRequestError, NetconexError
from .base import MethodAdapter

T = TypeVar("T")


class Get(MethodAdapter):
    METHOD = "GET"

    def execute(self, path: str) -> str:
        return self.executor.send_sync(path, self.METHOD)

    def execute_async(self, path: str) -> "Future[str]":
        return self.executor.send_async(path, self.METHOD)

    def execute_and_deserialize(self, path: str, target_type: Type[T]) -> T:
        """
        GET the path and decode the body into target_type. Every failure is
        reported as an ApiRequestError; transport and status errors keep
        their own subclass.
        """
        try:
            return self.deserialize(self.execute(path), target_type)
        except ApiRequestError:
            raise
        except NetconexError as exc:
            raise ApiRequestError(
                "Error executing GET request and deserializing response",
                original_exception=exc,
            ) from exc
