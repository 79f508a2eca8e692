from abc import ABC, abstractmethod
from typing import Any


class IHttpClient(ABC):
    @abstractmethod
    def request(self, method: str, url: str, **kwargs) -> Any:
        pass

    def close(self) -> None:
        pass
