from abc import ABC, abstractmethod

from jobcast.models import PostResult


class PublishError(RuntimeError):
    """The platform answered but refused the post."""


class Publisher(ABC):
    name: str = "publisher"

    @abstractmethod
    def post(self, message: str, image: bytes | None = None) -> PostResult:
        pass
