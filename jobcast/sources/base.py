from abc import ABC, abstractmethod

from jobcast.models import ScrapedJob


class JobSource(ABC):
    @abstractmethod
    def fetch(self, limit: int = 30) -> list[ScrapedJob]:
        pass
