from abc import ABC, abstractmethod
from typing import Optional

class BaseShortener(ABC):
    name = "base"

    @abstractmethod
    def shorten(self, url: str) -> Optional[str]:
        """Return a shortened form of url, or None if the service failed."""
