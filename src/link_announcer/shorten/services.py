from typing import Optional
from ..log import get_logger
from ..retrieval.fetch import Fetcher
from .base import BaseShortener

logger = get_logger("shorten")

class PassthroughShortener(BaseShortener):
    """Shows the canonical URL itself."""
    name = "passthrough"

    def shorten(self, url: str) -> Optional[str]:
        return url

class _ApiShortener(BaseShortener):
    endpoint = ""

    def __init__(self, fetcher: Fetcher):
        self.fetcher = fetcher

    def params(self, url: str) -> dict:
        return {"url": url}

    def shorten(self, url: str) -> Optional[str]:
        text = self.fetcher.get_text(self.endpoint, params=self.params(url))
        # These APIs answer with the bare short link, or an error sentence
        if not text or not text.startswith(("http://", "https://")):
            logger.debug(f"{self.name} could not shorten {url}: {text!r}")
            return None
        return text

class TinyUrlShortener(_ApiShortener):
    name = "tinyurl"
    endpoint = "https://tinyurl.com/api-create.php"

class IsGdShortener(_ApiShortener):
    name = "isgd"
    endpoint = "https://is.gd/create.php"

    def params(self, url: str) -> dict:
        return {"format": "simple", "url": url}
