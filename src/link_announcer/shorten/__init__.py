"""URL shortener implementations and the name -> factory registry.

The shortener is picked by the URL_SHORTENER setting and built once at
startup; an unknown name or an object that doesn't implement BaseShortener
stops the app from starting.
"""

from typing import Callable, Dict
from ..errors import ShortenerConfigError
from ..retrieval.fetch import Fetcher
from .base import BaseShortener
from .services import IsGdShortener, PassthroughShortener, TinyUrlShortener

ShortenerFactory = Callable[[Fetcher], BaseShortener]

_REGISTRY: Dict[str, ShortenerFactory] = {
    "passthrough": lambda fetcher: PassthroughShortener(),
    "tinyurl": TinyUrlShortener,
    "isgd": IsGdShortener,
}

def register_shortener(name: str, factory: ShortenerFactory) -> None:
    _REGISTRY[name.lower()] = factory

def available_shorteners():
    return sorted(_REGISTRY)

def build_shortener(name: str, fetcher: Fetcher) -> BaseShortener:
    factory = _REGISTRY.get((name or "").lower())
    if factory is None:
        raise ShortenerConfigError(
            f"Unknown shortener {name!r}; expected one of {', '.join(available_shorteners())}"
        )
    shortener = factory(fetcher)
    if not isinstance(shortener, BaseShortener):
        raise ShortenerConfigError(
            f"Shortener {name!r} built {type(shortener).__name__}, which is not a BaseShortener"
        )
    return shortener

__all__ = [
    "BaseShortener",
    "IsGdShortener",
    "PassthroughShortener",
    "TinyUrlShortener",
    "available_shorteners",
    "build_shortener",
    "register_shortener",
]
