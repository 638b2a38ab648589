"""Renderer hooks: handlers that take over display of specific links.

A renderer that returns True from try_render() owns the output for that link
(it sends whatever it wants itself); the default shorten/title pipeline is
skipped for it.
"""

from typing import List, Optional, Protocol
from .log import get_logger
from .schemas.links import ParsedURL

logger = get_logger("renderers")

class Renderer(Protocol):
    def try_render(self, parsed: ParsedURL) -> bool:
        ...

class RendererChain:
    def __init__(self):
        self._renderers: List[Renderer] = []

    def __len__(self) -> int:
        return len(self._renderers)

    def register(self, renderer: Renderer) -> None:
        # Same instance twice is a no-op; equal-but-distinct instances both count
        if any(r is renderer for r in self._renderers):
            return
        self._renderers.append(renderer)

    def try_render(self, parsed: ParsedURL) -> Optional[Renderer]:
        """
        Offer parsed to each renderer in registration order.
        Returns the renderer that claimed it, or None.
        """
        for renderer in self._renderers:
            try:
                claimed = renderer.try_render(parsed)
            except Exception:
                logger.exception(f"Renderer {type(renderer).__name__} failed on {parsed.host}")
                continue
            if claimed is True:
                return renderer
        return None
