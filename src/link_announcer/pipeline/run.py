"""Per-message link pipeline.

extract -> parse -> renderer hooks -> validate -> shorten -> repeat check
-> title -> cache update -> format. Candidates are handled one at a time, in
the order they appear in the message; a bad link never stops the others.
"""

import threading
import time
from typing import Callable, Iterable, List, Optional

from ..config import Settings, get_settings, load_tld_list
from ..errors import LinkRejected, MalformedURL, RejectReason
from ..log import get_logger
from ..renderers import Renderer, RendererChain
from ..rendering.chat_format import render_messages
from ..retrieval.fetch import Fetcher
from ..retrieval.normalize import canonicalize, parse_url
from ..retrieval.title import TitleResolver
from ..retrieval.url import extract_candidates
from ..retrieval.validate import LinkValidator
from ..schemas.links import Candidate, MatchResult
from ..shorten import BaseShortener, build_shortener
from ..store.cache import LinkCache

logger = get_logger("pipeline")

SendFn = Callable[[str, str], None]

class LinkPipeline:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        fetcher: Optional[Fetcher] = None,
        shortener: Optional[BaseShortener] = None,
        titles: Optional[TitleResolver] = None,
        cache: Optional[LinkCache] = None,
        validator: Optional[LinkValidator] = None,
        renderers: Iterable[Renderer] = (),
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings or get_settings()
        s = self.settings
        fetcher = fetcher or Fetcher(timeout=s.URL_FETCH_TIMEOUT, user_agent=s.URL_USER_AGENT)

        # Raises ShortenerConfigError for a bad URL_SHORTENER; callers let it stop startup
        self.shortener = shortener or build_shortener(s.URL_SHORTENER, fetcher)
        self.titles = titles or TitleResolver(
            fetcher, title_length=s.URL_TITLE_LENGTH, show_errors=s.URL_SHOW_ERRORS
        )
        self.cache = cache or LinkCache(expire_seconds=s.URL_EXPIRE_SECONDS, limit=s.URL_CACHE_LIMIT)
        self.validator = validator or LinkValidator(
            tlds=load_tld_list(s.URL_TLD_PATH), ssl_fallback=s.URL_SSL_FALLBACK
        )
        self.renderers = RendererChain()
        for renderer in renderers:
            self.renderers.register(renderer)
        self.clock = clock
        # Socket Mode dispatches events on worker threads; the cache is shared
        self._cache_lock = threading.Lock()

        logger.debug(
            f"Pipeline ready: shortener={type(self.shortener).__name__}, "
            f"tlds={len(self.validator.tlds)}, expire={self.cache.expire_seconds}s, limit={self.cache.limit}"
        )

    def register_renderer(self, renderer: Renderer) -> None:
        self.renderers.register(renderer)

    def _reject(self, result: MatchResult, err: LinkRejected) -> MatchResult:
        logger.debug(f"Invalid Url: {err.detail or err.reason.value}. ({err.url})")
        result.rejected_reason = err.reason
        return result

    def process_candidate(self, candidate: Candidate, channel: str) -> MatchResult:
        result = MatchResult(url=candidate.url)
        try:
            self.validator.check_candidate(candidate)

            try:
                parsed = parse_url(candidate.url)
            except MalformedURL as e:
                raise LinkRejected(RejectReason.MALFORMED_URL, candidate.url, "Could not parse the URL") from e
            result.parsed = parsed

            renderer = self.renderers.try_render(parsed)
            if renderer is not None:
                result.handled_by = type(renderer).__name__
                logger.debug(f"Handled by renderer: {result.handled_by} ({candidate.url})")
                return result

            self.validator.check_parsed(candidate, parsed)
            url = canonicalize(parsed)
            result.url = url

            short_url = self._shorten(url)
            if not short_url:
                raise LinkRejected(RejectReason.SHORTEN_FAILED, url, "Unable to shorten")
            result.short_url = short_url

            with self._cache_lock:
                repeated = self.cache.seen(channel, url, short_url, now=self.clock())
            if repeated:
                raise LinkRejected(RejectReason.CACHE_SUPPRESSED, url, "URL is in the cache")

            result.title = self.titles.resolve(url)

            with self._cache_lock:
                self.cache.record(channel, url, short_url, now=self.clock())
        except LinkRejected as err:
            return self._reject(result, err)
        return result

    def _shorten(self, url: str) -> Optional[str]:
        try:
            return self.shortener.shorten(url)
        except Exception:
            logger.exception(f"Shortener {type(self.shortener).__name__} failed on {url}")
            return None

    def scan(self, text: str, channel: str) -> List[MatchResult]:
        return [
            self.process_candidate(candidate, channel)
            for candidate in extract_candidates(text, self.settings.URL_DETECT_SCHEMELESS)
        ]

    def process_message(self, text: str, channel: str, nick: str) -> List[str]:
        """Return the outgoing messages for one incoming chat line."""
        results = self.scan(text, channel)
        accepted = [r for r in results if r.accepted]
        return render_messages(
            accepted,
            nick=nick,
            message_format=self.settings.URL_MESSAGE_FORMAT,
            base_format=self.settings.URL_BASE_FORMAT,
            merge_links=self.settings.URL_MERGE_LINKS,
        )

    def handle_message(self, text: str, channel: str, nick: str, send: SendFn) -> int:
        messages = self.process_message(text, channel, nick)
        for message in messages:
            send(channel, message)
        if messages:
            logger.info(f"Sent {len(messages)} link message(s) to {channel}")
        return len(messages)
