from __future__ import annotations

import httpx

from theoneapi.clients.transport import TheOneApiTransport
from theoneapi.core.config import ClientConfig, get_client_config, require_api_key
from theoneapi.schemas.models import Book, Chapter, Character, Movie, Quote
from theoneapi.services.resources import (
    BookRecord,
    ChapterRecord,
    CharacterRecord,
    MovieRecord,
    QuoteRecord,
    Resource,
    ResourceAccessor,
    ResourceRequester,
    build_accessors,
)


class TheOneApi:
    """Async client for The One API.

    Instantiate once with an API key from https://the-one-api.dev::

        lotr = TheOneApi(api_key="YOUR_API_KEY")

        books = await lotr.book.list()
        fellowship = await lotr.book.by_id("5cf5805fb53e011a64671582").get()
        chapters = await lotr.book.by_id("5cf5805fb53e011a64671582").chapters()

        aragorn = lotr.character.by_id("5cd99d4bde30eff6ebccfbe6")
        quotes = await aragorn.quotes({"pagination": {"limit": 5}})

        long_movies = await lotr.movie.list({"filter": {"runtime_in_minutes": {"gt": 160}}})

    Every request-path method returns ``None`` on failure instead of
    raising; the ``*_result`` variants keep the failure reason.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        defaults = ClientConfig()
        self._transport = TheOneApiTransport(
            api_key=require_api_key(api_key),
            base_url=base_url or defaults.base_url,
            timeout_seconds=timeout_seconds if timeout_seconds is not None else defaults.timeout_seconds,
            transport=transport,
        )

        accessors = build_accessors(ResourceRequester(self._transport))
        self.book: ResourceAccessor[Book, BookRecord] = accessors[Resource.BOOK]
        self.chapter: ResourceAccessor[Chapter, ChapterRecord] = accessors[Resource.CHAPTER]
        self.movie: ResourceAccessor[Movie, MovieRecord] = accessors[Resource.MOVIE]
        self.character: ResourceAccessor[Character, CharacterRecord] = accessors[Resource.CHARACTER]
        self.quote: ResourceAccessor[Quote, QuoteRecord] = accessors[Resource.QUOTE]

    @classmethod
    def from_config(
        cls,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> TheOneApi:
        resolved = config or get_client_config()
        return cls(
            resolved.api_key,
            base_url=resolved.base_url,
            timeout_seconds=resolved.timeout_seconds,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._transport.base_url
