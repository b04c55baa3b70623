from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from enum import Enum
from typing import Any, Generic, TypeVar
from urllib.parse import quote

from theoneapi.clients.results import FailureReason, FetchResult
from theoneapi.clients.transport import TheOneApiClientError, TheOneApiTransport
from theoneapi.observability.metrics import record_request
from theoneapi.schemas.models import Book, Chapter, Character, D, Document, Envelope, Movie, Quote
from theoneapi.schemas.query import ListOptions
from theoneapi.services.query_params import compile_list_params

logger = logging.getLogger(__name__)

QueryInput = ListOptions | Mapping[str, Any] | None
R = TypeVar("R", bound="RecordAccessor[Any]")


class Resource(str, Enum):
    BOOK = "/book"
    CHAPTER = "/chapter"
    MOVIE = "/movie"
    CHARACTER = "/character"
    QUOTE = "/quote"

    @property
    def label(self) -> str:
        return self.value.lstrip("/")

    @property
    def authenticated(self) -> bool:
        # Book collection and record endpoints are public.
        return self is not Resource.BOOK


class ResourceRequester:
    """Issues one request and turns every outcome into a ``FetchResult``."""

    def __init__(self, transport: TheOneApiTransport) -> None:
        self._transport = transport

    async def envelope(
        self,
        label: str,
        path: str,
        options: QueryInput,
        document: type[D],
        with_auth: bool,
    ) -> FetchResult[Envelope[D]]:
        params = compile_list_params(options, document=document)
        started = time.perf_counter()
        try:
            envelope = await self._transport.fetch_envelope(path, params, with_auth, document)
        except TheOneApiClientError as exc:
            latency_ms = (time.perf_counter() - started) * 1000
            record_request(label, latency_ms, failure=exc.reason.value)
            logger.warning(
                "theoneapi.request.failed",
                extra={
                    "resource": label,
                    "path": path,
                    "params": params,
                    "status_code": exc.status_code,
                    "reason": exc.reason.value,
                    "latency_ms": round(latency_ms, 2),
                    "detail": str(exc),
                },
            )
            return FetchResult.failed(exc.reason, status_code=exc.status_code, detail=str(exc))

        latency_ms = (time.perf_counter() - started) * 1000
        record_request(label, latency_ms)
        logger.debug(
            "theoneapi.request.success",
            extra={"resource": label, "path": path, "params": params, "latency_ms": round(latency_ms, 2)},
        )
        return FetchResult.success(envelope)

    async def docs(
        self,
        label: str,
        path: str,
        options: QueryInput,
        document: type[D],
        with_auth: bool,
    ) -> FetchResult[list[D]]:
        result = await self.envelope(label, path, options, document, with_auth)
        if not result.ok:
            return FetchResult.failed(result.failure, status_code=result.status_code, detail=result.detail)
        return FetchResult.success(result.value.docs or [])


class RecordAccessor(Generic[D]):
    """A single document addressed by id; ``get`` fetches it on demand."""

    def __init__(
        self,
        requester: ResourceRequester,
        resource: Resource,
        document: type[D],
        record_id: str,
    ) -> None:
        self._requester = requester
        self._resource = resource
        self._document = document
        self.id = record_id

    @property
    def path(self) -> str:
        return f"{self._resource.value}/{quote(self.id, safe='')}"

    async def get_result(self) -> FetchResult[D]:
        if not self.id.strip():
            return FetchResult.failed(FailureReason.NOT_FOUND, detail="Empty id")

        result = await self._requester.docs(
            self._resource.label,
            self.path,
            None,
            self._document,
            self._resource.authenticated,
        )
        if not result.ok:
            return FetchResult.failed(result.failure, status_code=result.status_code, detail=result.detail)
        if not result.value:
            logger.debug("theoneapi.record.not_found", extra={"resource": self._resource.label, "path": self.path})
            return FetchResult.failed(FailureReason.NOT_FOUND)
        return FetchResult.success(result.value[0])

    async def get(self) -> D | None:
        return (await self.get_result()).unwrap_or_none()

    async def _related_result(self, relation: Resource, document: type[Document], options: QueryInput) -> FetchResult[Any]:
        if not self.id.strip():
            return FetchResult.failed(FailureReason.NOT_FOUND, detail="Empty id")

        # Nested listings always require the token, including those under /book.
        return await self._requester.docs(
            f"{self._resource.label}.{relation.label}",
            f"{self.path}{relation.value}",
            options,
            document,
            True,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class ChapterRecord(RecordAccessor[Chapter]):
    pass


class QuoteRecord(RecordAccessor[Quote]):
    pass


class BookRecord(RecordAccessor[Book]):
    async def chapters_result(self, options: QueryInput = None) -> FetchResult[list[Chapter]]:
        return await self._related_result(Resource.CHAPTER, Chapter, options)

    async def chapters(self, options: QueryInput = None) -> list[Chapter] | None:
        return (await self.chapters_result(options)).unwrap_or_none()


class QuotedRecord(RecordAccessor[D]):
    async def quotes_result(self, options: QueryInput = None) -> FetchResult[list[Quote]]:
        return await self._related_result(Resource.QUOTE, Quote, options)

    async def quotes(self, options: QueryInput = None) -> list[Quote] | None:
        return (await self.quotes_result(options)).unwrap_or_none()


class MovieRecord(QuotedRecord[Movie]):
    pass


class CharacterRecord(QuotedRecord[Character]):
    pass


class ResourceAccessor(Generic[D, R]):
    """Collection-level queries for one resource kind."""

    def __init__(
        self,
        requester: ResourceRequester,
        resource: Resource,
        document: type[D],
        record_type: type[R],
    ) -> None:
        self._requester = requester
        self.resource = resource
        self.document = document
        self._record_type = record_type

    async def page_result(self, options: QueryInput = None) -> FetchResult[Envelope[D]]:
        return await self._requester.envelope(
            self.resource.label,
            self.resource.value,
            options,
            self.document,
            self.resource.authenticated,
        )

    async def page(self, options: QueryInput = None) -> Envelope[D] | None:
        return (await self.page_result(options)).unwrap_or_none()

    async def list_result(self, options: QueryInput = None) -> FetchResult[list[D]]:
        return await self._requester.docs(
            self.resource.label,
            self.resource.value,
            options,
            self.document,
            self.resource.authenticated,
        )

    async def list(self, options: QueryInput = None) -> list[D] | None:
        return (await self.list_result(options)).unwrap_or_none()

    def by_id(self, record_id: str) -> R:
        return self._record_type(self._requester, self.resource, self.document, record_id)

    def __repr__(self) -> str:
        return f"ResourceAccessor({self.resource.value!r})"


def build_accessors(requester: ResourceRequester) -> dict[Resource, ResourceAccessor[Any, Any]]:
    return {
        Resource.BOOK: ResourceAccessor(requester, Resource.BOOK, Book, BookRecord),
        Resource.CHAPTER: ResourceAccessor(requester, Resource.CHAPTER, Chapter, ChapterRecord),
        Resource.MOVIE: ResourceAccessor(requester, Resource.MOVIE, Movie, MovieRecord),
        Resource.CHARACTER: ResourceAccessor(requester, Resource.CHARACTER, Character, CharacterRecord),
        Resource.QUOTE: ResourceAccessor(requester, Resource.QUOTE, Quote, QuoteRecord),
    }
