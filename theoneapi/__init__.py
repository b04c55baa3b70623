from theoneapi.client import TheOneApi
from theoneapi.clients.results import FailureReason, FetchResult
from theoneapi.clients.transport import TheOneApiClientError
from theoneapi.core.config import ClientConfig, TheOneApiConfigError, TheOneApiError
from theoneapi.schemas.models import Book, Chapter, Character, Document, Envelope, Movie, Quote
from theoneapi.schemas.query import Eq, Exc, Exist, Gt, Gte, Inc, ListOptions, Lt, Neq, Pagination, Sort
from theoneapi.services.query_params import compile_list_params

__all__ = [
    "Book",
    "Chapter",
    "Character",
    "ClientConfig",
    "Document",
    "Envelope",
    "Eq",
    "Exc",
    "Exist",
    "FailureReason",
    "FetchResult",
    "Gt",
    "Gte",
    "Inc",
    "ListOptions",
    "Lt",
    "Movie",
    "Neq",
    "Pagination",
    "Quote",
    "Sort",
    "TheOneApi",
    "TheOneApiClientError",
    "TheOneApiConfigError",
    "TheOneApiError",
    "compile_list_params",
]
