from .client import DEFAULT_API_URL, HttpxOrionoidClient
from .parser import parse_search_response, parse_stream

__all__ = [
    "DEFAULT_API_URL",
    "HttpxOrionoidClient",
    "parse_search_response",
    "parse_stream",
]
