"""Request building and dispatch."""

from .api import JSON_HEADERS, PLAINTEXT_HEADERS, HttpApi
from .uri import Target, map_to_url_encoded_parameters, parse_target, with_query

__all__ = [
    "HttpApi",
    "JSON_HEADERS",
    "PLAINTEXT_HEADERS",
    "Target",
    "map_to_url_encoded_parameters",
    "parse_target",
    "with_query",
]
