"""View state machine: key handling, cursor bounds, and search patterns."""

from .keys import bottom_cursor, clamp_cursor, handle_key, handle_normal_key, handle_search_key, page_step
from .search import compile_search_pattern, first_match_span, refresh_search_pattern

__all__ = [
    "bottom_cursor",
    "clamp_cursor",
    "compile_search_pattern",
    "first_match_span",
    "handle_key",
    "handle_normal_key",
    "handle_search_key",
    "page_step",
    "refresh_search_pattern",
]
